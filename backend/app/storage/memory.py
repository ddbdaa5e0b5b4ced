"""
Stockage en mémoire : maquette du stockage local de l'ancien tableau de bord.
Utilisé par les tests et pour les essais sans base de données (STORAGE_BACKEND=memory).
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from app.storage.base import EntityKind, apply_sort_and_limit, new_identity, writable_fields

logger = logging.getLogger(__name__)


class InMemoryStore:
    def __init__(self):
        self._collections: Dict[EntityKind, List[Dict[str, Any]]] = {kind: [] for kind in EntityKind}

    def list(self, kind: EntityKind, sort: Optional[str] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        records = copy.deepcopy(self._collections[kind])
        return apply_sort_and_limit(records, sort, limit)

    def get(self, kind: EntityKind, record_id: str) -> Optional[Dict[str, Any]]:
        index = self._index_of(kind, record_id)
        if index is None:
            return None
        return copy.deepcopy(self._collections[kind][index])

    def create(self, kind: EntityKind, fields: Dict[str, Any]) -> Dict[str, Any]:
        record_id, created = new_identity()
        record = {
            **copy.deepcopy(writable_fields(fields)),
            "id": record_id,
            "created_date": created.isoformat(),
        }
        # Nouvel enregistrement en tête de liste
        self._collections[kind].insert(0, record)
        logger.debug("Enregistrement %s créé : %s", kind.value, record_id)
        return copy.deepcopy(record)

    def update(self, kind: EntityKind, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        index = self._index_of(kind, record_id)
        if index is None:
            return None
        updated = {**self._collections[kind][index], **copy.deepcopy(writable_fields(fields))}
        self._collections[kind][index] = updated
        return copy.deepcopy(updated)

    def delete(self, kind: EntityKind, record_id: str) -> bool:
        index = self._index_of(kind, record_id)
        if index is None:
            return False
        del self._collections[kind][index]
        return True

    def _index_of(self, kind: EntityKind, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._collections[kind]):
            if record["id"] == record_id:
                return index
        return None
