"""
Stockage SQLAlchemy : chaque enregistrement est un document JSON de la table records.
Le tri et la limite sont appliqués en mémoire, avec la même sémantique que InMemoryStore.
"""

import logging
from datetime import timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.record import Record
from app.storage.base import EntityKind, apply_sort_and_limit, new_identity, writable_fields

logger = logging.getLogger(__name__)


class SqlDocumentStore:
    def __init__(self, db: Session):
        self._db = db

    def list(self, kind: EntityKind, sort: Optional[str] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        rows = self._db.execute(
            select(Record)
            .where(Record.kind == kind.value)
            .order_by(Record.seq.desc())
        ).scalars().all()
        return apply_sort_and_limit([_to_dict(r) for r in rows], sort, limit)

    def get(self, kind: EntityKind, record_id: str) -> Optional[Dict[str, Any]]:
        row = self._find(kind, record_id)
        return _to_dict(row) if row is not None else None

    def create(self, kind: EntityKind, fields: Dict[str, Any]) -> Dict[str, Any]:
        record_id, created = new_identity()
        row = Record(id=record_id, kind=kind.value, created_date=created, data=writable_fields(fields))
        self._db.add(row)
        self._db.commit()
        self._db.refresh(row)
        logger.debug("Enregistrement %s créé : %s", kind.value, record_id)
        return _to_dict(row)

    def update(self, kind: EntityKind, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        row = self._find(kind, record_id)
        if row is None:
            return None

        # Nouveau dict : la colonne JSON n'est pas suivie en cas de mutation sur place
        row.data = {**(row.data or {}), **writable_fields(fields)}
        self._db.commit()
        self._db.refresh(row)
        return _to_dict(row)

    def delete(self, kind: EntityKind, record_id: str) -> bool:
        row = self._find(kind, record_id)
        if row is None:
            return False
        self._db.delete(row)
        self._db.commit()
        return True

    def _find(self, kind: EntityKind, record_id: str) -> Optional[Record]:
        return self._db.execute(
            select(Record).where(Record.kind == kind.value, Record.id == record_id)
        ).scalar()


def _to_dict(row: Record) -> Dict[str, Any]:
    created = row.created_date
    # SQLite ne conserve pas le fuseau horaire
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return {**(row.data or {}), "id": row.id, "created_date": created.isoformat()}
