"""
Port de stockage des enregistrements (cours, élèves, séances).

Les services ne manipulent jamais un état global : ils reçoivent un objet qui respecte
le contrat list / get / create / update / delete ci-dessous. Les enregistrements sont
des dictionnaires sérialisables en JSON ; la validation est faite par les schémas Pydantic.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

# Champs gérés par le stockage lui-même, jamais écrasés par create / update
RESERVED_FIELDS = {"id", "created_date"}

# Valeurs ordonnables ; les nombres (bool compris) précèdent les chaînes.
SORTABLE_TYPES = (str, int, float)


class EntityKind(str, Enum):
    COURSE = "course"
    STUDENT = "student"
    EVENT = "event"


class StoragePort(Protocol):
    def list(self, kind: EntityKind, sort: Optional[str] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Retourne les enregistrements d'un type, les plus récents en premier.
        `sort` est un nom de champ, préfixé par '-' pour un tri décroissant.
        """
        ...

    def get(self, kind: EntityKind, record_id: str) -> Optional[Dict[str, Any]]:
        ...

    def create(self, kind: EntityKind, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Ajoute un enregistrement avec un id généré et sa date de création."""
        ...

    def update(self, kind: EntityKind, record_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Fusionne les champs fournis. Retourne None si l'enregistrement est introuvable."""
        ...

    def delete(self, kind: EntityKind, record_id: str) -> bool:
        """Retourne True si un enregistrement a été supprimé."""
        ...


def new_identity() -> tuple[str, datetime]:
    """Génère l'identifiant et l'horodatage (UTC) d'un nouvel enregistrement."""
    return str(uuid.uuid4()), datetime.now(timezone.utc)


def writable_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in RESERVED_FIELDS}


def apply_sort_and_limit(
    records: List[Dict[str, Any]],
    sort: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Trie (de façon stable) puis tronque une liste d'enregistrements.
    Les enregistrements sans le champ de tri, ou dont la valeur n'est pas un scalaire
    (liste, dictionnaire), sont placés en fin de liste, quel que soit le sens.
    """
    if sort:
        descending = sort.startswith("-")
        field = sort[1:] if descending else sort
        present = [r for r in records if isinstance(r.get(field), SORTABLE_TYPES)]
        missing = [r for r in records if not isinstance(r.get(field), SORTABLE_TYPES)]
        # reverse=True conserve l'ordre relatif des égalités
        records = sorted(present, key=lambda r: _sort_key(r[field]), reverse=descending) + missing

    if limit is not None:
        records = records[:limit]
    return list(records)


def _sort_key(value: Any) -> tuple:
    return (isinstance(value, str), value)
