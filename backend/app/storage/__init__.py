from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.storage.base import EntityKind, StoragePort
from app.storage.memory import InMemoryStore
from app.storage.sql import SqlDocumentStore

# Instance unique pour STORAGE_BACKEND=memory (vit le temps du processus)
memory_store = InMemoryStore()


def get_store(db: Session = Depends(get_db)) -> StoragePort:
    """Dépendance FastAPI — fournit le stockage configuré."""
    if settings.STORAGE_BACKEND == "memory":
        return memory_store
    return SqlDocumentStore(db)


__all__ = ["EntityKind", "InMemoryStore", "SqlDocumentStore", "StoragePort", "get_store", "memory_store"]
