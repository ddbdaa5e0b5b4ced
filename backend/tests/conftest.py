"""
Configuration partagée pour tous les tests.
Remplace le stockage par un InMemoryStore neuf pour éviter toute base de données réelle.
"""

import os

# Avant tout import de app.config : pas de création de table au démarrage de l'API
os.environ["STORAGE_BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.storage import get_store
from app.storage.memory import InMemoryStore


@pytest.fixture
def store():
    """Stockage vide, propre à chaque test."""
    return InMemoryStore()


@pytest.fixture
def client(store):
    """Client HTTP de test branché sur le stockage en mémoire du test."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
