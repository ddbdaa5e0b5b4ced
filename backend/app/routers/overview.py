"""
Router pour le tableau de bord.
"""

from fastapi import APIRouter, Depends

from app.config import settings
from app.schemas.overview import Overview
from app.services.overview_service import get_overview
from app.storage import StoragePort, get_store

router = APIRouter(prefix="/api/v1/overview", tags=["Tableau de bord"])


@router.get("", response_model=Overview, summary="Chiffres du tableau de bord")
def overview(store: StoragePort = Depends(get_store)):
    """Nombre d'élèves, de cours, de séances du mois en cours et de séances au total."""
    return get_overview(store, settings.tz)
