"""
Router pour les statistiques de présence et les séances restantes.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.schemas.attendance import SortMode, StudentStats
from app.services import attendance_service
from app.storage import StoragePort, get_store

router = APIRouter(prefix="/api/v1/attendance", tags=["Présences"])


@router.get("", response_model=List[StudentStats], summary="Statistiques de tous les élèves")
def list_students_stats(
    sort: SortMode = Query(SortMode.REMAINING_DESC),
    q: Optional[str] = Query(None, description="Recherche sur le nom de l'élève"),
    store: StoragePort = Depends(get_store),
):
    """Séances restantes, compteurs de présence et historique de chaque élève."""
    return attendance_service.get_students_stats(store, sort, q)


@router.get("/{student_id}", response_model=StudentStats, summary="Statistiques d'un élève")
def get_student_stats(
    student_id: str,
    history_limit: Optional[int] = Query(None, ge=1, description="Nombre maximum de séances dans l'historique"),
    store: StoragePort = Depends(get_store),
):
    stats = attendance_service.get_student_stats(store, student_id, history_limit)
    if stats is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return stats
