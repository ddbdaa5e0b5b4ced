"""
Router pour les élèves et leurs inscriptions.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.schemas.student import Student, StudentCreate, StudentUpdate
from app.services import student_service
from app.storage import StoragePort, get_store

router = APIRouter(prefix="/api/v1/students", tags=["Élèves"])


@router.get("", response_model=List[Student], summary="Lister les élèves")
def list_students(
    sort: Optional[str] = Query("-created_date", description="Champ de tri, préfixé par '-' pour décroissant"),
    limit: Optional[int] = Query(None, ge=1),
    store: StoragePort = Depends(get_store),
):
    return student_service.get_students(store, sort, limit)


@router.post("", response_model=Student, status_code=201, summary="Créer un élève")
def create_student(data: StudentCreate, store: StoragePort = Depends(get_store)):
    """Crée un élève. Chaque inscription doit référencer un cours existant, une seule fois."""
    try:
        return student_service.create_student(store, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/{student_id}", response_model=Student, summary="Détail d'un élève")
def get_student(student_id: str, store: StoragePort = Depends(get_store)):
    student = student_service.get_student(store, student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.put("/{student_id}", response_model=Student, summary="Modifier un élève")
def update_student(student_id: str, data: StudentUpdate, store: StoragePort = Depends(get_store)):
    """Met à jour les champs fournis d'un élève. Les champs absents ne sont pas modifiés."""
    try:
        student = student_service.update_student(store, student_id, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if student is None:
        raise HTTPException(status_code=404, detail="Élève introuvable.")
    return student


@router.delete("/{student_id}", status_code=204, summary="Supprimer un élève")
def delete_student(student_id: str, store: StoragePort = Depends(get_store)):
    """Supprime un élève. Son historique de présence reste dans les séances."""
    if not student_service.delete_student(store, student_id):
        raise HTTPException(status_code=404, detail="Élève introuvable.")
