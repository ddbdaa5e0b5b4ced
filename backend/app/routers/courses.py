"""
Router pour la gestion des cours.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.schemas.course import Course, CourseCreate, CourseUpdate
from app.services import course_service
from app.storage import StoragePort, get_store

router = APIRouter(prefix="/api/v1/courses", tags=["Cours"])


@router.post("", response_model=Course, status_code=201, summary="Créer un cours")
def create_course(data: CourseCreate, store: StoragePort = Depends(get_store)):
    return course_service.create_course(store, data)


@router.get("", response_model=List[Course], summary="Lister les cours")
def list_courses(
    sort: Optional[str] = Query("-created_date", description="Champ de tri, préfixé par '-' pour décroissant"),
    limit: Optional[int] = Query(None, ge=1),
    store: StoragePort = Depends(get_store),
):
    """Retourne les cours, les plus récents en premier par défaut."""
    return course_service.get_courses(store, sort, limit)


@router.get("/{course_id}", response_model=Course, summary="Détail d'un cours")
def get_course(course_id: str, store: StoragePort = Depends(get_store)):
    course = course_service.get_course(store, course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="Cours introuvable.")
    return course


@router.put("/{course_id}", response_model=Course, summary="Modifier un cours")
def update_course(course_id: str, data: CourseUpdate, store: StoragePort = Depends(get_store)):
    """Met à jour le nom, la description ou la couleur d'un cours."""
    course = course_service.update_course(store, course_id, data)
    if course is None:
        raise HTTPException(status_code=404, detail="Cours introuvable.")
    return course


@router.delete("/{course_id}", status_code=204, summary="Supprimer un cours")
def delete_course(course_id: str, store: StoragePort = Depends(get_store)):
    """Supprime un cours. Les séances déjà planifiées sont conservées."""
    if not course_service.delete_course(store, course_id):
        raise HTTPException(status_code=404, detail="Cours introuvable.")
