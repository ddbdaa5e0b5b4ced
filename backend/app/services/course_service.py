"""
Service métier pour la gestion des cours.
"""

import logging
from typing import Optional

from app.schemas.course import Course, CourseCreate, CourseUpdate
from app.storage.base import EntityKind, StoragePort

logger = logging.getLogger(__name__)


def create_course(store: StoragePort, data: CourseCreate) -> Course:
    """Crée un nouveau cours."""
    record = store.create(EntityKind.COURSE, data.model_dump(mode="json"))
    course = Course.model_validate(record)
    logger.info("Cours créé : %s (%s)", course.name, course.id)
    return course


def get_courses(store: StoragePort, sort: Optional[str] = "-created_date", limit: Optional[int] = None) -> list[Course]:
    """Retourne les cours, les plus récents en premier par défaut."""
    return [Course.model_validate(r) for r in store.list(EntityKind.COURSE, sort, limit)]


def get_course(store: StoragePort, course_id: str) -> Optional[Course]:
    """Retourne un cours par son ID, ou None si inexistant."""
    record = store.get(EntityKind.COURSE, course_id)
    if record is None:
        return None
    return Course.model_validate(record)


def update_course(store: StoragePort, course_id: str, data: CourseUpdate) -> Optional[Course]:
    """
    Met à jour les champs d'affichage fournis d'un cours.
    Les séances et inscriptions existantes gardent le nom et la couleur copiés à leur création.
    """
    record = store.update(EntityKind.COURSE, course_id, data.model_dump(mode="json", exclude_unset=True))
    if record is None:
        return None
    return Course.model_validate(record)


def delete_course(store: StoragePort, course_id: str) -> bool:
    """
    Supprime un cours. Les séances qui le référencent sont conservées.
    Retourne True si supprimé, False si introuvable.
    """
    if not store.delete(EntityKind.COURSE, course_id):
        return False

    orphans = sum(1 for e in store.list(EntityKind.EVENT) if e.get("course_id") == course_id)
    if orphans:
        logger.warning("Cours %s supprimé : %d séance(s) le référencent encore", course_id, orphans)
    else:
        logger.info("Cours supprimé : %s", course_id)
    return True
