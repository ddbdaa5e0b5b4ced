"""
Service métier pour la gestion des élèves et de leurs inscriptions.
"""

import logging
from typing import Dict, List, Optional

from app.schemas.student import Enrollment, EnrollmentIn, Student, StudentCreate, StudentUpdate
from app.storage.base import EntityKind, StoragePort

logger = logging.getLogger(__name__)


def create_student(store: StoragePort, data: StudentCreate) -> Student:
    """
    Crée un élève avec ses inscriptions.
    Lève une ValueError si une inscription référence un cours inexistant.
    """
    fields = data.model_dump(mode="json", exclude={"enrollments"})
    fields["enrollments"] = _resolve_enrollments(store, data.enrollments)

    student = Student.model_validate(store.create(EntityKind.STUDENT, fields))
    logger.info("Élève créé : %s (%s) — %d inscription(s)", student.name, student.id, len(student.enrollments))
    return student


def get_students(store: StoragePort, sort: Optional[str] = "-created_date", limit: Optional[int] = None) -> list[Student]:
    """Retourne les élèves, les plus récents en premier par défaut."""
    return [Student.model_validate(r) for r in store.list(EntityKind.STUDENT, sort, limit)]


def get_student(store: StoragePort, student_id: str) -> Optional[Student]:
    """Retourne un élève par son ID, ou None si inexistant."""
    record = store.get(EntityKind.STUDENT, student_id)
    if record is None:
        return None
    return Student.model_validate(record)


def update_student(store: StoragePort, student_id: str, data: StudentUpdate) -> Optional[Student]:
    """
    Met à jour les champs fournis d'un élève.
    Si enrollments est fourni, il remplace toutes les inscriptions existantes.
    """
    current = get_student(store, student_id)
    if current is None:
        return None

    fields = data.model_dump(mode="json", exclude_unset=True, exclude={"enrollments"})
    if data.enrollments is not None:
        known = {e.course_id: e for e in current.enrollments}
        fields["enrollments"] = _resolve_enrollments(store, data.enrollments, known)

    record = store.update(EntityKind.STUDENT, student_id, fields)
    if record is None:
        return None
    return Student.model_validate(record)


def delete_student(store: StoragePort, student_id: str) -> bool:
    """
    Supprime un élève. Ses présences restent dans l'historique des séances.
    Retourne True si supprimé, False si introuvable.
    """
    deleted = store.delete(EntityKind.STUDENT, student_id)
    if deleted:
        logger.info("Élève supprimé : %s", student_id)
    return deleted


def _resolve_enrollments(
    store: StoragePort,
    enrollments: List[EnrollmentIn],
    known: Optional[Dict[str, Enrollment]] = None,
) -> list[dict]:
    """
    Recopie le nom du cours dans chaque inscription.
    Une inscription déjà connue dont le cours a été supprimé garde son ancien nom.
    """
    known = known or {}
    resolved = []
    for enrollment in enrollments:
        course = store.get(EntityKind.COURSE, enrollment.course_id)
        if course is not None:
            course_name = course["name"]
        elif enrollment.course_id in known:
            course_name = known[enrollment.course_id].course_name
        else:
            logger.warning("Inscription refusée : cours %s introuvable", enrollment.course_id)
            raise ValueError(f"Cours introuvable : {enrollment.course_id}")

        resolved.append(Enrollment(
            course_id=enrollment.course_id,
            course_name=course_name,
            total_purchased=enrollment.total_purchased,
        ).model_dump(mode="json"))
    return resolved
