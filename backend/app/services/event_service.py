"""
Service métier pour les séances planifiées et la saisie des présences.
"""

import logging
from typing import Dict, List, Optional

from app.schemas.course import DEFAULT_COURSE_COLOR
from app.schemas.event import Attendee, AttendanceStatus, EventCreate, EventUpdate, ScheduleEvent
from app.schemas.student import Student
from app.storage.base import EntityKind, StoragePort

logger = logging.getLogger(__name__)


def create_event(store: StoragePort, data: EventCreate) -> ScheduleEvent:
    """
    Planifie une séance d'un cours.

    Étapes :
    1. Recopier le nom et la couleur du cours dans la séance
    2. Construire la liste des participants (élèves inscrits au cours uniquement), tous en attente
    3. Enregistrer la séance

    Lève une ValueError si le cours ou un élève est introuvable, ou si un élève n'est pas inscrit au cours.
    """
    course = store.get(EntityKind.COURSE, data.course_id)
    if course is None:
        raise ValueError("Cours introuvable.")

    attendees = _build_attendees(store, data.course_id, data.student_ids)

    record = store.create(EntityKind.EVENT, {
        "course_id": data.course_id,
        "course_name": course["name"],
        "course_color": course.get("color_hex") or DEFAULT_COURSE_COLOR,
        "date_time": data.date_time.isoformat(),
        "note": data.note,
        "attendees": [a.model_dump(mode="json") for a in attendees],
    })
    event = ScheduleEvent.model_validate(record)

    logger.info(
        "Séance créée : %s le %s (%s) — %d participant(s)",
        event.course_name, event.date_time.isoformat(), event.id, len(event.attendees),
    )
    return event


def get_events(store: StoragePort, sort: Optional[str] = "-date_time", limit: Optional[int] = None) -> list[ScheduleEvent]:
    """Retourne les séances, de la plus tardive à la plus ancienne par défaut."""
    return [ScheduleEvent.model_validate(r) for r in store.list(EntityKind.EVENT, sort, limit)]


def get_event(store: StoragePort, event_id: str) -> Optional[ScheduleEvent]:
    """Retourne une séance par son ID, ou None si inexistante."""
    record = store.get(EntityKind.EVENT, event_id)
    if record is None:
        return None
    return ScheduleEvent.model_validate(record)


def update_event(store: StoragePort, event_id: str, data: EventUpdate) -> Optional[ScheduleEvent]:
    """
    Met à jour la date, la note et/ou la liste des participants d'une séance.
    Les élèves déjà présents dans la liste gardent leur statut.
    """
    event = get_event(store, event_id)
    if event is None:
        return None

    fields = data.model_dump(mode="json", exclude_unset=True, exclude={"student_ids"})
    fields.pop("date_time", None)
    if data.date_time is not None:
        # Même format que create_event : le tri par date_time compare des chaînes
        fields["date_time"] = data.date_time.isoformat()
    if data.student_ids is not None:
        previous = {a.student_id: a for a in event.attendees}
        attendees = _build_attendees(store, event.course_id, data.student_ids, previous)
        fields["attendees"] = [a.model_dump(mode="json") for a in attendees]

    record = store.update(EntityKind.EVENT, event_id, fields)
    if record is None:
        return None
    return ScheduleEvent.model_validate(record)


def set_attendance_status(
    store: StoragePort,
    event_id: str,
    student_id: str,
    status: AttendanceStatus,
) -> Optional[ScheduleEvent]:
    """
    Marque la présence d'un élève pour une séance.
    Retourne None si la séance est introuvable ; lève une ValueError si l'élève n'y participe pas.
    """
    event = get_event(store, event_id)
    if event is None:
        return None

    if not any(a.student_id == student_id for a in event.attendees):
        raise ValueError("Cet élève ne participe pas à la séance.")

    attendees = [
        a.model_copy(update={"status": status}) if a.student_id == student_id else a
        for a in event.attendees
    ]
    record = store.update(EntityKind.EVENT, event_id, {
        "attendees": [a.model_dump(mode="json") for a in attendees],
    })
    if record is None:
        return None

    logger.info("Présence : séance %s, élève %s → %s", event_id, student_id, status.value)
    return ScheduleEvent.model_validate(record)


def delete_event(store: StoragePort, event_id: str) -> bool:
    """Supprime une séance. Retourne True si supprimée, False si introuvable."""
    deleted = store.delete(EntityKind.EVENT, event_id)
    if deleted:
        logger.info("Séance supprimée : %s", event_id)
    return deleted


def _build_attendees(
    store: StoragePort,
    course_id: str,
    student_ids: List[str],
    previous: Optional[Dict[str, Attendee]] = None,
) -> list[Attendee]:
    """
    Construit la liste des participants d'une séance.
    Un élève déjà participant est conservé tel quel, même s'il a été supprimé ou désinscrit depuis.
    """
    previous = previous or {}
    attendees = []
    for student_id in student_ids:
        if student_id in previous:
            attendees.append(previous[student_id])
            continue

        record = store.get(EntityKind.STUDENT, student_id)
        if record is None:
            raise ValueError(f"Élève introuvable : {student_id}")

        student = Student.model_validate(record)
        if not any(e.course_id == course_id for e in student.enrollments):
            logger.warning("Participant refusé : %s n'est pas inscrit au cours %s", student.name, course_id)
            raise ValueError(f"L'élève {student.name} n'est pas inscrit à ce cours.")

        attendees.append(Attendee(student_id=student.id, student_name=student.name))
    return attendees
