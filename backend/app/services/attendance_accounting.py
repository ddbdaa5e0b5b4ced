"""
Comptabilité des présences et des séances achetées.

Fonctions pures : aucune lecture du stockage, aucune mutation des arguments.
Les enregistrements reçus sont déjà normalisés par les schémas Pydantic
(listes absentes → listes vides, statut absent → pending, date_time avec fuseau).

Règle de décompte : une séance est consommée quand l'élève est marqué présent OU absent.
Un congé (excused) ou une présence en attente (pending) ne décompte rien.
"""

from collections import Counter
from typing import Iterable, List, Optional, Sequence

from app.schemas.attendance import (
    AttendanceRecord,
    CourseStat,
    SortMode,
    StatusCounts,
    StudentStats,
)
from app.schemas.event import Attendee, AttendanceStatus, ScheduleEvent
from app.schemas.student import Enrollment, Student


def compute_student_stats(student: Student, events: Sequence[ScheduleEvent]) -> StudentStats:
    """
    Calcule les statistiques d'un élève à partir de toutes les séances connues.

    L'ordre de `events` n'influence que le départage des séances à la même date
    dans l'historique (tri stable).
    """
    records = []
    for event in events:
        attendee = _find_attendee(event, student.id)
        if attendee is None:
            continue
        records.append(AttendanceRecord(event=event, status=attendee.status, date=event.date_time))

    # Du plus récent au plus ancien ; sorted(reverse=True) reste stable
    records = sorted(records, key=lambda r: r.date, reverse=True)

    course_stats = [_course_stat(student.id, enrollment, events) for enrollment in student.enrollments]

    return StudentStats(
        student=student,
        attendance_records=records,
        status_counts=count_statuses(r.status for r in records),
        course_stats=course_stats,
        total_classes=len(records),
        total_remaining=sum(c.sessions_remaining for c in course_stats),
        has_completed_courses=any(c.sessions_remaining <= 0 for c in course_stats),
    )


def count_statuses(statuses: Iterable[AttendanceStatus]) -> StatusCounts:
    """Compte les présences par statut ; chaque statut connu a un compteur, même à zéro."""
    tally = Counter(statuses)
    return StatusCounts(**{status.value: tally.get(status, 0) for status in AttendanceStatus})


def rank_students(stats: Sequence[StudentStats], sort_mode: SortMode) -> List[StudentStats]:
    """
    Ordonne les statistiques des élèves sans modifier la séquence reçue.

    - remaining_desc / remaining_asc : par total de séances restantes
    - completed : élèves ayant au moins un cours terminé en premier (partition stable)
    - none : ordre d'entrée
    """
    if sort_mode is SortMode.REMAINING_DESC:
        return sorted(stats, key=lambda s: s.total_remaining, reverse=True)
    if sort_mode is SortMode.REMAINING_ASC:
        return sorted(stats, key=lambda s: s.total_remaining)
    if sort_mode is SortMode.COMPLETED:
        return sorted(stats, key=lambda s: not s.has_completed_courses)
    if sort_mode is SortMode.NONE:
        return list(stats)
    raise ValueError(f"Mode de tri inconnu : {sort_mode}")


def search_students(stats: Sequence[StudentStats], query: Optional[str]) -> List[StudentStats]:
    """Filtre par nom d'élève (sous-chaîne, insensible à la casse). L'ordre est conservé."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(stats)
    return [s for s in stats if needle in s.student.name.lower()]


def _find_attendee(event: ScheduleEvent, student_id: str) -> Optional[Attendee]:
    for attendee in event.attendees:
        if attendee.student_id == student_id:
            return attendee
    return None


def _course_stat(student_id: str, enrollment: Enrollment, events: Sequence[ScheduleEvent]) -> CourseStat:
    used = 0
    for event in events:
        if event.course_id != enrollment.course_id:
            continue
        attendee = _find_attendee(event, student_id)
        if attendee is not None and attendee.status.consumes_session:
            used += 1

    return CourseStat(
        course_id=enrollment.course_id,
        course_name=enrollment.course_name,
        total_purchased=enrollment.total_purchased,
        sessions_used=used,
        sessions_remaining=max(enrollment.total_purchased - used, 0),
    )
