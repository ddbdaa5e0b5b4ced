"""
Statistiques de présence par élève : charge les collections depuis le stockage
puis délègue les calculs à attendance_accounting.
"""

from typing import List, Optional

from app.schemas.attendance import SortMode, StudentStats
from app.services.attendance_accounting import compute_student_stats, rank_students, search_students
from app.services.event_service import get_events
from app.services.student_service import get_student, get_students
from app.storage.base import StoragePort


def get_students_stats(
    store: StoragePort,
    sort_mode: SortMode = SortMode.REMAINING_DESC,
    query: Optional[str] = None,
) -> List[StudentStats]:
    """Statistiques de tous les élèves, triées puis filtrées par nom."""
    events = get_events(store, sort=None)
    stats = [compute_student_stats(student, events) for student in get_students(store)]
    return search_students(rank_students(stats, sort_mode), query)


def get_student_stats(
    store: StoragePort,
    student_id: str,
    history_limit: Optional[int] = None,
) -> Optional[StudentStats]:
    """
    Statistiques d'un élève, ou None s'il n'existe pas.
    history_limit tronque l'historique (les plus récentes d'abord) sans changer les compteurs.
    """
    student = get_student(store, student_id)
    if student is None:
        return None

    stats = compute_student_stats(student, get_events(store, sort=None))
    if history_limit is not None:
        stats = stats.model_copy(update={"attendance_records": stats.attendance_records[:history_limit]})
    return stats
