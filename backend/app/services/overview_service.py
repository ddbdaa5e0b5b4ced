"""
Chiffres du tableau de bord : effectifs, nombre de cours et séances du mois.
"""

import datetime as dt
from typing import Optional, Sequence

from app.schemas.course import Course
from app.schemas.event import ScheduleEvent
from app.schemas.overview import Overview
from app.schemas.student import Student
from app.services.course_service import get_courses
from app.services.event_service import get_events
from app.services.student_service import get_students
from app.storage.base import StoragePort

RECENT_ITEMS = 5


def compute_overview(
    courses: Sequence[Course],
    students: Sequence[Student],
    events: Sequence[ScheduleEvent],
    today: dt.date,
    tz: dt.tzinfo,
) -> Overview:
    """Les listes reçues sont supposées triées du plus récent au plus ancien."""
    return Overview(
        student_count=len(students),
        course_count=len(courses),
        events_this_month=sum(1 for e in events if _same_month(e.date_time.astimezone(tz), today)),
        total_events=len(events),
        recent_courses=list(courses[:RECENT_ITEMS]),
        recent_students=list(students[:RECENT_ITEMS]),
    )


def get_overview(store: StoragePort, tz: dt.tzinfo, today: Optional[dt.date] = None) -> Overview:
    today = today or dt.datetime.now(tz).date()
    return compute_overview(get_courses(store), get_students(store), get_events(store), today, tz)


def _same_month(moment: dt.datetime, today: dt.date) -> bool:
    return moment.year == today.year and moment.month == today.month
