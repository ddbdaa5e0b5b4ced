"""
Schéma du tableau de bord (page d'accueil).
"""

from typing import List

from pydantic import BaseModel

from app.schemas.course import Course
from app.schemas.student import Student


class Overview(BaseModel):
    student_count: int
    course_count: int
    events_this_month: int
    total_events: int
    recent_courses: List[Course]
    recent_students: List[Student]
