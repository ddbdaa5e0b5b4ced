"""
Schémas des statistiques de présence calculées (jamais stockées).
"""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel

from app.schemas.event import AttendanceStatus, ScheduleEvent
from app.schemas.student import Student


class SortMode(str, Enum):
    REMAINING_DESC = "remaining_desc"
    REMAINING_ASC = "remaining_asc"
    COMPLETED = "completed"
    NONE = "none"


class CourseStat(BaseModel):
    """Consommation des séances achetées pour une inscription."""
    course_id: str
    course_name: str
    total_purchased: int
    sessions_used: int
    sessions_remaining: int


class AttendanceRecord(BaseModel):
    event: ScheduleEvent
    status: AttendanceStatus
    date: datetime


class StatusCounts(BaseModel):
    present: int = 0
    absent: int = 0
    excused: int = 0
    pending: int = 0


class StudentStats(BaseModel):
    student: Student
    attendance_records: List[AttendanceRecord]  # du plus récent au plus ancien
    status_counts: StatusCounts
    course_stats: List[CourseStat]
    total_classes: int
    total_remaining: int
    has_completed_courses: bool
