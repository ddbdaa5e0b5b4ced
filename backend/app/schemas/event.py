"""
Schémas Pydantic pour les séances planifiées et les présences des élèves.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, field_validator

from app.schemas.course import DEFAULT_COURSE_COLOR


class AttendanceStatus(str, Enum):
    PENDING = "pending"
    PRESENT = "present"
    ABSENT = "absent"
    EXCUSED = "excused"

    @property
    def consumes_session(self) -> bool:
        """Une présence ou une absence décompte une séance achetée ; pas un congé ni l'attente."""
        return self in (AttendanceStatus.PRESENT, AttendanceStatus.ABSENT)


def _as_utc(v: datetime) -> datetime:
    """Ramène un horodatage en UTC ; sans fuseau, il est interprété en UTC."""
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v.astimezone(timezone.utc)


class Attendee(BaseModel):
    """Présence d'un élève dans une séance."""
    student_id: str
    student_name: str = ""
    status: AttendanceStatus = AttendanceStatus.PENDING

    @field_validator("status", mode="before")
    @classmethod
    def missing_is_pending(cls, v):
        return AttendanceStatus.PENDING if v is None else v


class ScheduleEvent(BaseModel):
    """Séance normalisée : `attendees` est toujours une liste, `date_time` a toujours un fuseau."""
    id: str
    course_id: str
    course_name: str = ""
    course_color: str = DEFAULT_COURSE_COLOR
    date_time: datetime
    note: Optional[str] = None
    attendees: List[Attendee] = []
    created_date: datetime

    @field_validator("attendees", mode="before")
    @classmethod
    def missing_is_empty(cls, v):
        return [] if v is None else v

    @field_validator("course_color", mode="before")
    @classmethod
    def default_color(cls, v):
        return v or DEFAULT_COURSE_COLOR

    @field_validator("date_time")
    @classmethod
    def with_timezone(cls, v: datetime) -> datetime:
        return _as_utc(v)


def _dedupe(ids: List[str]) -> List[str]:
    # Conserve l'ordre de saisie
    return list(dict.fromkeys(ids))


class EventCreate(BaseModel):
    """Schéma de création d'une séance (POST /events). Tous les participants démarrent en attente."""
    course_id: str
    date_time: datetime
    note: Optional[str] = None
    student_ids: List[str] = []

    @field_validator("date_time")
    @classmethod
    def with_timezone(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @field_validator("student_ids")
    @classmethod
    def no_duplicates(cls, v: List[str]) -> List[str]:
        return _dedupe(v)


class EventUpdate(BaseModel):
    """
    Mise à jour d'une séance (PUT /events/{id}).
    Si student_ids est fourni, il remplace la liste des participants
    (les statuts déjà saisis sont conservés pour les élèves qui restent).
    """
    date_time: Optional[datetime] = None
    note: Optional[str] = None
    student_ids: Optional[List[str]] = None

    @field_validator("date_time")
    @classmethod
    def with_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v) if v is not None else v

    @field_validator("student_ids")
    @classmethod
    def no_duplicates(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _dedupe(v) if v is not None else v


class AttendanceStatusUpdate(BaseModel):
    """Corps de requête pour marquer la présence d'un élève."""
    status: AttendanceStatus
