"""
Schémas Pydantic pour les élèves et leurs inscriptions (séances achetées par cours).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _unique_courses(enrollments):
    seen = set()
    for enrollment in enrollments:
        if enrollment.course_id in seen:
            raise ValueError(f"Le cours {enrollment.course_id} est inscrit plusieurs fois.")
        seen.add(enrollment.course_id)
    return enrollments


class EnrollmentIn(BaseModel):
    """Inscription saisie par l'utilisateur. Le nom du cours est résolu côté serveur."""
    course_id: str
    total_purchased: int = Field(ge=0)


class Enrollment(BaseModel):
    """Achat de `total_purchased` séances d'un cours (imbriqué dans l'élève)."""
    course_id: str
    course_name: str = ""
    total_purchased: int = 0


class StudentCreate(BaseModel):
    """Schéma de création d'un élève (POST /students)."""
    name: str
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    note: Optional[str] = None
    enrollments: List[EnrollmentIn] = []

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom ne peut pas être vide.")
        return v.strip()

    @field_validator("email", "phone", "note", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)

    @field_validator("enrollments")
    @classmethod
    def one_enrollment_per_course(cls, v: List[EnrollmentIn]) -> List[EnrollmentIn]:
        return _unique_courses(v)


class StudentUpdate(BaseModel):
    """Schéma de mise à jour (PUT /students/{id}). Les inscriptions fournies remplacent les anciennes."""
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    note: Optional[str] = None
    enrollments: Optional[List[EnrollmentIn]] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        # Appelé seulement si le champ est fourni : null explicite refusé
        if v is None or not v.strip():
            raise ValueError("Le nom ne peut pas être vide.")
        return v.strip()

    @field_validator("email", "phone", "note", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)

    @field_validator("enrollments")
    @classmethod
    def one_enrollment_per_course(cls, v: Optional[List[EnrollmentIn]]) -> Optional[List[EnrollmentIn]]:
        return _unique_courses(v) if v is not None else v


class Student(BaseModel):
    """Élève normalisé : `enrollments` est toujours une liste."""
    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    note: Optional[str] = None
    enrollments: List[Enrollment] = []
    created_date: datetime

    @field_validator("enrollments", mode="before")
    @classmethod
    def missing_is_empty(cls, v):
        return [] if v is None else v
