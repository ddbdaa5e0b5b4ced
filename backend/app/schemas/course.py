"""
Schémas Pydantic pour les cours.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

# Couleur de calendrier utilisée quand un cours n'en définit pas
DEFAULT_COURSE_COLOR = "#4F46E5"

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _check_color(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    if not HEX_COLOR_RE.match(v):
        raise ValueError("Couleur invalide. Format attendu : #RRGGBB.")
    return v.upper()


class CourseCreate(BaseModel):
    """Schéma de création d'un cours (POST /courses)."""
    name: str
    description: Optional[str] = None
    color_hex: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom du cours ne peut pas être vide.")
        return v.strip()

    @field_validator("color_hex")
    @classmethod
    def valid_color(cls, v: Optional[str]) -> Optional[str]:
        return _check_color(v)


class CourseUpdate(BaseModel):
    """Seuls les champs d'affichage sont modifiables : l'id reste référencé par les séances."""
    name: Optional[str] = None
    description: Optional[str] = None
    color_hex: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: Optional[str]) -> Optional[str]:
        # Appelé seulement si le champ est fourni : null explicite refusé
        if v is None or not v.strip():
            raise ValueError("Le nom du cours ne peut pas être vide.")
        return v.strip()

    @field_validator("color_hex")
    @classmethod
    def valid_color(cls, v: Optional[str]) -> Optional[str]:
        return _check_color(v)


class Course(BaseModel):
    """Cours tel que stocké et renvoyé par l'API."""
    id: str
    name: str
    description: Optional[str] = None
    color_hex: Optional[str] = None
    created_date: datetime
