"""
Schémas du calendrier mensuel des séances.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre le champ `date` et le type `datetime.date` dans Pydantic v2.
"""

import datetime as dt
from typing import List

from pydantic import BaseModel

from app.schemas.event import ScheduleEvent


class CalendarDay(BaseModel):
    date: dt.date
    in_month: bool  # False pour les jours des semaines de bord (mois précédent / suivant)
    events: List[ScheduleEvent]


class MonthCalendar(BaseModel):
    year: int
    month: int
    days: List[CalendarDay]
