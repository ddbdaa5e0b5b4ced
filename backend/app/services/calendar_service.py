"""
Calendrier mensuel des séances : semaines complètes du dimanche au samedi.
"""

import calendar
import datetime as dt
from collections import defaultdict
from typing import Sequence

from app.schemas.calendar import CalendarDay, MonthCalendar
from app.schemas.event import ScheduleEvent


def month_grid_bounds(year: int, month: int) -> tuple[dt.date, dt.date]:
    """
    Premier dimanche et dernier samedi de la grille affichant le mois.
    La grille est tronquée aux bornes de `datetime.date` (janvier 0001, décembre 9999).
    """
    first = dt.date(year, month, 1)
    last = dt.date(year, month, calendar.monthrange(year, month)[1])
    lead = min((first.weekday() + 1) % 7, (first - dt.date.min).days)
    trail = min((5 - last.weekday()) % 7, (dt.date.max - last).days)
    return first - dt.timedelta(days=lead), last + dt.timedelta(days=trail)


def build_month_calendar(
    events: Sequence[ScheduleEvent],
    year: int,
    month: int,
    tz: dt.tzinfo,
) -> MonthCalendar:
    """
    Répartit les séances par jour (date locale dans `tz`).
    Les séances d'un même jour sont triées par heure.
    """
    start, end = month_grid_bounds(year, month)

    by_day = defaultdict(list)
    for event in sorted(events, key=lambda e: e.date_time):
        by_day[event.date_time.astimezone(tz).date()].append(event)

    days = []
    for offset in range((end - start).days + 1):
        day = start + dt.timedelta(days=offset)
        days.append(CalendarDay(date=day, in_month=day.month == month, events=by_day.get(day, [])))

    return MonthCalendar(year=year, month=month, days=days)
