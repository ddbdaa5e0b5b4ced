"""
Router pour les séances planifiées, le calendrier et la saisie des présences.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.config import settings
from app.schemas.calendar import MonthCalendar
from app.schemas.event import AttendanceStatusUpdate, EventCreate, EventUpdate, ScheduleEvent
from app.services import event_service
from app.services.calendar_service import build_month_calendar
from app.storage import StoragePort, get_store

router = APIRouter(prefix="/api/v1/events", tags=["Séances"])


@router.get("", response_model=List[ScheduleEvent], summary="Lister les séances")
def list_events(
    sort: Optional[str] = Query("-date_time", description="Champ de tri, préfixé par '-' pour décroissant"),
    limit: Optional[int] = Query(None, ge=1),
    store: StoragePort = Depends(get_store),
):
    return event_service.get_events(store, sort, limit)


@router.post("", response_model=ScheduleEvent, status_code=201, summary="Planifier une séance")
def create_event(data: EventCreate, store: StoragePort = Depends(get_store)):
    """Planifie une séance. Seuls les élèves inscrits au cours peuvent y participer."""
    try:
        return event_service.create_event(store, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/calendar", response_model=MonthCalendar, summary="Calendrier d'un mois")
def month_calendar(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    store: StoragePort = Depends(get_store),
):
    """Retourne les semaines complètes (dimanche → samedi) couvrant le mois, avec leurs séances."""
    events = event_service.get_events(store, sort=None)
    return build_month_calendar(events, year, month, settings.tz)


@router.get("/{event_id}", response_model=ScheduleEvent, summary="Détail d'une séance")
def get_event(event_id: str, store: StoragePort = Depends(get_store)):
    event = event_service.get_event(store, event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Séance introuvable.")
    return event


@router.put("/{event_id}", response_model=ScheduleEvent, summary="Modifier une séance")
def update_event(event_id: str, data: EventUpdate, store: StoragePort = Depends(get_store)):
    try:
        event = event_service.update_event(store, event_id, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if event is None:
        raise HTTPException(status_code=404, detail="Séance introuvable.")
    return event


@router.put(
    "/{event_id}/attendees/{student_id}",
    response_model=ScheduleEvent,
    summary="Marquer la présence d'un élève",
)
def set_attendance(
    event_id: str,
    student_id: str,
    data: AttendanceStatusUpdate,
    store: StoragePort = Depends(get_store),
):
    """Passe un participant en présent, absent, excusé ou en attente."""
    try:
        event = event_service.set_attendance_status(store, event_id, student_id, data.status)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if event is None:
        raise HTTPException(status_code=404, detail="Séance introuvable.")
    return event


@router.delete("/{event_id}", status_code=204, summary="Supprimer une séance")
def delete_event(event_id: str, store: StoragePort = Depends(get_store)):
    if not event_service.delete_event(store, event_id):
        raise HTTPException(status_code=404, detail="Séance introuvable.")
