"""
Calendar endpoints.

The month grid, day detail and unified item list, plus event CRUD. Event
routes live at /events; the derived views at /calendar.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from backend.dependencies import get_calendar_screen
from backend.responses import to_schema
from backend.schemas import EventCreate, EventUpdate, ScreenResponseSchema
from familyhub.screens import CalendarScreen

router = APIRouter(tags=["calendar"])


@router.get("/calendar/month", response_model=ScreenResponseSchema)
def get_month(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    screen: CalendarScreen = Depends(get_calendar_screen),
):
    """
    Month grid with up to three colored dots per day.

    Defaults to the month last shown (the current month on first call).
    """
    context = {}
    if year:
        context["year"] = year
    if month:
        context["month"] = month
    return to_schema(screen.process("month", context))


@router.get("/calendar/day/{day}", response_model=ScreenResponseSchema)
def get_day(day: str, screen: CalendarScreen = Depends(get_calendar_screen)):
    """Every event, task, homework and meal on one day (yyyy-mm-dd)."""
    return to_schema(screen.process("day", {"day": day}))


@router.get("/calendar/items", response_model=ScreenResponseSchema)
def get_unified_items(screen: CalendarScreen = Depends(get_calendar_screen)):
    return to_schema(screen.process("unified"))


@router.post("/events", response_model=ScreenResponseSchema, status_code=201)
def create_event(event: EventCreate, screen: CalendarScreen = Depends(get_calendar_screen)):
    context = {k: v for k, v in event.model_dump().items() if v is not None}
    return to_schema(screen.process("create_event", context))


@router.put("/events/{event_id}", response_model=ScreenResponseSchema)
def update_event(event_id: str, event: EventUpdate,
                 screen: CalendarScreen = Depends(get_calendar_screen)):
    context = {"id": event_id}
    context.update(event.model_dump(exclude_unset=True))
    return to_schema(screen.process("update_event", context))


@router.delete("/events/{event_id}", response_model=ScreenResponseSchema)
def delete_event(
    event_id: str,
    confirmed: bool = Query(False, description="Must be true to delete"),
    screen: CalendarScreen = Depends(get_calendar_screen),
):
    return to_schema(screen.process("delete_event", {"id": event_id, "confirmed": confirmed}))
