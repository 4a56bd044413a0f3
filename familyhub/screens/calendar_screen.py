"""
Calendar screen for Family Hub.

Fetches events, tasks, homework, meals and family members as one batch, then
derives everything it shows from those five lists: the unified items, the
month grid with its colored dots, and the day-detail list. The derived views
are rebuilt on every call and never cached.

Event create/update/delete also live here, since events have no screen of
their own.
"""

import calendar
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from dateutil import tz as date_tz

from .base_screen import BaseScreen, ScreenResponse
from ..calendar import (
    build_month_grid,
    build_unified_items,
    day_key,
    items_for_day,
    member_color_map,
    resolve_color,
)
from ..core.errors import ValidationError
from ..core.models import Event, FamilyMember, Homework, Meal, Task
from ..core.resource import LoadState, Resource, fetch_all

EMPTY_SOURCES = {"events": [], "tasks": [], "homework": [], "meals": [], "members": []}

EVENT_FIELDS = [
    "title", "description", "start_time", "end_time", "all_day",
    "family_member_id", "recurrence", "event_type_id", "location",
]


class CalendarScreen(BaseScreen):
    """
    Handles intents:
    - month: load the month and return its grid (year, month)
    - day: items for one day with their colors (day)
    - unified: the full unified item list for the loaded range
    - create_event, update_event, delete_event
    """

    def __init__(self, client, config):
        super().__init__(client, config, "calendar")
        today = date.today()
        self.year = today.year
        self.month = today.month
        self.sources: Resource[Dict[str, List[Any]]] = Resource(
            self._fetch_sources, name="calendar", initial=dict(EMPTY_SOURCES)
        )

    def get_handlers(self) -> Dict[str, Callable[[Dict[str, Any]], ScreenResponse]]:
        return {
            "month": self._handle_month,
            "day": self._handle_day,
            "unified": self._handle_unified,
            "create_event": self._handle_create_event,
            "update_event": self._handle_update_event,
            "delete_event": self._handle_delete_event,
        }

    # =========================================================================
    # Data
    # =========================================================================

    def _month_range(self) -> Dict[str, str]:
        last = calendar.monthrange(self.year, self.month)[1]
        return {
            "start": date(self.year, self.month, 1).isoformat(),
            "end": date(self.year, self.month, last).isoformat(),
        }

    def _fetch_sources(self) -> Dict[str, List[Any]]:
        month = self._month_range()
        events, tasks, homework, meals, members = fetch_all([
            lambda: self.client.events.get_all(start=month["start"], end=month["end"]),
            lambda: self.client.tasks.get_all(),
            lambda: self.client.homework.get_all(),
            lambda: self.client.meals.get_all(start_date=month["start"], end_date=month["end"]),
            lambda: self.client.family_members.get_all(),
        ])
        return {
            "events": [Event.from_dict(row) for row in events],
            "tasks": [Task.from_dict(row) for row in tasks],
            "homework": [Homework.from_dict(row) for row in homework],
            "meals": [Meal.from_dict(row) for row in meals],
            "members": [FamilyMember.from_dict(row) for row in members],
        }

    def timezone(self):
        """Zone for day extraction, or None for the plain date-prefix rule."""
        name = self.config.get("calendar_timezone")
        if not name:
            return None
        zone = date_tz.gettz(name)
        if zone is None:
            self.logger.warning(f"Unknown calendar_timezone '{name}', using date prefixes")
        return zone

    def unified_items(self):
        data = self.sources.data or EMPTY_SOURCES
        return build_unified_items(
            data["events"], data["tasks"], data["homework"], data["meals"],
            tz=self.timezone(),
        )

    @property
    def members(self) -> List[FamilyMember]:
        return (self.sources.data or EMPTY_SOURCES)["members"]

    def _default_member_color(self) -> str:
        return self.get_config_value("default_member_color", default="#6366f1")

    def _load(self) -> Optional[ScreenResponse]:
        """Fetch the batch; an error response if any part of it failed."""
        self.sources.load()
        if self.sources.state is LoadState.ERROR:
            return ScreenResponse.error(
                f"Failed to load calendar: {self.sources.error}",
                data={"state": LoadState.ERROR.value},
            )
        return None

    # =========================================================================
    # Intent Handlers
    # =========================================================================

    def _handle_month(self, context: Dict[str, Any]) -> ScreenResponse:
        """
        Context params:
            year (int, optional): defaults to the current selection
            month (int, optional): 1-12
        """
        year = int(context.get("year") or self.year)
        month = int(context.get("month") or self.month)
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid month: {month}", field="month")
        self.year, self.month = year, month

        failed = self._load()
        if failed:
            return failed

        grid = build_month_grid(
            year,
            month,
            self.unified_items(),
            self.members,
            week_start=self.get_config_value("week_start", default="sunday"),
            default_member_color=self._default_member_color(),
        )
        return ScreenResponse.ok(
            message=grid.title,
            data={"grid": grid.to_dict(), "members": [
                {"id": m.id, "name": m.name, "color": m.color} for m in self.members
            ]},
        )

    def _handle_day(self, context: Dict[str, Any]) -> ScreenResponse:
        """
        Day detail from the loaded lists.

        Reloads first when the day is outside the loaded month or the last
        load did not succeed.
        """
        self.require(context, ["day"])
        day = day_key(context["day"])
        if day is None:
            raise ValidationError(f"Invalid day: {context['day']}", field="day")

        day_month = (int(day[:4]), int(day[5:7]))
        if self.sources.state is not LoadState.READY or day_month != (self.year, self.month):
            self.year, self.month = day_month
            failed = self._load()
            if failed:
                return failed

        colors = member_color_map(self.members)
        default_color = self._default_member_color()
        items = []
        for item in items_for_day(self.unified_items(), day):
            entry = item.to_dict()
            entry["color"] = resolve_color(item, default_member_color=default_color, colors=colors)
            items.append(entry)

        if not items:
            return ScreenResponse.ok(message=f"Nothing scheduled on {day}", data={"day": day, "items": []})
        return ScreenResponse.ok(
            message=f"{len(items)} item(s) on {day}",
            data={"day": day, "items": items},
        )

    def _handle_unified(self, context: Dict[str, Any]) -> ScreenResponse:
        if self.sources.state is not LoadState.READY:
            failed = self._load()
            if failed:
                return failed
        items = self.unified_items()
        return ScreenResponse.ok(
            message=f"{len(items)} calendar item(s)",
            data={"items": [item.to_dict() for item in items]},
        )

    def _event_payload(self, context: Dict[str, Any]) -> Dict[str, Any]:
        payload = {key: context[key] for key in EVENT_FIELDS if key in context}
        for key in ("family_member_id", "event_type_id", "end_time", "recurrence"):
            if payload.get(key) == "":
                payload[key] = None
        if payload.get("all_day"):
            # All-day events are a bare start date
            payload["end_time"] = None
        return payload

    def _handle_create_event(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["title", "start_time"])
        payload = self._event_payload(context)

        created = self.client.events.create(payload) or {}
        self.log_action("event_created", {"id": created.get("id"), "start_time": payload["start_time"]})
        self._load()
        return ScreenResponse.ok(message=f"Created event '{payload['title']}'", data={"event": created})

    def _handle_update_event(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["id"])
        payload = self._event_payload(context)
        if not payload:
            return ScreenResponse.error("No fields to update")

        updated = self.client.events.update(context["id"], payload) or {}
        self.log_action("event_updated", {"id": context["id"], "fields": list(payload)})
        self._load()
        return ScreenResponse.ok(message=f"Updated event {context['id']}", data={"event": updated})

    def _handle_delete_event(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["id"])
        if not context.get("confirmed"):
            return ScreenResponse.confirm(
                "Are you sure you want to delete this event?", data={"id": context["id"]}
            )

        self.client.events.delete(context["id"])
        self.log_action("event_deleted", {"id": context["id"]})
        self._load()
        return ScreenResponse.ok(message=f"Deleted event {context['id']}")
