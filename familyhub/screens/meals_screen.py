"""
Meals screen for Family Hub.

The planner shows one week around the selected day (three days either side)
with a slot per meal type. The week is fetched as a single date-range query;
moving the selection refetches the window.
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from .base_screen import ScreenResponse
from .crud_screen import CrudScreen
from ..calendar.unified import calendar_day
from ..core.errors import ValidationError
from ..core.models import Meal, MEAL_TYPES, to_dict

WINDOW_RADIUS = 3


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value)).date()
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date '{value}'", field="date")


def week_window(selected: date) -> List[date]:
    """The seven days shown by the planner, oldest first."""
    return [selected + timedelta(days=offset) for offset in range(-WINDOW_RADIUS, WINDOW_RADIUS + 1)]


class MealsScreen(CrudScreen):
    """
    Handles intents:
    - list: meals for the week around ``date`` (defaults to today)
    - by_date: meals for a single day via /meals/date/{date}
    - slot: the meal planned for ``date`` + ``meal_type``, if any
    - get, create, update, delete
    """

    entity = "meal"
    plural = "meals"
    model = Meal
    fields = ["name", "meal_type", "date", "ingredients", "notes"]
    required_fields = ["name", "meal_type", "date"]

    def __init__(self, client, config):
        super().__init__(client, config, "meals")
        self.selected_date = date.today()

    def endpoint(self):
        return self.client.meals

    def get_handlers(self):
        handlers = super().get_handlers()
        handlers["by_date"] = self._handle_by_date
        handlers["slot"] = self._handle_slot
        return handlers

    def list_params(self, context: Dict[str, Any]) -> Dict[str, Any]:
        if context.get("date"):
            self.selected_date = _as_date(context["date"])
        window = week_window(self.selected_date)
        return {
            "start_date": window[0].isoformat(),
            "end_date": window[-1].isoformat(),
        }

    def validate(self, payload: Dict[str, Any], creating: bool) -> None:
        meal_type = payload.get("meal_type")
        if meal_type is not None and meal_type not in MEAL_TYPES:
            raise ValidationError(
                f"Invalid meal type '{meal_type}'. Choose from: {', '.join(MEAL_TYPES)}",
                field="meal_type",
            )
        if "date" in payload:
            payload["date"] = _as_date(payload["date"]).isoformat()

    def slot(self, day: Any, meal_type: str) -> Optional[Meal]:
        """First loaded meal on ``day`` for ``meal_type``."""
        target = _as_date(day).isoformat()
        for meal in self.items.data or []:
            if calendar_day(meal.date) == target and meal.meal_type == meal_type:
                return meal
        return None

    def _list_data(self) -> Dict[str, Any]:
        data = super()._list_data()
        data["selected_date"] = self.selected_date.isoformat()
        data["days"] = [
            {
                "date": day.isoformat(),
                "has_meals": any(calendar_day(m.date) == day.isoformat() for m in self.items.data or []),
                "slots": self._slots(day),
            }
            for day in week_window(self.selected_date)
        ]
        return data

    def _slots(self, day: date) -> Dict[str, Optional[Dict[str, Any]]]:
        slots = {}
        for meal_type in MEAL_TYPES:
            meal = self.slot(day, meal_type)
            slots[meal_type] = to_dict(meal) if meal else None
        return slots

    def _handle_by_date(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["date"])
        day = _as_date(context["date"]).isoformat()
        meals = [Meal.from_dict(row) for row in self.endpoint().get_by_date(day)]
        return ScreenResponse.ok(
            message=f"Found {len(meals)} meal(s) on {day}",
            data={"date": day, "meals": [to_dict(m) for m in meals]},
        )

    def _handle_slot(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["date", "meal_type"])
        meal = self.slot(context["date"], context["meal_type"])
        if meal is None:
            return ScreenResponse.ok(message="No meal planned", data={"meal": None})
        return ScreenResponse.ok(message=meal.name, data={"meal": to_dict(meal)})
