"""
Tasks screen for Family Hub.
Household chores and to-dos with a completed/pending toggle.
"""

from datetime import date
from typing import Any, Dict

from .base_screen import ScreenResponse
from .crud_screen import ToggleScreen
from ..core.errors import ValidationError
from ..core.models import Task, TASK_PRIORITIES


class TasksScreen(ToggleScreen):
    """
    Handles intents:
    - list: tasks filtered by filter/family_member_id/category
    - get, create, update, delete
    - toggle: flip a task's completed flag
    - new_form: defaults for an empty create form
    """

    entity = "task"
    plural = "tasks"
    model = Task
    fields = [
        "title", "description", "due_date", "priority", "family_member_id",
        "category", "task_type_id", "completed",
    ]
    required_fields = ["title"]
    list_filters = ["family_member_id", "category"]

    def __init__(self, client, config):
        super().__init__(client, config, "tasks")

    def endpoint(self):
        return self.client.tasks

    def get_handlers(self):
        handlers = super().get_handlers()
        handlers["new_form"] = self._handle_new_form
        return handlers

    def build_payload(self, context: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        payload = super().build_payload(context, creating)
        if creating:
            payload.setdefault("priority", "medium")
            payload.setdefault("due_date", date.today().isoformat())
        # Unselected dropdowns come through as ''
        for key in ("family_member_id", "task_type_id", "category"):
            if payload.get(key) == "":
                payload[key] = None
        return payload

    def validate(self, payload: Dict[str, Any], creating: bool) -> None:
        priority = payload.get("priority")
        if priority is not None and priority not in TASK_PRIORITIES:
            raise ValidationError(
                f"Invalid priority '{priority}'. Choose from: {', '.join(TASK_PRIORITIES)}",
                field="priority",
            )

    def _handle_new_form(self, context: Dict[str, Any]) -> ScreenResponse:
        return ScreenResponse.ok(
            message="New task",
            data={"task": {
                "title": "",
                "description": "",
                "due_date": date.today().isoformat(),
                "priority": "medium",
                "family_member_id": None,
            }},
        )
