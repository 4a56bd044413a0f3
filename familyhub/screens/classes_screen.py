"""
Classes screen for Family Hub.
Recurring lessons per family member, with an attendance log per class.
"""

from datetime import date
from typing import Any, Dict

from .base_screen import ScreenResponse
from .crud_screen import CrudScreen
from ..core.models import ClassAttendance, SchoolClass, to_dict


class ClassesScreen(CrudScreen):
    """
    Handles intents:
    - list, get, create, update, delete
    - attendance: records for one class
    - add_attendance: log a session (date defaults to today)
    """

    entity = "class"
    plural = "classes"
    model = SchoolClass
    fields = ["name", "subject", "schedule", "instructor", "notes", "family_member_id"]
    required_fields = ["name"]

    def __init__(self, client, config):
        super().__init__(client, config, "classes")

    def endpoint(self):
        return self.client.classes

    def get_handlers(self):
        handlers = super().get_handlers()
        handlers["attendance"] = self._handle_attendance
        handlers["add_attendance"] = self._handle_add_attendance
        return handlers

    def _handle_attendance(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["class_id"])
        records = [
            ClassAttendance.from_dict(row)
            for row in self.endpoint().get_attendance(context["class_id"])
        ]
        attended = sum(1 for r in records if r.completed)
        return ScreenResponse.ok(
            message=f"{attended} of {len(records)} session(s) attended",
            data={
                "class_id": context["class_id"],
                "attendance": [to_dict(r) for r in records],
                "attended": attended,
            },
        )

    def _handle_add_attendance(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["class_id"])
        payload = {
            "date": context.get("date") or date.today().isoformat(),
            "completed": bool(context.get("completed", True)),
            "notes": context.get("notes"),
        }
        created = self.endpoint().add_attendance(context["class_id"], payload)
        self.log_action("attendance_added", {"class_id": context["class_id"], "date": payload["date"]})
        return ScreenResponse.ok(
            message=f"Attendance logged for {payload['date']}",
            data={"attendance": created},
        )
