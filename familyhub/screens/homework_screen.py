"""
Homework screen for Family Hub.
"""

from typing import Any, Dict

from .crud_screen import ToggleScreen
from ..core.models import Homework


class HomeworkScreen(ToggleScreen):
    """
    Assignments per family member, due-date ordered by the API.

    Handles intents: list, get, create, update, delete, toggle.
    List filters: filter, family_member_id, due_before, due_after.
    """

    entity = "homework"
    plural = "homework_items"
    model = Homework
    fields = ["subject", "description", "due_date", "family_member_id", "completed"]
    required_fields = ["subject", "due_date"]
    list_filters = ["family_member_id", "due_before", "due_after"]

    def __init__(self, client, config):
        super().__init__(client, config, "homework")

    def endpoint(self):
        return self.client.homework

    def build_payload(self, context: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        payload = super().build_payload(context, creating)
        if payload.get("family_member_id") == "":
            payload["family_member_id"] = None
        return payload
