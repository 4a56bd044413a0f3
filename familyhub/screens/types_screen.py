"""
Event type and task type screens.

Both are the same small collection (name, color, icon) behind different
endpoints.
"""

from .crud_screen import CrudScreen
from ..core.models import CategoryType


class CategoryTypeScreen(CrudScreen):
    """Handles intents: list, get, create, update, delete."""

    model = CategoryType
    fields = ["name", "color", "icon"]
    required_fields = ["name"]

    def __init__(self, client, config, kind: str):
        """
        Args:
            kind: 'event' or 'task'
        """
        if kind not in ("event", "task"):
            raise ValueError(f"Unknown type kind: {kind}")
        self.kind = kind
        self.entity = f"{kind}_type"
        self.plural = f"{kind}_types"
        super().__init__(client, config, self.plural)

    def endpoint(self):
        return self.client.event_types if self.kind == "event" else self.client.task_types
