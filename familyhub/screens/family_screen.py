"""
Family screen for Family Hub.
Household members and their calendar colors.
"""

import re
from typing import Any, Dict

from .base_screen import ScreenResponse
from .crud_screen import CrudScreen
from ..calendar.colors import MEMBER_PALETTE
from ..core.errors import ValidationError
from ..core.models import FamilyMember

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class FamilyScreen(CrudScreen):
    """Handles intents: list, get, create, update, delete, palette."""

    entity = "member"
    plural = "members"
    model = FamilyMember
    fields = ["name", "color", "avatar"]
    required_fields = ["name"]

    def __init__(self, client, config):
        super().__init__(client, config, "family")

    def endpoint(self):
        return self.client.family_members

    def get_handlers(self):
        handlers = super().get_handlers()
        handlers["palette"] = self._handle_palette
        return handlers

    def build_payload(self, context: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        payload = super().build_payload(context, creating)
        if creating and not payload.get("color"):
            payload["color"] = MEMBER_PALETTE[0]
        return payload

    def validate(self, payload: Dict[str, Any], creating: bool) -> None:
        color = payload.get("color")
        if color is None:
            return
        if color not in MEMBER_PALETTE and not HEX_COLOR.match(str(color)):
            raise ValidationError(
                f"Invalid color '{color}'. Use a palette color or #rrggbb", field="color"
            )

    def _handle_palette(self, context: Dict[str, Any]) -> ScreenResponse:
        return ScreenResponse.ok(message="Member colors", data={"palette": list(MEMBER_PALETTE)})
