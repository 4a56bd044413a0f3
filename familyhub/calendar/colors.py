"""
Color resolution for calendar items.

A member-owned item takes its member's color; anything else is colored by its
type. Member ids are compared as strings because some endpoints send numeric
ids and others send strings.
"""

from typing import Any, Dict, Iterable, Optional

from .unified import ItemType, UnifiedItem

DEFAULT_MEMBER_COLOR = "#6366f1"  # indigo

TYPE_COLORS = {
    ItemType.EVENT: "#3b82f6",     # blue
    ItemType.TASK: "#22c55e",      # green
    ItemType.HOMEWORK: "#f59e0b",  # amber
    ItemType.MEAL: "#ec4899",      # pink
}
DEFAULT_TYPE_COLOR = "#6366f1"  # indigo

# Choices offered when adding a family member
MEMBER_PALETTE = [
    "#ef4444", "#f97316", "#eab308", "#22c55e",
    "#14b8a6", "#3b82f6", "#8b5cf6", "#ec4899",
    "#06b6d4", "#84cc16", "#f59e0b", "#6366f1",
]


def member_color_map(members: Iterable[Any]) -> Dict[str, str]:
    """Map str(member id) -> color for FamilyMember objects or dicts."""
    colors = {}
    for member in members or ():
        if isinstance(member, dict):
            member_id, color = member.get("id"), member.get("color")
        else:
            member_id, color = getattr(member, "id", None), getattr(member, "color", None)
        if member_id is not None and color:
            colors[str(member_id)] = color
    return colors


def type_color(item_type: Any) -> str:
    try:
        return TYPE_COLORS[ItemType(item_type)]
    except ValueError:
        return DEFAULT_TYPE_COLOR


def resolve_color(
    item: UnifiedItem,
    members: Iterable[Any] = (),
    default_member_color: str = DEFAULT_MEMBER_COLOR,
    colors: Optional[Dict[str, str]] = None,
) -> str:
    """
    Pick the display color for one item.

    Args:
        item: Item to color
        members: Family members to look the owner up in
        default_member_color: Used when the owner is not among ``members``
        colors: Precomputed member_color_map(members), to avoid rebuilding it
            for every item of a month grid

    Returns:
        A "#rrggbb" color string
    """
    if item.family_member_id is not None:
        if colors is None:
            colors = member_color_map(members)
        return colors.get(str(item.family_member_id), default_member_color)
    return type_color(item.type)
