"""
Calendar view model for Family Hub.

Merges events, tasks, homework and meals into per-day items, resolves their
display colors, and lays a month out as a grid of day cells.
"""

from .unified import (
    ItemType,
    UnifiedItem,
    build_unified_items,
    items_for_day,
    group_by_day,
    calendar_day,
    day_key,
)
from .colors import (
    TYPE_COLORS,
    DEFAULT_MEMBER_COLOR,
    DEFAULT_TYPE_COLOR,
    MEMBER_PALETTE,
    member_color_map,
    resolve_color,
    type_color,
)
from .grid import DayCell, MonthGrid, build_month_grid, day_dots, MAX_DOTS

__all__ = [
    # Unified items
    'ItemType',
    'UnifiedItem',
    'build_unified_items',
    'items_for_day',
    'group_by_day',
    'calendar_day',
    'day_key',
    # Colors
    'TYPE_COLORS',
    'DEFAULT_MEMBER_COLOR',
    'DEFAULT_TYPE_COLOR',
    'MEMBER_PALETTE',
    'member_color_map',
    'resolve_color',
    'type_color',
    # Grid
    'DayCell',
    'MonthGrid',
    'build_month_grid',
    'day_dots',
    'MAX_DOTS',
]
