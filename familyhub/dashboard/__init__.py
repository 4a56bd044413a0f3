"""
Dashboard module for Family Hub.

Provides the TV dashboard aggregation and Rich formatting for the kiosk
view and the calendar month grid.
"""

from .tv import (
    TVDashboard,
    TVData,
    Badge,
    build_badges,
    greeting_for,
)
from .formatter import TVFormatter, CalendarFormatter

__all__ = [
    # Aggregation
    'TVDashboard',
    'TVData',
    'Badge',
    'build_badges',
    'greeting_for',
    # Formatting
    'TVFormatter',
    'CalendarFormatter',
]
