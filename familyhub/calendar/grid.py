"""
Month grid for the calendar screen.

Lays out one month as day cells with leading blanks so the first row starts
on the configured week day. Each cell carries its unified items and up to
three colored dots for the first three of them.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .colors import DEFAULT_MEMBER_COLOR, member_color_map, resolve_color
from .unified import DayLike, UnifiedItem, group_by_day, items_for_day

MAX_DOTS = 3

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


@dataclass
class DayCell:
    """One day square on the month grid."""
    day: date
    is_today: bool = False
    items: List[UnifiedItem] = field(default_factory=list)
    dots: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "is_today": self.is_today,
            "dots": list(self.dots),
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class MonthGrid:
    """A month laid out for display."""
    year: int
    month: int
    week_start: str
    leading_blanks: int
    cells: List[DayCell]

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def weekday_headers(self) -> List[str]:
        first = WEEKDAY_NAMES.index(self.week_start)
        names = WEEKDAY_NAMES[first:] + WEEKDAY_NAMES[:first]
        return [name[:3].capitalize() for name in names]

    def weeks(self) -> List[List[Optional[DayCell]]]:
        """Rows of seven slots; None marks a blank slot."""
        slots: List[Optional[DayCell]] = [None] * self.leading_blanks + list(self.cells)
        slots += [None] * (-len(slots) % 7)
        return [slots[i:i + 7] for i in range(0, len(slots), 7)]

    def cell(self, day: date) -> Optional[DayCell]:
        for cell in self.cells:
            if cell.day == day:
                return cell
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "title": self.title,
            "weekdays": self.weekday_headers,
            "leading_blanks": self.leading_blanks,
            "days": [cell.to_dict() for cell in self.cells],
        }


def day_dots(
    items: Iterable[UnifiedItem],
    day: DayLike,
    members: Iterable[Any] = (),
    default_member_color: str = DEFAULT_MEMBER_COLOR,
) -> List[str]:
    """Colors of the first three items on ``day``; empty when the day is free."""
    colors = member_color_map(members)
    return [
        resolve_color(item, default_member_color=default_member_color, colors=colors)
        for item in items_for_day(items, day)[:MAX_DOTS]
    ]


def build_month_grid(
    year: int,
    month: int,
    items: Iterable[UnifiedItem],
    members: Iterable[Any] = (),
    today: Optional[date] = None,
    week_start: str = "sunday",
    default_member_color: str = DEFAULT_MEMBER_COLOR,
) -> MonthGrid:
    """
    Build the grid for one month.

    Args:
        year, month: Month to display
        items: Unified items (any range; only this month's days are used)
        members: Family members for dot colors
        today: Date to highlight (defaults to date.today())
        week_start: Day name that opens each row
        default_member_color: Color for items whose owner is unknown

    Returns:
        MonthGrid with one DayCell per day of the month
    """
    if today is None:
        today = date.today()
    week_start = week_start.lower()
    if week_start not in WEEKDAY_NAMES:
        raise ValueError(f"Unknown week start: {week_start}")

    by_day = group_by_day(items)
    colors = member_color_map(members)

    first_weekday, days_in_month = calendar.monthrange(year, month)
    leading = (first_weekday - WEEKDAY_NAMES.index(week_start)) % 7

    cells = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        day_items = list(by_day.get(day.isoformat(), []))
        cells.append(DayCell(
            day=day,
            is_today=day == today,
            items=day_items,
            dots=[
                resolve_color(item, default_member_color=default_member_color, colors=colors)
                for item in day_items[:MAX_DOTS]
            ],
        ))

    return MonthGrid(
        year=year,
        month=month,
        week_start=week_start,
        leading_blanks=leading,
        cells=cells,
    )
