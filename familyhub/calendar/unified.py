"""
Unified calendar items.

Merges events, tasks, homework and meals into one flat list of display items,
each pinned to a single calendar day. The functions here are pure: they never
touch the API and never mutate their inputs, so screens can recompute the list
on every render from whatever source lists they currently hold.

Sources may be model dataclasses or raw API dictionaries.
"""

import re
from dataclasses import dataclass, asdict
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from dateutil import parser as date_parser

DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DayLike = Union[str, date, datetime]


class ItemType(str, Enum):
    """Source of a unified item"""
    EVENT = "event"
    TASK = "task"
    HOMEWORK = "homework"
    MEAL = "meal"


@dataclass(frozen=True)
class UnifiedItem:
    """
    One entry on the calendar.

    Attributes:
        id: Id of the source entity (unique only within its type)
        title: Display title
        date: Calendar day as "yyyy-mm-dd"; None for undated homework
        type: Which source list the item came from
        family_member_id: Owner used for coloring; always None for meals
        all_day, start_time, end_time: Carried through for events only
    """
    id: Any
    title: str
    date: Optional[str]
    type: ItemType
    family_member_id: Optional[Any] = None
    all_day: Optional[bool] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @property
    def key(self) -> str:
        """Id that is unique across types"""
        return f"{self.type.value}-{self.id}"

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["type"] = self.type.value
        return {k: v for k, v in result.items() if v is not None}


def _field(source: Any, name: str) -> Any:
    """Read a field from a dataclass or a dict"""
    if isinstance(source, dict):
        return source.get(name)
    return getattr(source, name, None)


def _present(value: Any) -> bool:
    return value is not None and value != ""


def calendar_day(value: Any, tz: Optional[tzinfo] = None) -> Optional[str]:
    """
    Reduce a date or timestamp to its "yyyy-mm-dd" calendar day.

    Without ``tz`` the day is the text before the date/time separator, so
    "2025-06-01T23:30:00-07:00" is June 1st whatever the offset says. With
    ``tz`` offset-aware timestamps are converted to that zone first; naive
    timestamps are taken as already local.

    Returns None for missing or unparseable values.
    """
    if not _present(value):
        return None

    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    if tz is not None:
        try:
            parsed = date_parser.isoparse(text)
        except (ValueError, OverflowError):
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(tz)
            return parsed.date().isoformat()

    day = re.split(r"[T ]", text, maxsplit=1)[0]
    if not DAY_PATTERN.match(day):
        return None
    return day


def _event_item(event: Any, tz: Optional[tzinfo]) -> Optional[UnifiedItem]:
    day = calendar_day(_field(event, "start_time"), tz)
    if day is None:
        return None
    member = _field(event, "family_member_id")
    return UnifiedItem(
        id=_field(event, "id"),
        title=_field(event, "title") or "",
        date=day,
        type=ItemType.EVENT,
        family_member_id=member if _present(member) else None,
        all_day=bool(_field(event, "all_day")),
        start_time=_field(event, "start_time"),
        end_time=_field(event, "end_time") or None,
    )


def _task_item(task: Any, tz: Optional[tzinfo]) -> Optional[UnifiedItem]:
    # Tasks without a due date never reach the calendar
    day = calendar_day(_field(task, "due_date"), tz)
    if day is None:
        return None
    member = _field(task, "family_member_id")
    return UnifiedItem(
        id=_field(task, "id"),
        title=_field(task, "title") or "",
        date=day,
        type=ItemType.TASK,
        family_member_id=member if _present(member) else None,
    )


def _homework_item(homework: Any, tz: Optional[tzinfo]) -> UnifiedItem:
    # Undated homework stays in the list but belongs to no day
    day = calendar_day(_field(homework, "due_date"), tz)
    subject = _field(homework, "subject") or ""
    description = _field(homework, "description")
    title = f"{subject}: {description}" if _present(description) else subject
    member = _field(homework, "family_member_id")
    return UnifiedItem(
        id=_field(homework, "id"),
        title=title,
        date=day,
        type=ItemType.HOMEWORK,
        family_member_id=member if _present(member) else None,
    )


def _meal_item(meal: Any, tz: Optional[tzinfo]) -> Optional[UnifiedItem]:
    day = calendar_day(_field(meal, "date"), tz)
    if day is None:
        return None
    # Meals belong to the household, not to one member
    return UnifiedItem(
        id=_field(meal, "id"),
        title=f"{_field(meal, 'meal_type') or ''}: {_field(meal, 'name') or ''}",
        date=day,
        type=ItemType.MEAL,
    )


def build_unified_items(
    events: Iterable[Any] = (),
    tasks: Iterable[Any] = (),
    homework: Iterable[Any] = (),
    meals: Iterable[Any] = (),
    tz: Optional[tzinfo] = None,
) -> List[UnifiedItem]:
    """
    Merge the four source lists into calendar items.

    Order is events, then tasks, then homework, then meals, each in input
    order. Homework is always included, with date None when its due date is
    missing or unreadable. Tasks without a due date are skipped, and so are
    events and meals whose date field is missing or unreadable.

    Args:
        events, tasks, homework, meals: Source entities (dataclasses or dicts)
        tz: Zone for day extraction; None keeps the naive date-prefix rule

    Returns:
        A new list of immutable UnifiedItem
    """
    items: List[UnifiedItem] = []
    for sources, convert in (
        (events, _event_item),
        (tasks, _task_item),
        (homework, _homework_item),
        (meals, _meal_item),
    ):
        for source in sources or ():
            item = convert(source, tz)
            if item is not None:
                items.append(item)
    return items


def day_key(day: DayLike) -> Optional[str]:
    """Normalize a date, datetime or string to "yyyy-mm-dd"."""
    if isinstance(day, datetime):
        return day.date().isoformat()
    return calendar_day(day)


def items_for_day(items: Iterable[UnifiedItem], day: DayLike) -> List[UnifiedItem]:
    """Items whose date is ``day``, in their original order."""
    target = day_key(day)
    if target is None:
        return []
    return [item for item in items if item.date == target]


def group_by_day(items: Iterable[UnifiedItem]) -> Dict[str, List[UnifiedItem]]:
    """Bucket items by date, preserving order within each day. Undated items are left out."""
    grouped: Dict[str, List[UnifiedItem]] = {}
    for item in items:
        if item.date is None:
            continue
        grouped.setdefault(item.date, []).append(item)
    return grouped
