"""
Unit tests for the unified calendar items.
Tests merging of events, tasks, homework and meals, per-day filtering and
day extraction from timestamps.
"""

import pytest
from datetime import date, datetime, timezone
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from dateutil import tz

from familyhub.calendar.unified import (
    ItemType,
    UnifiedItem,
    build_unified_items,
    calendar_day,
    group_by_day,
    items_for_day,
)
from familyhub.core.models import Event, Homework, Meal, Task


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def events():
    return [
        {"id": 1, "title": "Dentist", "start_time": "2025-06-01T09:30:00", "end_time": "2025-06-01T10:00:00",
         "all_day": False, "family_member_id": 2},
        {"id": 2, "title": "Camping", "start_time": "2025-06-03", "all_day": True, "family_member_id": None},
    ]


@pytest.fixture
def tasks():
    return [
        {"id": 10, "title": "Mow lawn", "due_date": "2025-06-01", "family_member_id": 1},
        {"id": 11, "title": "Someday", "due_date": None},
        {"id": 12, "title": "Blank due", "due_date": ""},
        {"id": 13, "title": "Recycling", "due_date": "2025-06-02T00:00:00.000Z"},
    ]


@pytest.fixture
def homework():
    return [
        {"id": 20, "subject": "Math", "description": "Fractions worksheet", "due_date": "2025-06-02",
         "family_member_id": 3},
    ]


@pytest.fixture
def meals():
    return [
        {"id": 30, "name": "Tacos", "meal_type": "dinner", "date": "2025-06-01"},
        {"id": 31, "name": "Pancakes", "meal_type": "breakfast", "date": "2025-06-02"},
    ]


# =============================================================================
# build_unified_items
# =============================================================================

class TestBuildUnifiedItems:
    """Tests for merging the four source lists."""

    def test_count_matches_sources_with_dates(self, events, tasks, homework, meals):
        """Every event, dated task, homework and meal becomes exactly one item."""
        items = build_unified_items(events, tasks, homework, meals)
        dated_tasks = [t for t in tasks if t["due_date"]]
        assert len(items) == len(events) + len(dated_tasks) + len(homework) + len(meals)

    def test_source_order_is_preserved(self, events, tasks, homework, meals):
        """Events come first, then tasks, homework and meals."""
        items = build_unified_items(events, tasks, homework, meals)
        types = [item.type for item in items]
        assert types == [
            ItemType.EVENT, ItemType.EVENT,
            ItemType.TASK, ItemType.TASK,
            ItemType.HOMEWORK,
            ItemType.MEAL, ItemType.MEAL,
        ]

    def test_tasks_without_due_date_are_excluded(self, tasks):
        items = build_unified_items(tasks=tasks)
        assert {item.id for item in items} == {10, 13}

    def test_event_date_is_start_time_prefix(self, events):
        items = build_unified_items(events=events)
        assert items[0].date == "2025-06-01"
        assert items[0].start_time == "2025-06-01T09:30:00"
        assert items[0].end_time == "2025-06-01T10:00:00"
        assert items[0].all_day is False
        assert items[1].date == "2025-06-03"
        assert items[1].all_day is True

    def test_homework_title_and_owner(self, homework):
        item = build_unified_items(homework=homework)[0]
        assert item.title == "Math: Fractions worksheet"
        assert item.family_member_id == 3
        assert item.type is ItemType.HOMEWORK

    def test_undated_homework_is_kept(self):
        """Homework without a due date still counts, but belongs to no day."""
        items = build_unified_items(homework=[
            {"id": 1, "subject": "Math", "description": "p.12"},
            {"id": 2, "subject": "Art", "due_date": "next week"},
        ])
        assert len(items) == 2
        assert items[0].title == "Math: p.12"
        assert items[0].date is None
        assert items[1].date is None
        assert "date" not in items[0].to_dict()

    def test_undated_homework_never_lands_on_a_day(self):
        items = build_unified_items(
            tasks=[{"id": 1, "title": "Dishes", "due_date": "2025-06-01"}],
            homework=[{"id": 2, "subject": "Math"}],
        )
        assert items_for_day(items, "2025-06-01") == [items[0]]
        assert list(group_by_day(items)) == ["2025-06-01"]

    def test_meal_title_and_no_owner(self, meals):
        item = build_unified_items(meals=meals)[0]
        assert item.title == "dinner: Tacos"
        assert item.family_member_id is None
        assert "family_member_id" not in item.to_dict()

    def test_accepts_model_instances(self):
        items = build_unified_items(
            events=[Event(id=1, title="Game", start_time="2025-06-05T18:00:00")],
            tasks=[Task(id=2, title="Dishes", due_date="2025-06-05")],
            homework=[Homework(id=3, subject="Art", description="Sketch", due_date="2025-06-05")],
            meals=[Meal(id=4, name="Soup", meal_type="lunch", date="2025-06-05")],
        )
        assert [item.date for item in items] == ["2025-06-05"] * 4

    def test_empty_inputs(self):
        assert build_unified_items([], [], [], []) == []
        assert build_unified_items() == []

    def test_malformed_dates_are_skipped_not_raised(self):
        items = build_unified_items(
            events=[{"id": 1, "title": "Broken", "start_time": "not a date"}, {"id": 2, "title": "Missing"}],
            meals=[{"id": 3, "name": "Mystery", "meal_type": "lunch"}],
        )
        assert items == []

    def test_items_are_immutable(self, events):
        item = build_unified_items(events=events)[0]
        with pytest.raises(AttributeError):
            item.title = "Changed"

    def test_fresh_list_every_call(self, events):
        first = build_unified_items(events=events)
        second = build_unified_items(events=events)
        assert first == second
        assert first is not second

    def test_inputs_are_not_mutated(self, events):
        snapshot = [dict(e) for e in events]
        build_unified_items(events=events)
        assert events == snapshot

    def test_key_is_unique_across_types(self):
        items = build_unified_items(
            events=[{"id": 1, "title": "E", "start_time": "2025-06-01T08:00:00"}],
            tasks=[{"id": 1, "title": "T", "due_date": "2025-06-01"}],
        )
        assert items[0].key == "event-1"
        assert items[1].key == "task-1"


# =============================================================================
# items_for_day / group_by_day
# =============================================================================

class TestItemsForDay:
    """Tests for filtering unified items by calendar day."""

    def test_only_matching_day(self, events, tasks, homework, meals):
        items = build_unified_items(events, tasks, homework, meals)
        day_items = items_for_day(items, "2025-06-02")
        assert day_items
        assert all(item.date == "2025-06-02" for item in day_items)

    def test_no_match_is_empty(self, events):
        items = build_unified_items(events=events)
        assert items_for_day(items, "1999-01-01") == []

    def test_accepts_date_and_datetime(self, events):
        items = build_unified_items(events=events)
        assert items_for_day(items, date(2025, 6, 1)) == items_for_day(items, "2025-06-01")
        assert items_for_day(items, datetime(2025, 6, 1, 15, 0)) == items_for_day(items, "2025-06-01")

    def test_invalid_day_is_empty(self, events):
        items = build_unified_items(events=events)
        assert items_for_day(items, "yesterday") == []

    def test_preserves_input_order(self, events, tasks, homework, meals):
        items = build_unified_items(events, tasks, homework, meals)
        day_items = items_for_day(items, "2025-06-01")
        assert [item.type for item in day_items] == [ItemType.EVENT, ItemType.TASK, ItemType.MEAL]

    def test_task_without_due_date_never_appears(self, tasks):
        items = build_unified_items(tasks=tasks)
        for day in group_by_day(items):
            assert all(item.id not in (11, 12) for item in items_for_day(items, day))

    def test_event_task_meal_on_same_day(self):
        """One event, task and meal on 2025-06-01 give three items for that day."""
        items = build_unified_items(
            events=[{"id": 1, "title": "Party", "start_time": "2025-06-01T17:00:00"}],
            tasks=[{"id": 2, "title": "Buy cake", "due_date": "2025-06-01"}],
            meals=[{"id": 3, "name": "Pizza", "meal_type": "dinner", "date": "2025-06-01"}],
        )
        day_items = items_for_day(items, "2025-06-01")
        assert [item.type.value for item in day_items] == ["event", "task", "meal"]

    def test_group_by_day(self, events, meals):
        grouped = group_by_day(build_unified_items(events=events, meals=meals))
        assert sorted(grouped) == ["2025-06-01", "2025-06-02", "2025-06-03"]
        assert [item.id for item in grouped["2025-06-01"]] == [1, 30]


# =============================================================================
# calendar_day
# =============================================================================

class TestCalendarDay:
    """Tests for reducing dates and timestamps to a calendar day."""

    def test_naive_split_ignores_offset(self):
        assert calendar_day("2025-06-01T23:30:00-07:00") == "2025-06-01"

    def test_space_separator(self):
        assert calendar_day("2025-06-01 08:00:00") == "2025-06-01"

    def test_missing_values(self):
        assert calendar_day(None) is None
        assert calendar_day("") is None

    def test_unparseable(self):
        assert calendar_day("June 1st") is None

    def test_date_objects(self):
        assert calendar_day(date(2025, 6, 1)) == "2025-06-01"
        assert calendar_day(datetime(2025, 6, 1, 23, 59)) == "2025-06-01"

    def test_timezone_aware_conversion(self):
        """With a zone, an offset timestamp lands on that zone's local day."""
        utc = tz.gettz("UTC")
        assert calendar_day("2025-06-01T23:30:00-07:00", utc) == "2025-06-02"

    def test_timezone_leaves_naive_timestamps_alone(self):
        assert calendar_day("2025-06-01T23:30:00", tz.gettz("Asia/Tokyo")) == "2025-06-01"

    def test_timezone_with_aware_datetime(self):
        value = datetime(2025, 6, 1, 23, 30, tzinfo=timezone.utc)
        assert calendar_day(value, tz.gettz("Asia/Tokyo")) == "2025-06-02"

    def test_build_with_timezone(self):
        items = build_unified_items(
            events=[{"id": 1, "title": "Late call", "start_time": "2025-06-01T23:30:00-07:00"}],
            tz=tz.gettz("UTC"),
        )
        assert items[0].date == "2025-06-02"


class TestUnifiedItemSerialization:

    def test_to_dict_drops_unset_fields(self):
        item = UnifiedItem(id=5, title="Soup", date="2025-06-01", type=ItemType.MEAL)
        assert item.to_dict() == {"id": 5, "title": "Soup", "date": "2025-06-01", "type": "meal"}
