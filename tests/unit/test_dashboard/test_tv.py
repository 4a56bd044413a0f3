"""
Unit tests for the TV dashboard aggregator.
Tests the batched refresh, member filtering, stats selection, optimistic
task completion and badges.
"""

import pytest
from datetime import date, datetime
from pathlib import Path
from unittest.mock import MagicMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from familyhub.core.config import Config
from familyhub.core.errors import ApiError
from familyhub.core.models import UserStats
from familyhub.dashboard.tv import (
    CELEBRATION_SECONDS,
    TVDashboard,
    UNKNOWN_MEMBER,
    build_badges,
    greeting_for,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    mock = MagicMock()
    mock.family_members.get_all.return_value = [
        {"id": 1, "name": "Mom", "color": "#ef4444"},
        {"id": 2, "name": "Sam", "color": "#22c55e"},
        {"id": 3, "name": "Lee", "color": "#3b82f6"},
    ]
    mock.tasks.get_all.return_value = [
        {"id": 10, "title": "Dishes", "completed": False, "assigned_to": 1},
        {"id": 11, "title": "Homework", "completed": False, "family_member_id": 2},
        {"id": 12, "title": "Lawn", "completed": False, "family_member_id": 2},
    ]
    mock.events.get_all.return_value = [
        {"id": 20, "title": "Soccer", "start_time": "2025-06-10T16:00:00", "family_member_id": 2},
        {"id": 21, "title": "Yesterday", "start_time": "2025-06-09T16:00:00"},
    ]
    mock.meals.get_by_date.return_value = [
        {"id": 30, "name": "Oats", "meal_type": "breakfast", "date": "2025-06-10"},
        {"id": 31, "name": "Chips", "meal_type": "snack", "date": "2025-06-10"},
    ]
    mock.dashboard.get_leaderboard.return_value = [
        {"id": 2, "name": "Sam", "points": 900},
        {"id": 1, "name": "Mom", "points": 300},
    ]
    mock.dashboard.get_weather.return_value = {"temp": 21.4, "condition": "Sunny", "icon": "☀️"}
    mock.dashboard.get_news.return_value = [{"headline": "Local fair opens", "source": "Gazette"}]
    mock.dashboard.get_user_stats.side_effect = lambda user_id: {
        "current_streak": 8 if str(user_id) == "2" else 1,
        "points_this_week": 120,
    }
    return mock


@pytest.fixture
def tv(client, tmp_path):
    dashboard = TVDashboard(client, Config(tmp_path))
    dashboard.refresh(today=date(2025, 6, 10))
    return dashboard


# =============================================================================
# Refresh
# =============================================================================

class TestRefresh:

    def test_batch_queries(self, tv, client):
        client.tasks.get_all.assert_called_once_with(completed=False)
        client.events.get_all.assert_called_once_with(start="2025-06-10", end="2025-06-10")
        client.meals.get_by_date.assert_called_once_with("2025-06-10")

    def test_snapshot(self, tv):
        assert not tv.loading
        assert tv.error is None
        assert len(tv.data.members) == 3
        assert tv.data.weather.condition == "Sunny"
        assert tv.data.news[0].source == "Gazette"

    def test_stats_default_to_leader(self, tv, client):
        client.dashboard.get_user_stats.assert_called_with(2)
        assert tv.data.stats.current_streak == 8

    def test_failure_keeps_previous_snapshot(self, tv, client):
        client.dashboard.get_news.side_effect = ApiError("news down", 502)
        data = tv.refresh(today=date(2025, 6, 10))
        assert data.news[0].headline == "Local fair opens"
        assert tv.error == "502: news down"

    def test_failure_on_first_load(self, client, tmp_path):
        client.family_members.get_all.side_effect = ApiError("offline")
        dashboard = TVDashboard(client, Config(tmp_path))
        dashboard.refresh()
        assert not dashboard.loading
        assert dashboard.error == "offline"
        assert dashboard.data.tasks == []

    def test_stats_failure_is_tolerated(self, client, tmp_path):
        client.dashboard.get_user_stats.side_effect = ApiError("no stats", 404)
        dashboard = TVDashboard(client, Config(tmp_path))
        dashboard.refresh(today=date(2025, 6, 10))
        assert dashboard.error is None
        assert dashboard.data.stats is None


# =============================================================================
# Filtering
# =============================================================================

class TestFiltering:

    def test_all_pending_tasks(self, tv):
        assert [t.id for t in tv.pending_tasks()] == [10, 11, 12]

    def test_selected_member_tasks(self, tv):
        tv.select_member(2)
        assert [t.id for t in tv.pending_tasks()] == [11, 12]

    def test_members_with_tasks(self, tv):
        assert [m.name for m in tv.members_with_tasks()] == ["Mom", "Sam"]

    def test_todays_events_only(self, tv):
        assert [e.title for e in tv.todays_events()] == ["Soccer"]

    def test_meal_slots(self, tv):
        slots = tv.todays_meals()
        assert list(slots) == ["breakfast", "lunch", "dinner"]
        assert slots["breakfast"].name == "Oats"
        assert slots["dinner"] is None

    def test_unknown_member(self, tv):
        assert tv.member(99) is UNKNOWN_MEMBER
        assert tv.member("1").name == "Mom"

    def test_total_points(self, tv):
        assert tv.total_points() == 1200


# =============================================================================
# Stats selection
# =============================================================================

class TestStatsSelection:

    def test_select_member_loads_their_stats(self, tv, client):
        stats = tv.select_member(1)
        client.dashboard.get_user_stats.assert_called_with(1)
        assert stats.current_streak == 1

    def test_stale_stats_are_discarded(self, tv, client):
        """Stats that arrive after the selection moved on never overwrite the newer ones."""
        def slow_stats(user_id):
            if user_id == 1:
                # Viewer picks Sam while Mom's stats are in flight
                tv.select_member(2)
                return {"current_streak": 1}
            return {"current_streak": 8}

        client.dashboard.get_user_stats.side_effect = slow_stats

        assert tv.select_member(1) is None
        assert tv.selected_member == 2
        assert tv.data.stats.current_streak == 8

    def test_clear_selection_falls_back_to_leader(self, tv, client):
        tv.select_member(1)
        tv.select_member(None)
        client.dashboard.get_user_stats.assert_called_with(2)


# =============================================================================
# Task completion
# =============================================================================

class TestCompleteTask:

    def test_marks_done_and_toggles(self, tv, client):
        assert tv.complete_task(10)
        client.tasks.toggle.assert_called_once_with(10)
        assert [t.id for t in tv.pending_tasks()] == [11, 12]
        assert tv.active_celebrations() == 1

    def test_reverts_on_failure(self, tv, client):
        client.tasks.toggle.side_effect = ApiError("nope", 500)
        assert not tv.complete_task(10)
        assert 10 in [t.id for t in tv.pending_tasks()]

    def test_second_tap_does_not_reopen(self, tv, client):
        assert tv.complete_task(10)
        assert tv.complete_task(10)
        client.tasks.toggle.assert_called_once_with(10)
        assert tv.active_celebrations() == 1
        assert 10 not in [t.id for t in tv.pending_tasks()]

    def test_unknown_task(self, tv, client):
        assert not tv.complete_task(999)
        client.tasks.toggle.assert_not_called()

    def test_celebrations_expire(self, tv):
        tv.complete_task("11")
        started = tv.celebrations[0]
        assert tv.active_celebrations(now=started + CELEBRATION_SECONDS - 0.1) == 1
        assert tv.active_celebrations(now=started + CELEBRATION_SECONDS + 0.1) == 0


# =============================================================================
# Badges, greeting, view
# =============================================================================

class TestBadges:

    def test_streak_badge(self):
        badges = {b.key: b for b in build_badges(UserStats(current_streak=7))}
        assert badges["streak_7"].earned
        assert len(badges) == 5

    def test_no_stats(self):
        badges = {b.key: b for b in build_badges(None)}
        assert not badges["streak_7"].earned
        assert badges["early_bird"].earned


@pytest.mark.parametrize("hour,greeting", [
    (6, "Good Morning"),
    (11, "Good Morning"),
    (12, "Good Afternoon"),
    (17, "Good Afternoon"),
    (18, "Good Evening"),
    (23, "Good Evening"),
])
def test_greeting(hour, greeting):
    assert greeting_for(datetime(2025, 6, 10, hour, 0)) == greeting


def test_view_is_json_ready(tv):
    view = tv.view(now=datetime(2025, 6, 10, 8, 30))
    assert view["greeting"] == "Good Morning"
    assert view["date"] == "Tuesday, June 10, 2025"
    assert view["total_points"] == 1200
    assert view["meals"]["lunch"] is None
    assert [e["title"] for e in view["events"]] == ["Soccer"]
    assert len(view["badges"]) == 5


def test_refresh_seconds(client, tmp_path):
    config = Config(tmp_path)
    config.set("tv_refresh_seconds", 60)
    assert TVDashboard(client, config).refresh_seconds == 60.0


def test_auto_refresh_stops(client, tmp_path):
    dashboard = TVDashboard(client, Config(tmp_path))
    dashboard.start_auto_refresh()
    dashboard.stop_auto_refresh(timeout=5)
    assert dashboard._thread is None
