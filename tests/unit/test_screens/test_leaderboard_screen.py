"""
Unit tests for leaderboard ranks and the LeaderboardScreen.
"""

import pytest
from pathlib import Path
from unittest.mock import MagicMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from familyhub.core.config import Config
from familyhub.core.errors import ApiError
from familyhub.screens.leaderboard_screen import (
    LeaderboardScreen,
    next_rank,
    points_to_next_rank,
    rank_for,
)


class TestRanks:

    @pytest.mark.parametrize("points,expected", [
        (0, "Bronze"),
        (499, "Bronze"),
        (500, "Silver"),
        (1499, "Silver"),
        (1500, "Gold"),
        (3000, "Platinum"),
        (4999, "Platinum"),
        (5000, "Diamond"),
        (99999, "Diamond"),
    ])
    def test_rank_for(self, points, expected):
        assert rank_for(points).name == expected

    def test_points_to_next_rank(self):
        assert points_to_next_rank(1200) == 300
        assert next_rank(1200).name == "Gold"

    def test_top_rank_has_no_next(self):
        assert next_rank(5000) is None
        assert points_to_next_rank(6000) == 0


@pytest.fixture
def client():
    mock = MagicMock()
    mock.dashboard.get_leaderboard.return_value = [
        {"id": 1, "name": "Sam", "points": 320},
        {"id": 2, "name": "Mom", "points": 1800, "badges": ["early-bird"]},
        {"id": 3, "name": "Dad", "points": 900},
        {"id": 4, "name": "Lee", "points": 40},
    ]
    return mock


@pytest.fixture
def screen(client, tmp_path):
    return LeaderboardScreen(client, Config(tmp_path))


class TestStandingsIntent:

    def test_sorted_with_positions(self, screen):
        response = screen.process("standings")
        entries = response.data["entries"]
        assert [e["name"] for e in entries] == ["Mom", "Dad", "Sam", "Lee"]
        assert [e["position"] for e in entries] == [1, 2, 3, 4]
        assert entries[0]["rank"] == "Gold"
        assert entries[0]["badges"] == 1

    def test_podium_and_total(self, screen):
        data = screen.process("standings").data
        assert [e["name"] for e in data["podium"]] == ["Mom", "Dad", "Sam"]
        assert data["total_points"] == 3060

    def test_period_forwarded(self, screen, client):
        screen.process("standings", {"period": "month"})
        client.dashboard.get_leaderboard.assert_called_with(period="month")

    def test_default_period_from_preferences(self, screen, client):
        screen.process("standings")
        client.dashboard.get_leaderboard.assert_called_with(period="week")

    def test_invalid_period(self, screen, client):
        response = screen.process("standings", {"period": "decade"})
        assert not response.success
        client.dashboard.get_leaderboard.assert_not_called()

    def test_load_failure(self, screen, client):
        client.dashboard.get_leaderboard.side_effect = ApiError("down", 500)
        assert not screen.process("standings").success


class TestProgressIntent:

    def test_points_away_message(self, screen):
        response = screen.process("progress", {"user_id": 3})
        assert response.message == "Gold rank - 600 points away!"
        assert response.data["rank"] == "Silver"

    def test_user_id_compared_as_string(self, screen):
        assert screen.process("progress", {"user_id": "1"}).data["next_rank"] == "Silver"

    def test_unknown_user(self, screen):
        assert not screen.process("progress", {"user_id": 99}).success

    def test_top_tier(self, screen, client):
        client.dashboard.get_leaderboard.return_value = [{"id": 1, "name": "Mom", "points": 7000}]
        response = screen.process("progress", {"user_id": 1})
        assert response.data["next_rank"] is None
        assert "Diamond" in response.message
