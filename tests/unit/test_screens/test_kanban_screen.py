"""
Unit tests for the KanbanScreen.
"""

import pytest
from pathlib import Path
from unittest.mock import MagicMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from familyhub.core.config import Config
from familyhub.core.errors import ApiError, AuthenticationError
from familyhub.core.models import KanbanTask
from familyhub.screens.kanban_screen import (
    DELETE_FAILED,
    LOAD_FAILED,
    MOVE_FAILED,
    KanbanScreen,
    group_columns,
)


@pytest.fixture
def client():
    mock = MagicMock()
    mock.kanban.get_tasks.return_value = [
        {"id": 1, "title": "Login page", "status": "in_progress", "assignee": "pow"},
        {"id": 2, "title": "Fix crash", "status": "backlog", "assignee": "sam", "category": "bug"},
        {"id": 3, "title": "Docs", "status": "done", "assignee": "pow"},
    ]
    return mock


@pytest.fixture
def screen(client, tmp_path):
    return KanbanScreen(client, Config(tmp_path))


def _column(data, status):
    return next(c for c in data["columns"] if c["status"] == status)


class TestBoardIntent:

    def test_columns(self, screen):
        data = screen.process("board").data
        assert [c["status"] for c in data["columns"]] == ["backlog", "in_progress", "testing", "review", "done"]
        assert _column(data, "in_progress")["count"] == 1
        assert _column(data, "testing")["tasks"] == []

    def test_filters_forwarded(self, screen, client):
        screen.process("board", {"category": "bug", "priority": "", "ignored": "x"})
        client.kanban.get_tasks.assert_called_once_with(category="bug")

    def test_mine_view(self, screen):
        response = screen.process("board", {"view": "mine"})
        assert response.message == "2 task(s) on the board"
        assert _column(response.data, "backlog")["count"] == 0

    def test_mine_view_uses_preference(self, screen, tmp_path):
        screen.config.set("kanban_assignee", "sam", section="preferences")
        data = screen.process("board", {"view": "mine"}).data
        assert _column(data, "backlog")["count"] == 1
        assert _column(data, "done")["count"] == 0

    def test_invalid_view(self, screen):
        assert not screen.process("board", {"view": "everyone"}).success

    def test_load_failure_message(self, screen, client):
        client.kanban.get_tasks.side_effect = ApiError("connection refused")
        response = screen.process("board")
        assert not response.success
        assert response.message == LOAD_FAILED
        assert response.data["error"] == LOAD_FAILED

    def test_auth_failure_propagates(self, screen, client):
        client.kanban.get_tasks.side_effect = AuthenticationError("expired", 401)
        with pytest.raises(AuthenticationError):
            screen.process("board")


class TestMoveIntent:

    def test_move_patches_locally(self, screen, client):
        screen.process("board")
        response = screen.process("move", {"id": 2, "status": "review"})
        assert response.success
        client.kanban.move_task.assert_called_once_with(2, "review")
        assert _column(response.data, "review")["tasks"][0]["id"] == 2
        assert client.kanban.get_tasks.call_count == 1

    def test_invalid_status(self, screen, client):
        assert not screen.process("move", {"id": 2, "status": "blocked"}).success
        client.kanban.move_task.assert_not_called()

    def test_move_failure_keeps_column(self, screen, client):
        screen.process("board")
        client.kanban.move_task.side_effect = ApiError("nope", 500)
        response = screen.process("move", {"id": 2, "status": "done"})
        assert response.message == MOVE_FAILED
        assert _column(response.data, "backlog")["count"] == 1


class TestDeleteIntent:

    def test_needs_confirmation(self, screen, client):
        assert screen.process("delete", {"id": 1}).confirmation_required
        client.kanban.delete_task.assert_not_called()

    def test_delete_removes_card(self, screen, client):
        screen.process("board")
        response = screen.process("delete", {"id": "1", "confirmed": True})
        assert _column(response.data, "in_progress")["count"] == 0

    def test_delete_failure(self, screen, client):
        client.kanban.delete_task.side_effect = ApiError("nope", 500)
        assert screen.process("delete", {"id": 1, "confirmed": True}).message == DELETE_FAILED


def test_group_columns_drops_unknown_status():
    columns = group_columns([KanbanTask(id=1, status="archived"), KanbanTask(id=2, status="done")])
    assert sum(len(tasks) for tasks in columns.values()) == 1
