"""
Unit tests for the API client.
Tests URL building, auth headers, error mapping and the 401/403 redirect.
"""

import pytest
import requests
from pathlib import Path
from unittest.mock import MagicMock

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from familyhub.core.api_client import ApiClient, _clean_params
from familyhub.core.config import Config
from familyhub.core.errors import ApiError, AuthenticationError
from familyhub.core.session import HOME_PATH, LOGIN_PATH, Session


def _response(status_code=200, body=None, reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.content = b"" if body is None else b"{}"
    response.json.return_value = body
    return response


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.delenv("FAMILYHUB_API_URL", raising=False)
    cfg = Config(tmp_path / "config")
    cfg.set("api_base_url", "http://api.test/api/")
    return cfg


@pytest.fixture
def session(tmp_path):
    s = Session(tmp_path / "data" / "session.json")
    s.start("secret-token", {"id": 1, "username": "mom", "role": "admin"})
    return s


@pytest.fixture
def http():
    mock = MagicMock()
    mock.headers = {}
    mock.request.return_value = _response(body=[])
    return mock


@pytest.fixture
def client(config, session, http):
    return ApiClient(config, session, http=http)


class TestRequests:
    """Tests for request construction."""

    def test_base_url_trailing_slash_is_dropped(self, client, http):
        client.tasks.get_all()
        args, kwargs = http.request.call_args
        assert args == ("GET", "http://api.test/api/tasks")

    def test_bearer_token_attached(self, client, http):
        client.events.get_all()
        headers = http.request.call_args.kwargs["headers"]
        assert headers == {"Authorization": "Bearer secret-token"}

    def test_no_token_no_header(self, config, http):
        ApiClient(config, Session(), http=http).family_members.get_all()
        assert http.request.call_args.kwargs["headers"] == {}

    def test_json_content_type(self, client, http):
        assert http.headers["Content-Type"] == "application/json"

    def test_timeout_from_config(self, client, http):
        client.meals.get_all()
        assert http.request.call_args.kwargs["timeout"] == 10

    def test_toggle_is_patch(self, client, http):
        http.request.return_value = _response(body={"id": 5, "completed": True})
        result = client.tasks.toggle(5)
        assert http.request.call_args.args == ("PATCH", "http://api.test/api/tasks/5/toggle")
        assert result == {"id": 5, "completed": True}

    def test_create_sends_json_body(self, client, http):
        client.homework.create({"subject": "Math"})
        assert http.request.call_args.args[0] == "POST"
        assert http.request.call_args.kwargs["json"] == {"subject": "Math"}

    def test_meals_by_date(self, client, http):
        client.meals.get_by_date("2025-06-01")
        assert http.request.call_args.args[1].endswith("/meals/date/2025-06-01")

    def test_kanban_move(self, client, http):
        client.kanban.move_task(7, "done")
        args, kwargs = http.request.call_args
        assert args == ("PATCH", "http://api.test/api/team-kanban/tasks/7/move")
        assert kwargs["json"] == {"status": "done"}

    def test_change_password_body(self, client, http):
        client.auth.change_password("old", "newpass")
        assert http.request.call_args.kwargs["json"] == {
            "currentPassword": "old", "newPassword": "newpass",
        }

    def test_empty_list_body(self, client, http):
        http.request.return_value = _response(body=None)
        assert client.tasks.get_all() == []


class TestErrors:
    """Tests for failure handling."""

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_failure_expires_session(self, client, http, session, status):
        """Any 401/403 clears the token and routes to /login."""
        http.request.return_value = _response(status, {"error": "Invalid token"}, "Unauthorized")
        assert session.location == HOME_PATH

        with pytest.raises(AuthenticationError) as exc_info:
            client.tasks.get_all()

        assert exc_info.value.status_code == status
        assert exc_info.value.message == "Invalid token"
        assert session.token is None
        assert session.user is None
        assert session.location == LOGIN_PATH
        assert not session.token_path.exists()

    def test_auth_failure_notifies_listeners(self, client, http, session):
        seen = []
        session.on_redirect(seen.append)
        http.request.return_value = _response(401, {}, "Unauthorized")
        with pytest.raises(AuthenticationError):
            client.events.get_all()
        assert seen == [LOGIN_PATH]

    def test_server_error_is_api_error(self, client, http, session):
        http.request.return_value = _response(500, {"error": "Database locked"}, "Server Error")
        with pytest.raises(ApiError) as exc_info:
            client.tasks.create({"title": "x"})
        assert not isinstance(exc_info.value, AuthenticationError)
        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "500: Database locked"
        assert session.is_authenticated

    def test_reason_used_without_error_field(self, client, http):
        http.request.return_value = _response(404, None, "Not Found")
        with pytest.raises(ApiError) as exc_info:
            client.tasks.get(99)
        assert exc_info.value.message == "Not Found"

    def test_network_failure(self, client, http):
        http.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ApiError) as exc_info:
            client.tasks.get_all()
        assert exc_info.value.status_code is None
        assert "Network error" in str(exc_info.value)

    def test_no_retry(self, client, http):
        http.request.return_value = _response(502, None, "Bad Gateway")
        with pytest.raises(ApiError):
            client.tasks.get_all()
        assert http.request.call_count == 1


class TestCleanParams:

    def test_drops_unset(self):
        assert _clean_params({"a": None, "b": "", "c": 0}) == {"c": 0}

    def test_booleans(self):
        assert _clean_params({"completed": False, "all": True}) == {"completed": "false", "all": "true"}

    def test_none(self):
        assert _clean_params(None) == {}
