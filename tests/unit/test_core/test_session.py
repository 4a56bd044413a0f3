"""
Unit tests for the Session auth context.
"""

import json
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from familyhub.core.session import HOME_PATH, LOGIN_PATH, Session


@pytest.fixture
def token_path(tmp_path):
    return tmp_path / "data" / "session.json"


class TestSessionLifecycle:

    def test_new_session_is_logged_out(self):
        session = Session()
        assert not session.is_authenticated
        assert session.location == LOGIN_PATH
        assert session.auth_header() == {}

    def test_start_persists_token(self, token_path):
        session = Session(token_path)
        session.start("abc", {"id": 3, "username": "dad"})

        assert session.is_authenticated
        assert session.location == HOME_PATH
        assert session.auth_header() == {"Authorization": "Bearer abc"}
        stored = json.loads(token_path.read_text())
        assert stored["token"] == "abc"
        assert stored["user"]["username"] == "dad"

    def test_load_restores_token(self, token_path):
        Session(token_path).start("abc", {"id": 3, "username": "dad", "role": "admin"})

        restored = Session(token_path).load()
        assert restored.token == "abc"
        assert restored.user.username == "dad"
        assert restored.user.role == "admin"
        assert restored.location == HOME_PATH

    def test_load_without_file(self, token_path):
        session = Session(token_path).load()
        assert session.token is None
        assert session.location == LOGIN_PATH

    def test_load_ignores_corrupt_file(self, token_path):
        token_path.parent.mkdir(parents=True)
        token_path.write_text("{not json")
        session = Session(token_path).load()
        assert not session.is_authenticated

    @pytest.mark.parametrize("content", ["null", "[]", "\"abc\"", "{\"token\": \"t\", \"user\": 5}"])
    def test_load_ignores_malformed_file(self, token_path, content):
        token_path.parent.mkdir(parents=True)
        token_path.write_text(content)
        session = Session(token_path).load()
        assert session.user is None

    def test_clear_removes_file(self, token_path):
        session = Session(token_path)
        session.start("abc")
        session.clear()
        assert session.token is None
        assert not token_path.exists()

    def test_memory_only_session(self):
        session = Session()
        session.start("abc")
        session.clear()
        assert not session.is_authenticated


class TestExpire:

    def test_expire_redirects_to_login(self, token_path):
        session = Session(token_path)
        session.start("abc")
        redirects = []
        session.on_redirect(redirects.append)

        session.expire()

        assert session.token is None
        assert session.location == LOGIN_PATH
        assert redirects == [LOGIN_PATH]

    def test_expire_when_logged_out_still_navigates(self):
        session = Session()
        session.location = HOME_PATH
        session.expire()
        assert session.location == LOGIN_PATH
