"""
Auth screen for Family Hub.
Login, registration, current user and password change.
"""

from typing import Any, Dict

from .base_screen import BaseScreen, ScreenResponse
from ..core.errors import ApiError
from ..core.models import to_dict
from ..core.session import HOME_PATH, LOGIN_PATH

MIN_PASSWORD_LENGTH = 6


class AuthScreen(BaseScreen):
    """
    Handles intents:
    - login: username + password; starts the session
    - register: username + password (+ role); logs in when a token comes back
    - me: refresh the current user
    - change_password: current_password + new_password
    - logout: clear the session
    """

    def __init__(self, client, config, session):
        super().__init__(client, config, "auth")
        self.session = session

    def get_handlers(self):
        return {
            "login": self._handle_login,
            "register": self._handle_register,
            "me": self._handle_me,
            "change_password": self._handle_change_password,
            "logout": self._handle_logout,
        }

    def _session_data(self) -> Dict[str, Any]:
        return {
            "authenticated": self.session.is_authenticated,
            "user": to_dict(self.session.user) if self.session.user else None,
            "location": self.session.location,
        }

    def _handle_login(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["username", "password"])
        try:
            result = self.client.auth.login(context["username"], context["password"])
        except ApiError as e:
            # 401 here means bad credentials, not an expired session
            payload_error = e.payload.get("error") if isinstance(e.payload, dict) else None
            return ScreenResponse.error(payload_error or "Login failed", data=self._session_data())

        if not result or not result.get("token"):
            return ScreenResponse.error("Login failed", data=self._session_data())

        self.session.start(result["token"], result.get("user"))
        self.log_action("logged_in", {"username": context["username"]})
        return ScreenResponse.ok(
            message=f"Welcome, {self.session.user.username if self.session.user else context['username']}",
            data=self._session_data(),
        )

    def _handle_register(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["username", "password"])
        if len(str(context["password"])) < MIN_PASSWORD_LENGTH:
            return ScreenResponse.error(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                data={"field": "password"},
            )
        result = self.client.auth.register(
            context["username"], context["password"], context.get("role")
        ) or {}
        if result.get("token"):
            self.session.start(result["token"], result.get("user"))
        self.log_action("registered", {"username": context["username"]})
        return ScreenResponse.ok(message=f"Registered {context['username']}", data=self._session_data())

    def _handle_me(self, context: Dict[str, Any]) -> ScreenResponse:
        user = self.client.auth.me()
        if isinstance(user, dict) and "user" in user:
            user = user["user"]
        self.session.set_user(user or {})
        return ScreenResponse.ok(message=self.session.user.username, data=self._session_data())

    def _handle_change_password(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["current_password", "new_password"])
        if len(str(context["new_password"])) < MIN_PASSWORD_LENGTH:
            return ScreenResponse.error(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                data={"field": "new_password"},
            )
        self.client.auth.change_password(context["current_password"], context["new_password"])
        self.log_action("password_changed")
        return ScreenResponse.ok(message="Password changed")

    def _handle_logout(self, context: Dict[str, Any]) -> ScreenResponse:
        self.session.clear()
        self.session.navigate(LOGIN_PATH)
        self.log_action("logged_out")
        return ScreenResponse.ok(message="Logged out", data=self._session_data())

    def landing_path(self) -> str:
        """Where the router sends the user on startup."""
        return HOME_PATH if self.session.is_authenticated else LOGIN_PATH
