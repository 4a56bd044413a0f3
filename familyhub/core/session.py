"""
Session (auth context) for Family Hub.

Holds the bearer token and the current user. The token is the only state the
client persists: ``load()`` reads it from the token file at startup and
``expire()`` tears it down when the API answers 401/403, recording a
navigation to the login screen.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .models import User

LOGIN_PATH = "/login"
HOME_PATH = "/"

logger = logging.getLogger("familyhub.session")


class Session:
    """
    Authentication context shared by the API client and every screen.

    Attributes:
        token: Bearer token, or None when logged out
        user: Current user once ``/auth/me`` or login has populated it
        location: Path the UI should be showing ("/" or "/login")
    """

    def __init__(self, token_path: Optional[Path] = None):
        """
        Args:
            token_path: File the token is persisted to. None keeps the
                session in memory only (used by tests and the TV kiosk).
        """
        self.token_path = Path(token_path) if token_path else None
        self.token: Optional[str] = None
        self.user: Optional[User] = None
        self.location = LOGIN_PATH
        self._redirect_listeners: List[Callable[[str], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def load(self) -> 'Session':
        """Restore the token from disk, if one was saved."""
        if self.token_path and self.token_path.exists():
            try:
                with open(self.token_path, 'r') as f:
                    stored = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning(f"Ignoring unreadable token file {self.token_path}: {e}")
                stored = {}
            if not isinstance(stored, dict):
                logger.warning(f"Ignoring malformed token file {self.token_path}")
                stored = {}
            self.token = stored.get("token")
            if isinstance(stored.get("user"), dict):
                self.user = User.from_dict(stored["user"])
        self.location = HOME_PATH if self.token else LOGIN_PATH
        return self

    def start(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        """Begin an authenticated session (after a successful login)."""
        self.token = token
        self.user = User.from_dict(user) if user else None
        self._persist()
        self.location = HOME_PATH
        logger.info("Session started for %s", self.user.username if self.user else "unknown user")

    def set_user(self, user: Dict[str, Any]) -> None:
        self.user = User.from_dict(user)
        self._persist()

    def clear(self) -> None:
        """Drop the token and user (logout)."""
        self.token = None
        self.user = None
        if self.token_path and self.token_path.exists():
            self.token_path.unlink()

    def expire(self) -> None:
        """
        Tear the session down after an auth failure and go to the login screen.
        """
        had_token = self.token is not None
        self.clear()
        self.navigate(LOGIN_PATH)
        if had_token:
            logger.warning("Session expired; redirecting to %s", LOGIN_PATH)

    def navigate(self, path: str) -> None:
        self.location = path
        for listener in self._redirect_listeners:
            listener(path)

    def on_redirect(self, listener: Callable[[str], None]) -> None:
        """Register a callback invoked with the new path on every navigation."""
        self._redirect_listeners.append(listener)

    def auth_header(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _persist(self) -> None:
        if not self.token_path:
            return
        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "token": self.token,
            "user": {
                "id": self.user.id,
                "username": self.user.username,
                "role": self.user.role,
            } if self.user else None,
        }
        with open(self.token_path, 'w') as f:
            json.dump(data, f, indent=2)
