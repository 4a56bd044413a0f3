"""
Exception hierarchy for Family Hub.

Every failure that crosses the HTTP boundary is an ApiError. Authentication
failures (401/403) get their own subclass so callers can route them to the
login screen without inspecting status codes.
"""

from typing import Any, Optional


class FamilyHubError(Exception):
    """Base class for all Family Hub errors."""


class ApiError(FamilyHubError):
    """
    A request to the household API failed.

    Attributes:
        status_code: HTTP status, or None when the request never got a response
        message: Human-readable message (server "error" field when present)
        payload: Decoded response body, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None,
                 payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class AuthenticationError(ApiError):
    """The API rejected our credentials (401/403); the session was cleared."""

    redirect_to = "/login"


class ValidationError(FamilyHubError):
    """Client-side form validation failed before any request was made."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
