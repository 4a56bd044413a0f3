"""
HTTP client for the household REST API.

Wraps a ``requests.Session`` with the conventions every screen relies on:
- the base URL comes from Config ($FAMILYHUB_API_URL overrides it)
- the session's bearer token is attached to every request
- a 401 or 403 response expires the session (token cleared, location set to
  /login) and raises AuthenticationError
- any other failure raises ApiError; nothing is retried

Resources are grouped into small endpoint objects mirroring the REST surface:

    client = ApiClient(config, session)
    client.tasks.get_all(completed=False)
    client.tasks.toggle(task_id)
    client.meals.get_by_date("2025-06-01")
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .errors import ApiError, AuthenticationError
from .models import EntityId
from .session import Session

logger = logging.getLogger("familyhub.api")

AUTH_FAILURE_CODES = (401, 403)


def _clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop unset filters and serialize booleans the way the API expects."""
    if not params:
        return {}
    cleaned = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


class ApiClient:
    """Thin JSON client bound to one Session."""

    def __init__(self, config, session: Session,
                 http: Optional[requests.Session] = None):
        """
        Args:
            config: Config providing api_base_url and request_timeout
            session: Auth context whose token is attached to requests
            http: Optional pre-built requests.Session (tests inject mocks)
        """
        self.config = config
        self.session = session
        self.base_url = config.get_api_base_url()
        self.timeout = config.get("request_timeout", default=10)
        self.http = http or requests.Session()
        self.http.headers.update({"Content-Type": "application/json"})

        self.auth = AuthEndpoint(self)
        self.family_members = Endpoint(self, "/family-members")
        self.events = Endpoint(self, "/events")
        self.tasks = ToggleEndpoint(self, "/tasks")
        self.homework = ToggleEndpoint(self, "/homework")
        self.meals = MealsEndpoint(self, "/meals")
        self.classes = ClassesEndpoint(self, "/classes")
        self.event_types = Endpoint(self, "/event-types")
        self.task_types = Endpoint(self, "/task-types")
        self.dashboard = DashboardEndpoint(self)
        self.kanban = KanbanEndpoint(self, "/team-kanban/tasks")

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json: Any = None) -> Any:
        """
        Perform one request and return the decoded JSON body.

        Raises:
            AuthenticationError: on 401/403 (after expiring the session)
            ApiError: on any other HTTP error or transport failure
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(
                method,
                url,
                params=_clean_params(params),
                json=json,
                headers=self.session.auth_header(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(f"Network error: {e}") from e

        payload = self._decode(response)

        if response.status_code in AUTH_FAILURE_CODES:
            self.session.expire()
            raise AuthenticationError(
                self._error_message(payload, response, "Not authorized"),
                status_code=response.status_code,
                payload=payload,
            )

        if response.status_code >= 400:
            message = self._error_message(payload, response, "Request failed")
            logger.error(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=payload)

        return payload

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Any = None) -> Any:
        return self.request("POST", path, json=data)

    def put(self, path: str, data: Any = None) -> Any:
        return self.request("PUT", path, json=data)

    def patch(self, path: str, data: Any = None) -> Any:
        return self.request("PATCH", path, json=data)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _error_message(payload: Any, response: requests.Response, fallback: str) -> str:
        if isinstance(payload, dict):
            for key in ("error", "message", "detail"):
                if payload.get(key):
                    return str(payload[key])
        return response.reason or fallback


class Endpoint:
    """CRUD operations on one REST collection."""

    def __init__(self, client: ApiClient, path: str):
        self.client = client
        self.path = path

    def get_all(self, **params) -> List[Dict[str, Any]]:
        return self.client.get(self.path, params=params) or []

    def get(self, item_id: EntityId) -> Dict[str, Any]:
        return self.client.get(f"{self.path}/{item_id}")

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.post(self.path, data)

    def update(self, item_id: EntityId, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.put(f"{self.path}/{item_id}", data)

    def delete(self, item_id: EntityId) -> Any:
        return self.client.delete(f"{self.path}/{item_id}")


class ToggleEndpoint(Endpoint):
    """Collections whose items carry a completion flag (tasks, homework)."""

    def toggle(self, item_id: EntityId) -> Dict[str, Any]:
        return self.client.patch(f"{self.path}/{item_id}/toggle")


class MealsEndpoint(Endpoint):

    def get_by_date(self, day: str) -> List[Dict[str, Any]]:
        return self.client.get(f"{self.path}/date/{day}") or []


class ClassesEndpoint(Endpoint):

    def get_attendance(self, class_id: EntityId) -> List[Dict[str, Any]]:
        return self.client.get(f"{self.path}/{class_id}/attendance") or []

    def add_attendance(self, class_id: EntityId, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.post(f"{self.path}/{class_id}/attendance", data)


class AuthEndpoint:

    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self.client.post("/auth/login", {"username": username, "password": password})

    def register(self, username: str, password: str, role: Optional[str] = None) -> Dict[str, Any]:
        return self.client.post(
            "/auth/register", {"username": username, "password": password, "role": role}
        )

    def me(self) -> Dict[str, Any]:
        return self.client.get("/auth/me")

    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return self.client.post(
            "/auth/change-password",
            {"currentPassword": current_password, "newPassword": new_password},
        )


class DashboardEndpoint:
    """Read-only aggregates backing the TV dashboard and leaderboard."""

    def __init__(self, client: ApiClient):
        self.client = client

    def get_leaderboard(self, **params) -> List[Dict[str, Any]]:
        return self.client.get("/leaderboard", params=params) or []

    def get_user_stats(self, user_id: EntityId) -> Dict[str, Any]:
        return self.client.get(f"/users/{user_id}/stats") or {}

    def get_weather(self) -> Optional[Dict[str, Any]]:
        return self.client.get("/weather")

    def get_news(self) -> List[Dict[str, Any]]:
        return self.client.get("/news") or []


class KanbanEndpoint:

    def __init__(self, client: ApiClient, path: str):
        self.client = client
        self.path = path

    def get_tasks(self, **filters) -> List[Dict[str, Any]]:
        return self.client.get(self.path, params=filters) or []

    def move_task(self, task_id: EntityId, status: str) -> Dict[str, Any]:
        return self.client.patch(f"{self.path}/{task_id}/move", {"status": status})

    def delete_task(self, task_id: EntityId) -> Any:
        return self.client.delete(f"{self.path}/{task_id}")
