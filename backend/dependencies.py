"""
Dependency injection for FastAPI endpoints.

Provides singleton instances of Config, Session, ApiClient and the screens
to be used across all dashboard routes. Screens hold the lists they last
fetched, so each one is created once per process.

Pattern: **Dependency Injection** - routes receive screens through Depends(),
so tests can swap any of them with app.dependency_overrides.
"""

from functools import lru_cache
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from familyhub.core import ApiClient, Config, Session
from familyhub.dashboard import TVDashboard
from familyhub.screens import (
    AuthScreen,
    CalendarScreen,
    CategoryTypeScreen,
    ClassesScreen,
    FamilyScreen,
    HomeworkScreen,
    KanbanScreen,
    LeaderboardScreen,
    MealsScreen,
    TasksScreen,
)


@lru_cache()
def get_config() -> Config:
    """
    Get cached Config instance.

    lru_cache ensures we only create one Config instance
    for the lifetime of the application (singleton pattern).
    """
    return Config()


@lru_cache()
def get_session() -> Session:
    """Auth context, with any saved token restored from disk."""
    return Session(get_config().get_token_path()).load()


@lru_cache()
def get_api_client() -> ApiClient:
    """Authenticated client shared by every screen."""
    return ApiClient(get_config(), get_session())


@lru_cache()
def get_auth_screen() -> AuthScreen:
    return AuthScreen(get_api_client(), get_config(), get_session())


@lru_cache()
def get_calendar_screen() -> CalendarScreen:
    return CalendarScreen(get_api_client(), get_config())


@lru_cache()
def get_tasks_screen() -> TasksScreen:
    return TasksScreen(get_api_client(), get_config())


@lru_cache()
def get_homework_screen() -> HomeworkScreen:
    return HomeworkScreen(get_api_client(), get_config())


@lru_cache()
def get_meals_screen() -> MealsScreen:
    return MealsScreen(get_api_client(), get_config())


@lru_cache()
def get_classes_screen() -> ClassesScreen:
    return ClassesScreen(get_api_client(), get_config())


@lru_cache()
def get_family_screen() -> FamilyScreen:
    return FamilyScreen(get_api_client(), get_config())


@lru_cache()
def get_event_types_screen() -> CategoryTypeScreen:
    return CategoryTypeScreen(get_api_client(), get_config(), "event")


@lru_cache()
def get_task_types_screen() -> CategoryTypeScreen:
    return CategoryTypeScreen(get_api_client(), get_config(), "task")


@lru_cache()
def get_leaderboard_screen() -> LeaderboardScreen:
    return LeaderboardScreen(get_api_client(), get_config())


@lru_cache()
def get_kanban_screen() -> KanbanScreen:
    return KanbanScreen(get_api_client(), get_config())


@lru_cache()
def get_tv_dashboard() -> TVDashboard:
    """
    TV dashboard on its own in-memory session: its read endpoints are
    public, and a kiosk never logs in.
    """
    config = get_config()
    return TVDashboard(ApiClient(config, Session()), config)
