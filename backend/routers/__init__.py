"""
API routers for the Family Hub dashboard server.

Each router exposes one screen:
- session: login, logout, current user
- calendar: month grid, day detail, events
- tasks, meals: task list and meal planner
- household: homework, classes, family members, event/task types
- leaderboard: standings and rank progress
- kanban: team board
- dashboard: TV kiosk view
"""

from .session import router as session_router
from .calendar import router as calendar_router
from .tasks import router as tasks_router
from .meals import router as meals_router
from .household import (
    homework_router,
    classes_router,
    family_router,
    event_types_router,
    task_types_router,
)
from .leaderboard import router as leaderboard_router
from .kanban import router as kanban_router
from .dashboard import router as dashboard_router

ALL_ROUTERS = [
    session_router,
    calendar_router,
    tasks_router,
    meals_router,
    homework_router,
    classes_router,
    family_router,
    event_types_router,
    task_types_router,
    leaderboard_router,
    kanban_router,
    dashboard_router,
]

__all__ = [
    'session_router',
    'calendar_router',
    'tasks_router',
    'meals_router',
    'homework_router',
    'classes_router',
    'family_router',
    'event_types_router',
    'task_types_router',
    'leaderboard_router',
    'kanban_router',
    'dashboard_router',
    'ALL_ROUTERS',
]
