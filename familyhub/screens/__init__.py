"""
Screens for Family Hub.

Each screen is a controller over one area of the dashboard. They share the
process(intent, context) -> ScreenResponse interface from BaseScreen.
"""

from .base_screen import BaseScreen, ScreenResponse
from .crud_screen import CrudScreen, ToggleScreen, completion_param
from .auth_screen import AuthScreen
from .calendar_screen import CalendarScreen
from .tasks_screen import TasksScreen
from .homework_screen import HomeworkScreen
from .meals_screen import MealsScreen, week_window
from .classes_screen import ClassesScreen
from .family_screen import FamilyScreen
from .types_screen import CategoryTypeScreen
from .leaderboard_screen import LeaderboardScreen, RANKS, rank_for, points_to_next_rank
from .kanban_screen import KanbanScreen, group_columns

__all__ = [
    'BaseScreen',
    'ScreenResponse',
    'CrudScreen',
    'ToggleScreen',
    'completion_param',
    'AuthScreen',
    'CalendarScreen',
    'TasksScreen',
    'HomeworkScreen',
    'MealsScreen',
    'week_window',
    'ClassesScreen',
    'FamilyScreen',
    'CategoryTypeScreen',
    'LeaderboardScreen',
    'RANKS',
    'rank_for',
    'points_to_next_rank',
    'KanbanScreen',
    'group_columns',
]
