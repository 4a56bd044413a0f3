"""
Core module for Family Hub
Contains configuration, session, API client, and model definitions
"""

from .config import Config
from .errors import FamilyHubError, ApiError, AuthenticationError, ValidationError
from .session import Session
from .api_client import ApiClient
from .resource import Resource, LoadState, fetch_all
from .models import (
    User,
    FamilyMember,
    Event,
    Task,
    Homework,
    Meal,
    SchoolClass,
    ClassAttendance,
    CategoryType,
    LeaderboardEntry,
    UserStats,
    Weather,
    NewsItem,
    KanbanTask,
)

__all__ = [
    'Config', 'Session', 'ApiClient', 'Resource', 'LoadState', 'fetch_all',
    'FamilyHubError', 'ApiError', 'AuthenticationError', 'ValidationError',
    'User', 'FamilyMember', 'Event', 'Task', 'Homework', 'Meal', 'SchoolClass',
    'ClassAttendance', 'CategoryType', 'LeaderboardEntry', 'UserStats',
    'Weather', 'NewsItem', 'KanbanTask',
]
