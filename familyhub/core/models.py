"""
Data models for Family Hub
Defines the household entities returned by the REST API.

All models are built from API payload dictionaries via ``from_dict``. The
constructors are tolerant: unknown keys are ignored and missing optional keys
become None, so a partially-populated payload never raises. Calendar-relevant
date fields are kept as the ISO strings the API sends; the calendar view model
derives day strings from them.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

EntityId = Union[int, str]

MEAL_TYPES = ["breakfast", "lunch", "dinner", "snack"]
TASK_PRIORITIES = ["low", "medium", "high"]


def _parse_datetime(dt_str: Optional[str]) -> Optional[datetime]:
    """Parse datetime string from the API"""
    if dt_str:
        try:
            return datetime.fromisoformat(str(dt_str).replace("Z", "+00:00"))
        except (ValueError, TypeError):
            return None
    return None


def _as_bool(value: Any) -> bool:
    """API booleans may arrive as 0/1 from SQLite-backed servers"""
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


def _blank_to_none(value: Any) -> Any:
    """Forms submit '' for unselected optional fields"""
    if value == "":
        return None
    return value


@dataclass
class User:
    """Authenticated login account"""
    id: Optional[EntityId] = None
    username: str = ""
    role: str = "member"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        return cls(
            id=data.get('id'),
            username=data.get('username', ''),
            role=data.get('role') or 'member',
        )


@dataclass
class FamilyMember:
    """Household profile with an assigned display color"""
    id: Optional[EntityId] = None
    name: str = ""
    color: str = "#6366f1"
    avatar: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FamilyMember':
        """Create FamilyMember from API payload"""
        return cls(
            id=data.get('id'),
            name=data.get('name', ''),
            color=data.get('color') or '#6366f1',
            avatar=data.get('avatar'),
        )


@dataclass
class Event:
    """Calendar event data model"""
    id: Optional[EntityId] = None
    title: str = ""
    description: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    all_day: bool = False
    family_member_id: Optional[EntityId] = None
    recurrence: Optional[str] = None
    event_type_id: Optional[EntityId] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Event':
        """Create Event from API payload"""
        return cls(
            id=data.get('id'),
            title=data.get('title', ''),
            description=data.get('description'),
            start_time=_blank_to_none(data.get('start_time')),
            end_time=_blank_to_none(data.get('end_time')),
            all_day=_as_bool(data.get('all_day', False)),
            family_member_id=_blank_to_none(data.get('family_member_id')),
            recurrence=_blank_to_none(data.get('recurrence')),
            event_type_id=_blank_to_none(data.get('event_type_id')),
            location=data.get('location'),
            created_at=_parse_datetime(data.get('created_at')),
        )


@dataclass
class Task:
    """Household task data model"""
    id: Optional[EntityId] = None
    title: str = ""
    description: Optional[str] = None
    due_date: Optional[str] = None
    priority: str = "medium"  # 'low', 'medium', 'high'
    completed: bool = False
    family_member_id: Optional[EntityId] = None
    category: Optional[str] = None
    task_type_id: Optional[EntityId] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create Task from API payload"""
        priority = data.get('priority') or 'medium'
        if priority not in TASK_PRIORITIES:
            priority = 'medium'
        return cls(
            id=data.get('id'),
            title=data.get('title', ''),
            description=data.get('description'),
            due_date=_blank_to_none(data.get('due_date')),
            priority=priority,
            completed=_as_bool(data.get('completed', False)),
            # The TV endpoints send assigned_to instead of family_member_id
            family_member_id=_blank_to_none(
                data.get('family_member_id', data.get('assigned_to'))
            ),
            category=_blank_to_none(data.get('category')),
            task_type_id=_blank_to_none(data.get('task_type_id')),
            created_at=_parse_datetime(data.get('created_at')),
        )


@dataclass
class Homework:
    """Homework assignment data model"""
    id: Optional[EntityId] = None
    subject: str = ""
    description: Optional[str] = None
    due_date: Optional[str] = None
    completed: bool = False
    family_member_id: Optional[EntityId] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Homework':
        """Create Homework from API payload"""
        return cls(
            id=data.get('id'),
            subject=data.get('subject', ''),
            description=data.get('description'),
            due_date=_blank_to_none(data.get('due_date')),
            completed=_as_bool(data.get('completed', False)),
            family_member_id=_blank_to_none(data.get('family_member_id')),
            created_at=_parse_datetime(data.get('created_at')),
        )


@dataclass
class Meal:
    """Planned meal data model"""
    id: Optional[EntityId] = None
    date: Optional[str] = None
    meal_type: str = "dinner"  # 'breakfast', 'lunch', 'dinner', 'snack'
    name: str = ""
    ingredients: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Meal':
        """Create Meal from API payload"""
        return cls(
            id=data.get('id'),
            date=_blank_to_none(data.get('date')),
            meal_type=data.get('meal_type') or 'dinner',
            name=data.get('name', ''),
            ingredients=data.get('ingredients'),
            notes=data.get('notes'),
            created_at=_parse_datetime(data.get('created_at')),
        )


@dataclass
class SchoolClass:
    """Recurring class or lesson (``class`` is reserved in Python)"""
    id: Optional[EntityId] = None
    name: str = ""
    subject: str = ""
    schedule: str = ""
    instructor: Optional[str] = None
    notes: Optional[str] = None
    family_member_id: Optional[EntityId] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SchoolClass':
        return cls(
            id=data.get('id'),
            name=data.get('name', ''),
            subject=data.get('subject', ''),
            schedule=data.get('schedule', ''),
            instructor=data.get('instructor'),
            notes=data.get('notes'),
            family_member_id=_blank_to_none(data.get('family_member_id')),
            created_at=_parse_datetime(data.get('created_at')),
        )


@dataclass
class ClassAttendance:
    """One attendance record for a class"""
    id: Optional[EntityId] = None
    class_id: Optional[EntityId] = None
    date: Optional[str] = None
    completed: bool = False
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClassAttendance':
        return cls(
            id=data.get('id'),
            class_id=data.get('class_id'),
            date=data.get('date'),
            completed=_as_bool(data.get('completed', False)),
            notes=data.get('notes'),
        )


@dataclass
class CategoryType:
    """User-defined event or task type (name + color + icon)"""
    id: Optional[EntityId] = None
    name: str = ""
    color: str = "#6366f1"
    icon: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CategoryType':
        return cls(
            id=data.get('id'),
            name=data.get('name', ''),
            color=data.get('color') or '#6366f1',
            icon=data.get('icon'),
        )


@dataclass
class LeaderboardEntry:
    """Points standing for one family member"""
    id: Optional[EntityId] = None
    user_id: Optional[EntityId] = None
    name: str = ""
    avatar: Optional[str] = None
    points: int = 0
    streak: int = 0
    tasks: int = 0
    badges: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeaderboardEntry':
        badges = data.get('badges') or 0
        if isinstance(badges, list):
            badges = len(badges)
        return cls(
            id=data.get('id'),
            user_id=data.get('user_id', data.get('id')),
            name=data.get('name', ''),
            avatar=data.get('avatar'),
            points=int(data.get('points') or 0),
            streak=int(data.get('streak') or 0),
            tasks=int(data.get('tasks') or 0),
            badges=int(badges),
        )


@dataclass
class UserStats:
    """Per-member statistics shown on the TV dashboard"""
    tasks_completed_today: int = 0
    tasks_completed_this_week: int = 0
    current_streak: int = 0
    total_points: int = 0
    points_this_week: int = 0
    badges: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserStats':
        return cls(
            tasks_completed_today=int(data.get('tasks_completed_today') or 0),
            tasks_completed_this_week=int(data.get('tasks_completed_this_week') or 0),
            current_streak=int(data.get('current_streak') or 0),
            total_points=int(data.get('total_points') or 0),
            points_this_week=int(data.get('points_this_week') or 0),
            badges=list(data.get('badges') or []),
        )


@dataclass
class Weather:
    """Current conditions for the TV header"""
    temp: float = 0
    feels_like: float = 0
    condition: str = ""
    icon: str = ""
    humidity: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Weather':
        return cls(
            temp=data.get('temp', 0),
            feels_like=data.get('feels_like', 0),
            condition=data.get('condition', ''),
            icon=data.get('icon', ''),
            humidity=data.get('humidity', 0),
        )


@dataclass
class NewsItem:
    headline: str = ""
    source: str = ""
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NewsItem':
        return cls(
            headline=data.get('headline', ''),
            source=data.get('source', ''),
            url=data.get('url'),
        )


@dataclass
class KanbanTask:
    """Team kanban card"""
    id: Optional[EntityId] = None
    title: str = ""
    description: Optional[str] = None
    status: str = "backlog"  # 'backlog', 'in_progress', 'testing', 'review', 'done'
    priority: str = "p2"  # 'p1', 'p2', 'p3'
    category: str = "feature"  # 'feature', 'bug', 'chore', 'docs'
    assignee: str = ""
    project: Optional[str] = None
    backlog_status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KanbanTask':
        return cls(
            id=data.get('id'),
            title=data.get('title', ''),
            description=data.get('description'),
            status=data.get('status') or 'backlog',
            priority=data.get('priority') or 'p2',
            category=data.get('category') or 'feature',
            assignee=data.get('assignee') or '',
            project=data.get('project'),
            backlog_status=data.get('backlogStatus', data.get('backlog_status')),
        )


def to_dict(model: Any) -> Dict[str, Any]:
    """Serialize a model for JSON responses (datetimes as ISO strings)"""
    result = asdict(model)
    for key, value in result.items():
        if isinstance(value, datetime):
            result[key] = value.isoformat()
    return result
