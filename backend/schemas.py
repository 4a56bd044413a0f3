"""
Pydantic schemas for dashboard server request/response validation.

These schemas provide:
- Type safety for request bodies forwarded to the screens
- Automatic validation and error messages
- OpenAPI documentation generation

Field names follow the household API's payloads so a validated body can be
handed to a screen as its context unchanged.
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

EntityId = Union[int, str]


# =============================================================================
# Base Response Schemas
# =============================================================================

class ScreenResponseSchema(BaseModel):
    """Standard response from any screen intent."""
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    confirmation_required: bool = False
    suggestions: Optional[List[str]] = None

    class Config:
        from_attributes = True


class ErrorResponse(BaseModel):
    """Error response for API errors."""
    detail: str
    redirect: Optional[str] = None


# =============================================================================
# Session Schemas
# =============================================================================

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


# =============================================================================
# Calendar Event Schemas
# =============================================================================

class EventCreate(BaseModel):
    """Request body for creating a calendar event."""
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    start_time: str  # ISO datetime, or a bare date for all-day events
    end_time: Optional[str] = None
    all_day: bool = False
    family_member_id: Optional[EntityId] = None
    recurrence: Optional[str] = None
    event_type_id: Optional[EntityId] = None
    location: Optional[str] = None


class EventUpdate(BaseModel):
    """Request body for updating a calendar event."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    all_day: Optional[bool] = None
    family_member_id: Optional[EntityId] = None
    recurrence: Optional[str] = None
    event_type_id: Optional[EntityId] = None
    location: Optional[str] = None


# =============================================================================
# Task Schemas
# =============================================================================

class TaskCreate(BaseModel):
    """Request body for creating a task."""
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    due_date: Optional[str] = None  # defaults to today
    priority: Optional[str] = None  # low, medium, high
    family_member_id: Optional[EntityId] = None
    category: Optional[str] = None
    task_type_id: Optional[EntityId] = None


class TaskUpdate(BaseModel):
    """Request body for updating a task."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[str] = None
    family_member_id: Optional[EntityId] = None
    category: Optional[str] = None
    task_type_id: Optional[EntityId] = None
    completed: Optional[bool] = None


# =============================================================================
# Homework Schemas
# =============================================================================

class HomeworkCreate(BaseModel):
    subject: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: str
    family_member_id: Optional[EntityId] = None


class HomeworkUpdate(BaseModel):
    subject: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[str] = None
    family_member_id: Optional[EntityId] = None
    completed: Optional[bool] = None


# =============================================================================
# Meal Schemas
# =============================================================================

class MealCreate(BaseModel):
    name: str = Field(..., min_length=1)
    meal_type: str  # breakfast, lunch, dinner, snack
    date: str
    ingredients: Optional[str] = None
    notes: Optional[str] = None


class MealUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    meal_type: Optional[str] = None
    date: Optional[str] = None
    ingredients: Optional[str] = None
    notes: Optional[str] = None


# =============================================================================
# Class Schemas
# =============================================================================

class ClassCreate(BaseModel):
    name: str = Field(..., min_length=1)
    subject: Optional[str] = None
    schedule: Optional[str] = None
    instructor: Optional[str] = None
    notes: Optional[str] = None
    family_member_id: Optional[EntityId] = None


class ClassUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    subject: Optional[str] = None
    schedule: Optional[str] = None
    instructor: Optional[str] = None
    notes: Optional[str] = None
    family_member_id: Optional[EntityId] = None


class AttendanceCreate(BaseModel):
    date: Optional[str] = None  # defaults to today
    completed: bool = True
    notes: Optional[str] = None


# =============================================================================
# Family / Type Schemas
# =============================================================================

class MemberCreate(BaseModel):
    name: str = Field(..., min_length=1)
    color: Optional[str] = None
    avatar: Optional[str] = None


class MemberUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None
    avatar: Optional[str] = None


class TypeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    color: Optional[str] = None
    icon: Optional[str] = None


class TypeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    color: Optional[str] = None
    icon: Optional[str] = None


# =============================================================================
# Kanban / TV Schemas
# =============================================================================

class KanbanMove(BaseModel):
    status: str  # backlog, in_progress, testing, review, done


class MemberSelection(BaseModel):
    member_id: Optional[EntityId] = None
