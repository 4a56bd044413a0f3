"""
Task management endpoints.

Thin wrappers over the TasksScreen: every route forwards its parameters as
an intent context and returns the screen's response.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from backend.dependencies import get_tasks_screen
from backend.responses import to_schema
from backend.schemas import ScreenResponseSchema, TaskCreate, TaskUpdate
from familyhub.screens import TasksScreen

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/", response_model=ScreenResponseSchema)
def list_tasks(
    filter: Optional[str] = Query(None, description="all, pending or completed"),
    family_member_id: Optional[str] = Query(None, description="Filter by member"),
    category: Optional[str] = Query(None, description="Filter by category"),
    screen: TasksScreen = Depends(get_tasks_screen),
):
    """List tasks with optional completion/member/category filters."""
    context = {}
    if filter:
        context["filter"] = filter
    if family_member_id:
        context["family_member_id"] = family_member_id
    if category:
        context["category"] = category

    return to_schema(screen.process("list", context))


@router.get("/new", response_model=ScreenResponseSchema)
def new_task_form(screen: TasksScreen = Depends(get_tasks_screen)):
    """Defaults for an empty create form (due today, medium priority)."""
    return to_schema(screen.process("new_form"))


@router.get("/{task_id}", response_model=ScreenResponseSchema)
def get_task(task_id: str, screen: TasksScreen = Depends(get_tasks_screen)):
    return to_schema(screen.process("get", {"id": task_id}), failure_status=404)


@router.post("/", response_model=ScreenResponseSchema, status_code=201)
def create_task(task: TaskCreate, screen: TasksScreen = Depends(get_tasks_screen)):
    """Create a task; unset optional fields are left to the screen's defaults."""
    context = {k: v for k, v in task.model_dump().items() if v is not None}
    return to_schema(screen.process("create", context))


@router.put("/{task_id}", response_model=ScreenResponseSchema)
def update_task(task_id: str, task: TaskUpdate, screen: TasksScreen = Depends(get_tasks_screen)):
    """Update an existing task. Only fields that were explicitly set are sent."""
    context = {"id": task_id}
    context.update(task.model_dump(exclude_unset=True))
    return to_schema(screen.process("update", context))


@router.patch("/{task_id}/toggle", response_model=ScreenResponseSchema)
def toggle_task(task_id: str, screen: TasksScreen = Depends(get_tasks_screen)):
    """Flip a task between pending and completed."""
    return to_schema(screen.process("toggle", {"id": task_id}))


@router.delete("/{task_id}", response_model=ScreenResponseSchema)
def delete_task(
    task_id: str,
    confirmed: bool = Query(False, description="Must be true to delete"),
    screen: TasksScreen = Depends(get_tasks_screen),
):
    return to_schema(screen.process("delete", {"id": task_id, "confirmed": confirmed}))
