"""
Team kanban endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from backend.dependencies import get_kanban_screen
from backend.responses import to_schema
from backend.schemas import KanbanMove, ScreenResponseSchema
from familyhub.screens import KanbanScreen

router = APIRouter(prefix="/kanban", tags=["kanban"])


@router.get("/", response_model=ScreenResponseSchema)
def get_board(
    view: Optional[str] = Query(None, description="team or mine"),
    assignee: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    project: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    screen: KanbanScreen = Depends(get_kanban_screen),
):
    """Cards grouped into backlog / in progress / testing / review / done."""
    context = {
        "view": view,
        "assignee": assignee,
        "category": category,
        "priority": priority,
        "project": project,
        "status": status,
    }
    context = {k: v for k, v in context.items() if v is not None}
    return to_schema(screen.process("board", context), failure_status=502)


@router.patch("/{task_id}/move", response_model=ScreenResponseSchema)
def move_card(task_id: str, body: KanbanMove, screen: KanbanScreen = Depends(get_kanban_screen)):
    return to_schema(screen.process("move", {"id": task_id, "status": body.status}))


@router.delete("/{task_id}", response_model=ScreenResponseSchema)
def delete_card(
    task_id: str,
    confirmed: bool = Query(False, description="Must be true to delete"),
    screen: KanbanScreen = Depends(get_kanban_screen),
):
    return to_schema(screen.process("delete", {"id": task_id, "confirmed": confirmed}))
