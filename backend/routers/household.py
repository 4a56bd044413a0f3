"""
CRUD endpoints for the plain household collections.

Homework, classes, family members, event types and task types all expose the
same five routes over a CrudScreen, so their routers are built by one
factory. Collection-specific routes (toggle, attendance, palette) are added
to the returned routers below.
"""

from typing import Any, Callable, Dict, Optional, Type
from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from backend.dependencies import (
    get_classes_screen,
    get_event_types_screen,
    get_family_screen,
    get_homework_screen,
    get_task_types_screen,
)
from backend.responses import to_schema
from backend.schemas import (
    AttendanceCreate,
    ClassCreate,
    ClassUpdate,
    HomeworkCreate,
    HomeworkUpdate,
    MemberCreate,
    MemberUpdate,
    ScreenResponseSchema,
    TypeCreate,
    TypeUpdate,
)
from familyhub.screens import ClassesScreen, CrudScreen, FamilyScreen, HomeworkScreen


def crud_router(
    prefix: str,
    tag: str,
    get_screen: Callable[[], CrudScreen],
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    list_filters: tuple = (),
) -> APIRouter:
    """
    Build list/get/create/update/delete routes for one CrudScreen.

    Args:
        prefix: URL prefix ("/homework")
        tag: OpenAPI tag
        get_screen: Dependency returning the screen
        create_schema, update_schema: Request bodies
        list_filters: Query parameters forwarded to the list intent
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("/", response_model=ScreenResponseSchema)
    def list_items(request: Request, screen: CrudScreen = Depends(get_screen)):
        context: Dict[str, Any] = {
            key: value for key, value in request.query_params.items()
            if key in list_filters and value != ""
        }
        return to_schema(screen.process("list", context))

    @router.get("/{item_id}", response_model=ScreenResponseSchema)
    def get_item(item_id: str, screen: CrudScreen = Depends(get_screen)):
        return to_schema(screen.process("get", {"id": item_id}), failure_status=404)

    @router.post("/", response_model=ScreenResponseSchema, status_code=201)
    def create_item(body: create_schema, screen: CrudScreen = Depends(get_screen)):
        context = {k: v for k, v in body.model_dump().items() if v is not None}
        return to_schema(screen.process("create", context))

    @router.put("/{item_id}", response_model=ScreenResponseSchema)
    def update_item(item_id: str, body: update_schema, screen: CrudScreen = Depends(get_screen)):
        context = {"id": item_id}
        context.update(body.model_dump(exclude_unset=True))
        return to_schema(screen.process("update", context))

    @router.delete("/{item_id}", response_model=ScreenResponseSchema)
    def delete_item(
        item_id: str,
        confirmed: bool = Query(False, description="Must be true to delete"),
        screen: CrudScreen = Depends(get_screen),
    ):
        return to_schema(screen.process("delete", {"id": item_id, "confirmed": confirmed}))

    return router


homework_router = crud_router(
    "/homework", "homework", get_homework_screen, HomeworkCreate, HomeworkUpdate,
    list_filters=("filter", "family_member_id", "due_before", "due_after"),
)
classes_router = crud_router(
    "/classes", "classes", get_classes_screen, ClassCreate, ClassUpdate,
)
family_router = crud_router(
    "/family", "family", get_family_screen, MemberCreate, MemberUpdate,
)
event_types_router = crud_router(
    "/event-types", "types", get_event_types_screen, TypeCreate, TypeUpdate,
)
task_types_router = crud_router(
    "/task-types", "types", get_task_types_screen, TypeCreate, TypeUpdate,
)


@homework_router.patch("/{item_id}/toggle", response_model=ScreenResponseSchema)
def toggle_homework(item_id: str, screen: HomeworkScreen = Depends(get_homework_screen)):
    return to_schema(screen.process("toggle", {"id": item_id}))


@classes_router.get("/{class_id}/attendance", response_model=ScreenResponseSchema)
def list_attendance(class_id: str, screen: ClassesScreen = Depends(get_classes_screen)):
    return to_schema(screen.process("attendance", {"class_id": class_id}))


@classes_router.post("/{class_id}/attendance", response_model=ScreenResponseSchema, status_code=201)
def add_attendance(class_id: str, body: AttendanceCreate,
                   screen: ClassesScreen = Depends(get_classes_screen)):
    context: Dict[str, Optional[Any]] = {"class_id": class_id}
    context.update(body.model_dump())
    return to_schema(screen.process("add_attendance", context))


@family_router.get("/palette/colors", response_model=ScreenResponseSchema)
def member_palette(screen: FamilyScreen = Depends(get_family_screen)):
    """Colors offered when adding a family member."""
    return to_schema(screen.process("palette"))
