"""
Team kanban screen for Family Hub.

The board's own semantics live on the server; this screen only lists cards,
groups them into columns and forwards moves and deletes. Unlike the household
screens it patches its local list after a successful move or delete instead of
refetching, and reports failures with fixed messages.
"""

from typing import Any, Dict, List

from .base_screen import BaseScreen, ScreenResponse
from ..core.errors import ApiError, AuthenticationError, ValidationError
from ..core.models import KanbanTask, to_dict

COLUMNS = [
    ("backlog", "Backlog"),
    ("in_progress", "In Progress"),
    ("testing", "Testing"),
    ("review", "Review"),
    ("done", "Done"),
]
STATUSES = [status for status, _ in COLUMNS]

FILTERS = ["assignee", "category", "priority", "project", "status"]
VIEWS = ["team", "mine"]

LOAD_FAILED = "Failed to load tasks. Make sure the backend is running."
MOVE_FAILED = "Failed to move task"
DELETE_FAILED = "Failed to delete task"


def group_columns(tasks: List[KanbanTask]) -> Dict[str, List[KanbanTask]]:
    """Cards per status column, in list order; unknown statuses are dropped."""
    columns: Dict[str, List[KanbanTask]] = {status: [] for status in STATUSES}
    for task in tasks:
        if task.status in columns:
            columns[task.status].append(task)
    return columns


class KanbanScreen(BaseScreen):
    """
    Handles intents:
    - board: fetch cards (filters + view: team|mine) grouped into columns
    - move: change a card's status (id, status)
    - delete: remove a card (id, confirmed)
    """

    def __init__(self, client, config):
        super().__init__(client, config, "kanban")
        self.tasks: List[KanbanTask] = []
        self.view = "team"
        self.error = None

    def get_handlers(self):
        return {
            "board": self._handle_board,
            "move": self._handle_move,
            "delete": self._handle_delete,
        }

    def visible_tasks(self) -> List[KanbanTask]:
        if self.view == "mine":
            assignee = self.get_config_value("kanban_assignee", default="pow")
            return [t for t in self.tasks if t.assignee == assignee]
        return list(self.tasks)

    def _board_data(self) -> Dict[str, Any]:
        columns = group_columns(self.visible_tasks())
        return {
            "view": self.view,
            "error": self.error,
            "columns": [
                {
                    "status": status,
                    "label": label,
                    "count": len(columns[status]),
                    "tasks": [to_dict(t) for t in columns[status]],
                }
                for status, label in COLUMNS
            ],
        }

    def _handle_board(self, context: Dict[str, Any]) -> ScreenResponse:
        view = context.get("view") or self.view
        if view not in VIEWS:
            raise ValidationError(f"Invalid view '{view}'", field="view")
        self.view = view

        filters = {key: context[key] for key in FILTERS if context.get(key)}
        try:
            rows = self.client.kanban.get_tasks(**filters)
        except AuthenticationError:
            raise
        except ApiError as e:
            self.logger.error(f"Failed to fetch tasks: {e}")
            self.error = LOAD_FAILED
            return ScreenResponse.error(LOAD_FAILED, data=self._board_data())

        self.tasks = [KanbanTask.from_dict(row) for row in rows]
        self.error = None
        return ScreenResponse.ok(
            message=f"{len(self.visible_tasks())} task(s) on the board",
            data=self._board_data(),
        )

    def _handle_move(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["id", "status"])
        status = context["status"]
        if status not in STATUSES:
            raise ValidationError(f"Invalid status '{status}'", field="status")

        try:
            self.client.kanban.move_task(context["id"], status)
        except AuthenticationError:
            raise
        except ApiError as e:
            self.logger.error(f"Failed to move task: {e}")
            self.error = MOVE_FAILED
            return ScreenResponse.error(MOVE_FAILED, data=self._board_data())

        for task in self.tasks:
            if str(task.id) == str(context["id"]):
                task.status = status
        self.log_action("task_moved", {"id": context["id"], "status": status})
        return ScreenResponse.ok(message=f"Moved task {context['id']} to {status}", data=self._board_data())

    def _handle_delete(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["id"])
        if not context.get("confirmed"):
            return ScreenResponse.confirm("Delete this task?", data={"id": context["id"]})

        try:
            self.client.kanban.delete_task(context["id"])
        except AuthenticationError:
            raise
        except ApiError as e:
            self.logger.error(f"Failed to delete task: {e}")
            self.error = DELETE_FAILED
            return ScreenResponse.error(DELETE_FAILED, data=self._board_data())

        self.tasks = [t for t in self.tasks if str(t.id) != str(context["id"])]
        self.log_action("task_deleted", {"id": context["id"]})
        return ScreenResponse.ok(message=f"Deleted task {context['id']}", data=self._board_data())
