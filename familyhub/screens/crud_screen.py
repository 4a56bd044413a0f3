"""
Generic CRUD screen.

Most dashboard screens are the same four operations over one REST collection:
list (optionally filtered), create, update and delete. CrudScreen implements
them once; subclasses declare the endpoint, the model, the form fields and
any extra intents.

State is only updated after a round trip: every mutation is followed by a
refetch of the list, and nothing is patched locally.
"""

from typing import Any, Callable, Dict, List, Optional

from .base_screen import BaseScreen, ScreenResponse
from ..core.errors import ValidationError
from ..core.models import to_dict
from ..core.resource import LoadState, Resource

# Completed/pending toggle shown above task and homework lists
COMPLETION_FILTERS = {
    "all": None,
    "pending": False,
    "completed": True,
}


def completion_param(value: Optional[str]) -> Optional[bool]:
    """Map the list toggle ('all' | 'pending' | 'completed') to ?completed="""
    if value is None:
        return None
    if value not in COMPLETION_FILTERS:
        raise ValidationError(
            f"Invalid filter '{value}'. Choose from: {', '.join(COMPLETION_FILTERS)}",
            field="filter",
        )
    return COMPLETION_FILTERS[value]


class CrudScreen(BaseScreen):
    """
    List/create/update/delete over one collection.

    Class attributes:
        entity: Singular name used in messages ("task")
        plural: Key the list is returned under ("tasks")
        model: Dataclass with a from_dict constructor
        fields: Form fields forwarded to the API on create/update
        required_fields: Fields that must be non-blank on create
        list_filters: Context keys forwarded as list query parameters
    """

    entity = "item"
    plural = "items"
    model: Any = None
    fields: List[str] = []
    required_fields: List[str] = []
    list_filters: List[str] = []

    def __init__(self, client, config, name: str):
        super().__init__(client, config, name)
        self._params: Dict[str, Any] = {}
        self.items: Resource[List[Any]] = Resource(self._fetch, name=self.plural, initial=[])

    def endpoint(self):
        """The ApiClient endpoint backing this screen."""
        raise NotImplementedError

    def get_handlers(self) -> Dict[str, Callable[[Dict[str, Any]], ScreenResponse]]:
        return {
            "list": self._handle_list,
            "get": self._handle_get,
            "create": self._handle_create,
            "update": self._handle_update,
            "delete": self._handle_delete,
        }

    # =========================================================================
    # Hooks
    # =========================================================================

    def list_params(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Query parameters for the list request."""
        return {key: context.get(key) for key in self.list_filters if key in context}

    def build_payload(self, context: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        """Form body for create/update; only fields present in the context."""
        return {key: context[key] for key in self.fields if key in context}

    def validate(self, payload: Dict[str, Any], creating: bool) -> None:
        """Raise ValidationError for an invalid form."""

    # =========================================================================
    # State
    # =========================================================================

    def _fetch(self) -> List[Any]:
        rows = self.endpoint().get_all(**self._params)
        return [self.model.from_dict(row) for row in rows]

    def refetch(self) -> List[Any]:
        """Reload the list with the last-used filters."""
        return self.items.load() or []

    def find(self, item_id: Any) -> Optional[Any]:
        for item in self.items.data or []:
            if str(item.id) == str(item_id):
                return item
        return None

    def _list_data(self) -> Dict[str, Any]:
        return {
            self.plural: [to_dict(item) for item in self.items.data or []],
            "count": len(self.items.data or []),
            "state": self.items.state.value,
        }

    # =========================================================================
    # Intent Handlers
    # =========================================================================

    def _handle_list(self, context: Dict[str, Any]) -> ScreenResponse:
        """
        Fetch the list.

        Context params:
            filter (str, optional): 'all' | 'pending' | 'completed'
            any key in list_filters
        """
        self._params = self.list_params(context)
        self.items.load()

        if self.items.state is LoadState.ERROR:
            return ScreenResponse.error(
                f"Failed to load {self.plural}: {self.items.error}",
                data=self._list_data(),
            )

        count = len(self.items.data or [])
        return ScreenResponse.ok(
            message=f"Found {count} {self.entity if count == 1 else self.plural}",
            data=self._list_data(),
        )

    def _handle_get(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["id"])
        row = self.endpoint().get(context["id"])
        return ScreenResponse.ok(
            message=f"Loaded {self.entity} {context['id']}",
            data={self.entity: to_dict(self.model.from_dict(row or {}))},
        )

    def _handle_create(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, self.required_fields)
        payload = self.build_payload(context, creating=True)
        self.validate(payload, creating=True)

        created = self.endpoint().create(payload) or {}
        self.log_action(f"{self.entity}_created", {"id": created.get("id")})
        self.refetch()

        data = self._list_data()
        data[self.entity] = created
        return ScreenResponse.ok(message=f"Created {self.entity}", data=data)

    def _handle_update(self, context: Dict[str, Any]) -> ScreenResponse:
        self.require(context, ["id"])
        payload = self.build_payload(context, creating=False)
        if not payload:
            return ScreenResponse.error("No fields to update")
        self.validate(payload, creating=False)

        updated = self.endpoint().update(context["id"], payload) or {}
        self.log_action(f"{self.entity}_updated", {"id": context["id"], "fields": list(payload)})
        self.refetch()

        data = self._list_data()
        data[self.entity] = updated
        return ScreenResponse.ok(message=f"Updated {self.entity} {context['id']}", data=data)

    def _handle_delete(self, context: Dict[str, Any]) -> ScreenResponse:
        """
        Delete one item. Without ``confirmed=True`` nothing is sent and a
        confirmation prompt is returned instead.
        """
        self.require(context, ["id"])
        item_id = context["id"]

        if not context.get("confirmed"):
            return ScreenResponse.confirm(
                f"Are you sure you want to delete this {self.entity}?",
                data={"id": item_id},
            )

        self.endpoint().delete(item_id)
        self.log_action(f"{self.entity}_deleted", {"id": item_id})
        self.refetch()
        return ScreenResponse.ok(message=f"Deleted {self.entity} {item_id}", data=self._list_data())


class ToggleScreen(CrudScreen):
    """CrudScreen for entities with a completion flag (tasks, homework)."""

    def get_handlers(self) -> Dict[str, Callable[[Dict[str, Any]], ScreenResponse]]:
        handlers = super().get_handlers()
        handlers["toggle"] = self._handle_toggle
        return handlers

    def list_params(self, context: Dict[str, Any]) -> Dict[str, Any]:
        params = super().list_params(context)
        completed = completion_param(context.get("filter"))
        if completed is not None:
            params["completed"] = completed
        return params

    def _handle_toggle(self, context: Dict[str, Any]) -> ScreenResponse:
        """Flip completion on the server, then refetch to pick up the result."""
        self.require(context, ["id"])
        item_id = context["id"]

        self.endpoint().toggle(item_id)
        self.refetch()

        item = self.find(item_id)
        data = self._list_data()
        if item is not None:
            data[self.entity] = to_dict(item)
            state = "completed" if item.completed else "pending"
            message = f"Marked {self.entity} {item_id} as {state}"
        else:
            # The current filter hides it now (e.g. completed while showing pending)
            message = f"Toggled {self.entity} {item_id}"
        self.log_action(f"{self.entity}_toggled", {"id": item_id})
        return ScreenResponse.ok(message=message, data=data)
