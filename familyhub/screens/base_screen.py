"""
Base Screen for Family Hub
Defines the abstract base class and common response type for all screens.

Each screen is a controller over one area of the dashboard (tasks, meals,
calendar, ...):
- Screens share a common intent-based interface: process(intent, context)
- Every call returns a ScreenResponse, success or not
- Auth failures are never turned into responses; they propagate so the
  caller can send the user to the login screen
- All screens log their actions the same way
- Intents on one screen run one at a time; the dashboard server shares each
  screen across its request threads
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
import json
import logging
import threading

from ..core.errors import ApiError, AuthenticationError, ValidationError


@dataclass
class ScreenResponse:
    """
    Standard response structure from any screen.

    Attributes:
        success: Whether the operation completed successfully
        message: Human-readable description of the result
        data: Optional structured data (items, view models, ...)
        confirmation_required: Set when a destructive intent was called
            without confirmation; nothing was sent to the API
        suggestions: Optional follow-up actions for the user
    """
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    confirmation_required: bool = False
    suggestions: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert response to dictionary for serialization."""
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "confirmation_required": self.confirmation_required,
            "suggestions": self.suggestions,
        }

    @classmethod
    def error(cls, message: str, data: Optional[Dict[str, Any]] = None) -> 'ScreenResponse':
        """Factory method for creating error responses."""
        return cls(success=False, message=message, data=data)

    @classmethod
    def ok(cls, message: str, data: Optional[Dict[str, Any]] = None,
           suggestions: Optional[List[str]] = None) -> 'ScreenResponse':
        """Factory method for creating success responses."""
        return cls(success=True, message=message, data=data, suggestions=suggestions)

    @classmethod
    def confirm(cls, message: str, data: Optional[Dict[str, Any]] = None) -> 'ScreenResponse':
        """Factory method for a pending confirmation prompt."""
        return cls(success=False, message=message, data=data, confirmation_required=True)


class BaseScreen(ABC):
    """
    Abstract base class for all Family Hub screens.

    Provides common functionality for:
    - API access through the shared ApiClient
    - Configuration lookups
    - Logging
    - Intent dispatch with uniform error handling

    Subclasses implement get_handlers(), mapping intent names to handler
    methods that take the request context and return a ScreenResponse.
    """

    def __init__(self, client, config, name: str):
        """
        Initialize the base screen.

        Args:
            client: ApiClient bound to the current session
            config: Config instance for settings/preferences
            name: Unique identifier for this screen (e.g., "tasks", "meals")
        """
        self.client = client
        self.config = config
        self.name = name
        self.logger = logging.getLogger(f"screen.{name}")
        self._lock = threading.RLock()

    @abstractmethod
    def get_handlers(self) -> Dict[str, Callable[[Dict[str, Any]], ScreenResponse]]:
        """Return the intent -> handler table for this screen."""
        pass

    def get_supported_intents(self) -> List[str]:
        return list(self.get_handlers().keys())

    def process(self, intent: str, context: Optional[Dict[str, Any]] = None) -> ScreenResponse:
        """
        Run one intent and return its response.

        Args:
            intent: One of get_supported_intents()
            context: Intent parameters

        Returns:
            ScreenResponse; failures other than auth are reported, not raised

        Raises:
            AuthenticationError: the session expired during the call
        """
        context = dict(context or {})
        self.log_action(f"processing_{intent}", {"context_keys": list(context.keys())})

        handler = self.get_handlers().get(intent)
        if not handler:
            return ScreenResponse(
                success=False,
                message=f"Unknown intent: {intent}",
                suggestions=self.get_supported_intents(),
            )

        try:
            # The handler reads and writes screen state (filters, loaded month)
            with self._lock:
                return handler(context)
        except AuthenticationError:
            raise
        except ValidationError as e:
            return ScreenResponse.error(e.message, data={"field": e.field} if e.field else None)
        except ApiError as e:
            self.logger.error(f"API error processing {intent}: {e}")
            return ScreenResponse.error(f"Failed to process {intent}: {e.message}")
        except Exception as e:
            self.logger.error(f"Error processing {intent}: {e}", exc_info=True)
            return ScreenResponse.error(f"Failed to process {intent}: {str(e)}")

    def log_action(self, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an action taken by this screen.

        Args:
            action: Description of the action taken
            details: Optional additional details as key-value pairs
        """
        log_entry = {
            "screen": self.name,
            "action": action,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        if details:
            log_entry["details"] = details

        self.logger.info(json.dumps(log_entry, default=str))

    def require(self, context: Dict[str, Any], required: List[str]) -> None:
        """
        Validate that required parameters are present and non-blank.

        Raises:
            ValidationError naming the first missing parameter
        """
        missing = [p for p in required if context.get(p) is None or context.get(p) == ""]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}", field=missing[0]
            )

    def get_config_value(self, key: str, section: str = "preferences",
                         default: Any = None) -> Any:
        """Get a configuration value with fallback to default."""
        return self.config.get(key, section=section, default=default)
