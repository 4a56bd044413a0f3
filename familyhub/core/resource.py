"""
Reusable data-fetching service for screens.

Every screen follows the same fetch-then-render cycle: mark the data as
loading, call the API, then either store the result or record the error.
Resource captures that cycle once, with explicit states, so screens only
supply the loader.

fetch_all runs several loaders in parallel and behaves like an all-or-nothing
batch: if any loader fails the whole batch fails with that error.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from .errors import AuthenticationError

T = TypeVar("T")

logger = logging.getLogger("familyhub.resource")


class LoadState(str, Enum):
    """Lifecycle of a Resource"""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Resource(Generic[T]):
    """
    A value fetched from the API with explicit loading/error states.

    Usage:
        tasks = Resource(lambda: client.tasks.get_all(completed=False), name="tasks")
        tasks.load()
        if tasks.state is LoadState.READY:
            render(tasks.data)

    AuthenticationError always propagates: the session has already been
    expired and the caller must leave the screen.
    """

    def __init__(self, loader: Callable[[], T], name: str = "resource",
                 initial: Optional[T] = None):
        self.loader = loader
        self.name = name
        self.data: Optional[T] = initial
        self.error: Optional[Exception] = None
        self.state = LoadState.IDLE

    @property
    def loading(self) -> bool:
        return self.state is LoadState.LOADING

    @property
    def ready(self) -> bool:
        return self.state is LoadState.READY

    def load(self) -> Optional[T]:
        """
        Run the loader and store its result.

        On failure the previous data is kept, the error is recorded and the
        state becomes ERROR. Returns the (possibly stale) data.
        """
        self.state = LoadState.LOADING
        try:
            result = self.loader()
        except AuthenticationError:
            self.state = LoadState.ERROR
            raise
        except Exception as e:
            logger.error(f"Failed to load {self.name}: {e}")
            self.error = e
            self.state = LoadState.ERROR
            return self.data

        self.data = result
        self.error = None
        self.state = LoadState.READY
        return self.data

    reload = load

    def set(self, value: T) -> None:
        """Replace the data locally without a round trip."""
        self.data = value
        self.state = LoadState.READY


def fetch_all(loaders: Sequence[Callable[[], Any]], max_workers: int = 8) -> List[Any]:
    """
    Run loaders concurrently and return their results in order.

    Raises the first failure (by loader order); the other results are dropped.
    """
    if not loaders:
        return []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(loaders))) as pool:
        futures = [pool.submit(loader) for loader in loaders]
        return [future.result() for future in futures]
