"""
Repository Context - Live Query-State Session

🔄 Automatic Re-fetching:
A Context is a named session that owns one FilterState, one SortState and
one PaginationState. Any client mutation of those re-emits ``"update"``
on the context, which its owning Repository turns into a fetch. Results
are published back through ``"change"``.

Key Features:
- idle -> loading -> idle/error state machine
- Monotonic fetch tokens: only the most recently issued fetch may write
  ``data``, ``error`` and the server-reported page window
- Detaching clears the token store so late results are always dropped
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..configuration import get_config
from ..events import EventChannel, EventHandler
from ..state import FilterState, PaginationState, SortState

logger = logging.getLogger(__name__)


class ContextStatus(Enum):
    """Fetch state of a context"""
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class Context:
    """
    Named query-state session owned by a Repository.

    Events:
        update: query state changed (or ``initialize`` was called); the
            owning repository re-fetches
        change: ``loading``/``data``/``error`` changed

    Fetches run as asyncio tasks, so query state should be mutated while
    an event loop is running. Changes made outside a loop are logged by
    the repository and do not fetch.
    """

    def __init__(
        self,
        name: str,
        current_page: Optional[int] = None,
        items_per_page: Optional[int] = None
    ):
        defaults = get_config().context

        self.name = name
        self.data: Optional[List[Any]] = None
        self.error: Optional[BaseException] = None

        self._filters = FilterState()
        self._sorting = SortState()
        self._pagination = PaginationState(
            current_page=defaults.default_page if current_page is None else current_page,
            items_per_page=defaults.default_items_per_page if items_per_page is None else items_per_page
        )
        self._channel = EventChannel()
        self._status = ContextStatus.IDLE

        # Token bookkeeping for last-issued-wins
        self._issued = 0
        self._latest_token: Optional[int] = 0
        self._detached = False

        self._unsubscribers: List[Callable[[], None]] = [
            state.subscribe("update", self._on_state_update)
            for state in (self._filters, self._sorting, self._pagination)
        ]

    # Owned state
    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def sorting(self) -> SortState:
        return self._sorting

    @property
    def pagination(self) -> PaginationState:
        return self._pagination

    @property
    def status(self) -> ContextStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status is ContextStatus.LOADING

    @property
    def is_detached(self) -> bool:
        return self._detached

    @property
    def latest_token(self) -> Optional[int]:
        return self._latest_token

    def subscribe(self, event: str, handler: EventHandler) -> Callable[[], None]:
        return self._channel.subscribe(event, handler)

    def _on_state_update(self, _state: Any) -> None:
        self._channel.emit("update", self)

    def initialize(self) -> None:
        """Request one fetch even though nothing changed"""
        if self._detached:
            logger.debug(f"Ignoring initialize() on detached context '{self.name}'")
            return
        self._channel.emit("update", self)

    # Fetch lifecycle
    def begin_fetch(self) -> int:
        """
        Mark a new fetch as issued.

        Returns:
            The fetch token; only the latest token may write results
        """
        self._issued += 1
        token = self._issued

        if self._detached:
            return token

        self._latest_token = token
        self._status = ContextStatus.LOADING
        self._channel.emit("change", self)
        return token

    def is_current(self, token: int) -> bool:
        return not self._detached and self._latest_token == token

    def resolve(self, token: int, data: Optional[List[Any]], meta: Any = None) -> bool:
        """
        Write a successful fetch result.

        Args:
            token: Token returned by ``begin_fetch``
            data: Entities returned by the provider
            meta: ``PageMeta`` or mapping with count/itemsPerPage/currentPage

        Returns:
            False when the result was stale and discarded
        """
        if not self.is_current(token):
            logger.debug(f"Discarding stale result #{token} for context '{self.name}'")
            return False

        if meta is not None:
            self._pagination.set_state(meta)
        self.data = data
        self.error = None
        self._status = ContextStatus.IDLE
        self._channel.emit("change", self)
        return True

    def fail(self, token: int, error: BaseException) -> bool:
        """Write a failed fetch result; ``data`` is left untouched"""
        if not self.is_current(token):
            logger.debug(f"Discarding stale error #{token} for context '{self.name}'")
            return False

        self.error = error
        self._status = ContextStatus.ERROR
        self._channel.emit("change", self)
        return True

    def detach(self) -> None:
        """Drop all listeners; results still in flight will be discarded"""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._channel.clear()

        self._latest_token = None
        self._detached = True
        self._status = ContextStatus.IDLE

    def to_json(self) -> Dict[str, Any]:
        """The query payload a provider's ``find_all`` receives"""
        return {
            "filters": self._filters.to_json(),
            "sorting": self._sorting.to_json(),
            "pagination": self._pagination.window(),
        }

    def __repr__(self) -> str:
        return f"Context(name={self.name!r}, status={self._status.value})"


__all__ = ["Context", "ContextStatus"]
