"""
Pagination State - Page Window Counters

Holds the client-requested window (current page, items per page) and the
server-reported total count.
"""

import math
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import InvalidArgumentError
from ..events import EventChannel, EventHandler


class PageMeta(BaseModel):
    """The ``meta`` block of a provider's ``find_all`` result"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    count: int = Field(default=0, ge=0)
    items_per_page: Optional[int] = Field(default=None, alias="itemsPerPage", ge=1)
    current_page: Optional[int] = Field(default=None, alias="currentPage", ge=1)


class PaginationState:
    """
    Page window of a context.

    Client mutations emit ``"update"``; values reported back by the
    provider are applied with ``set_state`` and do not.
    """

    def __init__(self, current_page: int = 1, items_per_page: int = 10, count: int = 0):
        self._current_page = self._check("current_page", current_page)
        self._items_per_page = self._check("items_per_page", items_per_page)
        self._count = max(int(count), 0)
        self._channel = EventChannel()

    @staticmethod
    def _check(field: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidArgumentError(f"{field} must be an integer >= 1, got {value!r}")
        return value

    def subscribe(self, event: str, handler: EventHandler) -> Callable[[], None]:
        return self._channel.subscribe(event, handler)

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @property
    def count(self) -> int:
        return self._count

    @property
    def page_count(self) -> int:
        return math.ceil(self._count / self._items_per_page) if self._count else 0

    def set_page(self, page: int) -> "PaginationState":
        page = self._check("current_page", page)
        if page != self._current_page:
            self._current_page = page
            self._channel.emit("update", self)
        return self

    def set_items_per_page(self, items_per_page: int) -> "PaginationState":
        items_per_page = self._check("items_per_page", items_per_page)
        if items_per_page != self._items_per_page:
            self._items_per_page = items_per_page
            self._channel.emit("update", self)
        return self

    def next_page(self) -> "PaginationState":
        return self.set_page(self._current_page + 1)

    def previous_page(self) -> "PaginationState":
        if self._current_page > 1:
            self.set_page(self._current_page - 1)
        return self

    def set_state(self, meta: Any) -> None:
        """Apply server-reported values (a ``PageMeta`` or its mapping form)"""
        if not isinstance(meta, PageMeta):
            meta = PageMeta.model_validate(meta)

        self._count = meta.count
        if meta.items_per_page is not None:
            self._items_per_page = meta.items_per_page
        if meta.current_page is not None:
            self._current_page = meta.current_page

    def reset(self) -> None:
        self._current_page = 1
        self._count = 0

    def to_json(self) -> Dict[str, int]:
        return {
            "currentPage": self._current_page,
            "itemsPerPage": self._items_per_page,
            "count": self._count,
        }

    def window(self) -> Dict[str, int]:
        """The client-requested part sent to providers"""
        return {"currentPage": self._current_page, "itemsPerPage": self._items_per_page}

    def __repr__(self) -> str:
        return (
            f"PaginationState(current_page={self._current_page}, "
            f"items_per_page={self._items_per_page}, count={self._count})"
        )


__all__ = ["PageMeta", "PaginationState"]
