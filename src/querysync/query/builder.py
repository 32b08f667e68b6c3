"""
Query Builder - Fluent Query Composition

🏗️ Describe What, Not How:
A QueryBuilder accumulates filters, sorting and pagination hints for one
repository and serializes them into a QueryRequest. It owns private
FilterState/SortState instances, so building a query never touches a
context's live state. The builder does no I/O.

Example:
    query = (
        QueryBuilder.create()
        .from_("users")
        .where("age", QueryBuilder.GTE, 18)
        .sort("name")
        .limit(20)
    )
    request = query.build()
"""

from typing import Any, Dict, Optional, Union

from ..configuration import get_config
from ..errors import InvalidArgumentError
from ..state import MISSING, FilterOperator, FilterState, SortDirection, SortState
from .request import QueryRequest


class QueryBuilder:
    """
    Mutable accumulator for a single repository query.

    Both pagination idioms are kept: ``limit``/``skip`` for direct provider
    calls and ``page`` for page/items-per-page requests. When both are
    set, ``limit``/``skip`` win.
    """

    EQ = FilterOperator.EQ
    NE = FilterOperator.NE
    LT = FilterOperator.LT
    LTE = FilterOperator.LTE
    GT = FilterOperator.GT
    GTE = FilterOperator.GTE
    IN = FilterOperator.IN

    ASC = SortDirection.ASC
    DESC = SortDirection.DESC

    def __init__(self, repository: Optional[str] = None):
        self._repository = repository
        self._filters = FilterState()
        self._sorting = SortState()
        self._limit: Optional[int] = None
        self._skip: Optional[int] = None
        self._current_page: Optional[int] = None
        self._items_per_page: Optional[int] = None

    @classmethod
    def create(cls) -> "QueryBuilder":
        return cls()

    @property
    def repository(self) -> Optional[str]:
        return self._repository

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def sorting(self) -> SortState:
        return self._sorting

    def from_(self, repository: str) -> "QueryBuilder":
        """Bind the builder to a repository name"""
        self._repository = repository
        return self

    def where(self, name: str, operator_or_value: Any, value: Any = MISSING) -> "QueryBuilder":
        self._filters.where(name, operator_or_value, value)
        return self

    def sort(self, name: str, direction: Union[SortDirection, str, None] = None) -> "QueryBuilder":
        self._sorting.sort(name, direction)
        return self

    def limit(self, count: int) -> "QueryBuilder":
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise InvalidArgumentError(f"limit must be an integer >= 1, got {count!r}")
        self._limit = count
        return self

    def skip(self, count: int) -> "QueryBuilder":
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidArgumentError(f"skip must be an integer >= 0, got {count!r}")
        self._skip = count
        return self

    def page(self, current_page: int, items_per_page: Optional[int] = None) -> "QueryBuilder":
        """Request a page by number (page/items-per-page idiom)"""
        if isinstance(current_page, bool) or not isinstance(current_page, int) or current_page < 1:
            raise InvalidArgumentError(f"current_page must be an integer >= 1, got {current_page!r}")
        if items_per_page is not None and (
            isinstance(items_per_page, bool) or not isinstance(items_per_page, int) or items_per_page < 1
        ):
            raise InvalidArgumentError(f"items_per_page must be an integer >= 1, got {items_per_page!r}")

        self._current_page = current_page
        if items_per_page is not None:
            self._items_per_page = items_per_page
        return self

    def to_json(self) -> Dict[str, Any]:
        return {
            "repository": self._repository,
            "filters": self._filters.to_json(),
            "sorting": self._sorting.to_json(),
            "limit": self._limit,
            "skip": self._skip,
        }

    def build(self) -> QueryRequest:
        """
        Serialize the accumulated state.

        Providers receive a page window, so ``skip`` must fall on a page
        boundary: a multiple of ``limit`` (or of the items per page).

        Raises:
            InvalidArgumentError: if no repository was bound with ``from_``,
                or ``skip`` is not a multiple of the page size
        """
        if not self._repository:
            raise InvalidArgumentError("Query has no repository, call from_() before using it")

        current_page = self._current_page or get_config().context.default_page
        items_per_page = self._items_per_page or get_config().context.default_items_per_page

        # Raw limit/skip hints override the page window
        if self._limit is not None:
            items_per_page = self._limit
        if self._skip is not None:
            if self._skip % items_per_page:
                raise InvalidArgumentError(
                    f"skip={self._skip} is not a multiple of the page size {items_per_page}"
                )
            current_page = self._skip // items_per_page + 1

        return QueryRequest(
            repository=self._repository,
            filters=tuple(self._filters.to_json()),
            sorting=tuple(self._sorting.to_json()),
            current_page=current_page,
            items_per_page=items_per_page,
        )

    def __repr__(self) -> str:
        return f"QueryBuilder({self.to_json()!r})"


__all__ = ["QueryBuilder"]
