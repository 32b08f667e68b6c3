"""
Query Request - Provider-Agnostic Fetch Description

A QueryRequest is produced fresh by every ``QueryBuilder.build()`` call
and is never mutated afterwards. Two requests are interchangeable when
they are structurally equal.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class QueryRequest:
    """Serialized repository name, filters, sorting and page window"""
    repository: str
    filters: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    sorting: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    current_page: int = 1
    items_per_page: int = 10

    @property
    def pagination(self) -> Dict[str, int]:
        return {"currentPage": self.current_page, "itemsPerPage": self.items_per_page}

    def to_query(self) -> Dict[str, Any]:
        """
        The payload a provider's ``find_all`` receives.

        Returns:
            ``{"filters": [...], "sorting": [...], "pagination": {...}}``
        """
        return {
            "filters": copy.deepcopy(list(self.filters)),
            "sorting": copy.deepcopy(list(self.sorting)),
            "pagination": self.pagination,
        }

    def to_json(self) -> Dict[str, Any]:
        return {"repository": self.repository, **self.to_query()}

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.items_per_page


__all__ = ["QueryRequest"]
