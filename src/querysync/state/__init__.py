"""
Query State - Sorting, filtering and pagination containers.

Each container owns its own EventChannel and emits ``"update"`` after
client mutations.
"""

from .rules import (
    MISSING, SortDirection, FilterOperator, SortRule, FilterRule,
    parse_sort_rule, parse_filter_rule
)
from .sorting import SortState
from .filters import FilterState
from .pagination import PageMeta, PaginationState

__all__ = [
    "MISSING", "SortDirection", "FilterOperator", "SortRule", "FilterRule",
    "parse_sort_rule", "parse_filter_rule",
    "SortState", "FilterState", "PageMeta", "PaginationState"
]
