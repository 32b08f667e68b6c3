"""
Filter State - Name-Unique Filter Predicates

🔎 Filtering with Replace Semantics:
Unlike sorting, adding a filter for a name that already has one replaces
the previous rule (last write wins). The rule keeps its original position
so the serialized order is stable across edits.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..events import EventChannel, EventHandler
from .rules import MISSING, FilterOperator, FilterRule, parse_filter_rule

logger = logging.getLogger(__name__)


class FilterState:
    """
    Mutable set of filter rules owned by a context or a query builder.

    Only ``where`` emits ``"update"``.
    """

    EQ = FilterOperator.EQ
    NE = FilterOperator.NE
    LT = FilterOperator.LT
    LTE = FilterOperator.LTE
    GT = FilterOperator.GT
    GTE = FilterOperator.GTE
    IN = FilterOperator.IN
    operators = FilterOperator

    def __init__(self):
        self._rules: List[FilterRule] = []
        self._channel = EventChannel()

    @classmethod
    def create(cls, filters: Optional[Iterable[Any]] = None) -> "FilterState":
        """Build a state from a bulk list and announce it once"""
        instance = cls()
        instance.load(filters)
        instance._channel.emit("update", instance)
        return instance

    def subscribe(self, event: str, handler: EventHandler) -> Callable[[], None]:
        return self._channel.subscribe(event, handler)

    def where(self, name: str, operator_or_value: Any, value: Any = MISSING) -> "FilterState":
        """
        Add or replace the filter for ``name``.

        ``where(name, value)`` implies ``FilterOperator.EQ``;
        ``where(name, operator, value)`` uses the given operator.
        Emits ``"update"`` once.
        """
        if value is MISSING:
            operator, value = FilterOperator.EQ, operator_or_value
        else:
            operator = FilterOperator(operator_or_value)

        self._put(FilterRule(name, operator, value))
        self._channel.emit("update", self)
        return self

    def _put(self, rule: FilterRule) -> None:
        for index, existing in enumerate(self._rules):
            if existing.name == rule.name:
                self._rules[index] = rule
                return
        self._rules.append(rule)

    def remove(self, name: str) -> None:
        if not name:
            return
        self._rules = [rule for rule in self._rules if rule.name != name]

    def reset(self) -> None:
        self._rules = []

    def load(self, filters: Optional[Iterable[Any]]) -> None:
        """
        Bulk-load rules from mappings or ``(name, operator, value)``
        triplets. Malformed elements are skipped. Does not emit.
        """
        if not isinstance(filters, (list, tuple)):
            return

        for item in filters:
            rule = parse_filter_rule(item)
            if rule is None:
                logger.debug(f"Skipping malformed filter rule: {item!r}")
                continue
            self._put(rule)

    def get_filter(self, name: str) -> Optional[FilterRule]:
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def has_filter(self, name: str) -> bool:
        return self.get_filter(name) is not None

    def to_json(self) -> List[Dict[str, Any]]:
        return [rule.to_json() for rule in self._rules]

    def to_tuples(self) -> List[Tuple[str, str, Any]]:
        return [rule.to_tuple() for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(list(self._rules))

    def __repr__(self) -> str:
        return f"FilterState({self.to_tuples()!r})"


__all__ = ["FilterState"]
