"""
Sort State - Ordered, Name-Unique Sort Rules

↕️ Sorting with Direction Toggling:
Rules keep insertion order and there is at most one rule per name.
Sorting by a name that already has a rule flips that rule's direction
instead of adding a second one.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from ..events import EventChannel, EventHandler
from .rules import SortDirection, SortRule, parse_sort_rule

logger = logging.getLogger(__name__)


class SortState:
    """
    Mutable set of sort rules owned by a context or a query builder.

    Only ``sort`` emits ``"update"``; the low-level mutators (``invert``,
    ``remove``, ``reset``, ``set_state``) leave emitting to the caller.
    """

    ASC = SortDirection.ASC
    DESC = SortDirection.DESC
    directions = SortDirection

    def __init__(self):
        self._rules: List[SortRule] = []
        self._channel = EventChannel()

    @classmethod
    def create(cls, sorting: Optional[Iterable[Any]] = None) -> "SortState":
        """Build a state from a bulk list and announce it once"""
        instance = cls()
        instance.set_state(sorting)
        instance._channel.emit("update", instance)
        return instance

    # Events
    def subscribe(self, event: str, handler: EventHandler) -> Callable[[], None]:
        return self._channel.subscribe(event, handler)

    # Mutators
    def sort(self, name: str, direction: Union[SortDirection, str, None] = None) -> "SortState":
        """
        Add a sort rule, or toggle the existing rule for ``name``.

        The passed direction only applies to new rules. Always emits
        ``"update"`` once.
        """
        if self.has_sorting(name):
            self.invert(name)
        else:
            self._rules.append(SortRule(name, SortDirection(direction or SortDirection.ASC)))

        self._channel.emit("update", self)
        return self

    def invert(self, name: str) -> bool:
        rule = self.get_sorting(name)
        if rule is None:
            return False

        rule.direction = rule.direction.inverted()
        return True

    def remove(self, name: str) -> None:
        if not name:
            return
        self._rules = [rule for rule in self._rules if rule.name != name]

    def reset(self) -> None:
        self._rules = []

    def set_state(self, sorting: Optional[Iterable[Any]]) -> None:
        """
        Bulk-load rules from mappings or ``(name, direction)`` pairs.

        Malformed elements are skipped. Names already present are toggled,
        as with ``sort``. Does not emit.
        """
        if not isinstance(sorting, (list, tuple)):
            return

        for item in sorting:
            rule = parse_sort_rule(item)
            if rule is None:
                logger.debug(f"Skipping malformed sort rule: {item!r}")
                continue

            if not self.invert(rule.name):
                self._rules.append(rule)

    # Queries
    def get_sorting(self, name: str) -> Optional[SortRule]:
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def has_sorting(self, name: str) -> bool:
        return self.get_sorting(name) is not None

    def to_json(self) -> List[Dict[str, Any]]:
        return [rule.to_json() for rule in self._rules]

    def to_tuples(self) -> List[Tuple[str, str]]:
        return [rule.to_tuple() for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(list(self._rules))

    def __repr__(self) -> str:
        return f"SortState({self.to_tuples()!r})"


__all__ = ["SortState"]
