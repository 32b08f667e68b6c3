"""
Query Rules - Sorting and Filtering Primitives

📐 Rule Types and Boundary Parsing:
Sort and filter rules are small dataclasses. Bulk loads accept a tagged
union of inputs (a mapping or a positional pair/triplet) which is
validated with pydantic at the boundary; anything that does not validate
is skipped rather than raising.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, StringConstraints, TypeAdapter, ValidationError

RuleName = Annotated[str, StringConstraints(min_length=1)]

# Marks an argument that was not passed at all
MISSING: Any = object()


class SortDirection(str, Enum):
    """Sort direction for ordering"""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if value.lower() == member.value:
                    return member
        return None

    def inverted(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class FilterOperator(str, Enum):
    """Comparison operators for filter rules"""
    EQ = "="
    NE = "!="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    IN = "in"

    @classmethod
    def _missing_(cls, value):
        # Accept member names ("LTE") as well as values ("<=")
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None


@dataclass
class SortRule:
    """A single named ordering"""
    name: str
    direction: SortDirection = SortDirection.ASC

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.name, "direction": self.direction.value}

    def to_tuple(self) -> Tuple[str, str]:
        return (self.name, self.direction.value)


@dataclass
class FilterRule:
    """A single named predicate"""
    name: str
    operator: FilterOperator
    value: Any = None

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.name, "operator": self.operator.value, "value": self.value}

    def to_tuple(self) -> Tuple[str, str, Any]:
        return (self.name, self.operator.value, self.value)


class SortRuleInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: RuleName
    direction: SortDirection


class FilterRuleInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: RuleName
    operator: FilterOperator
    value: Any


_sort_input = TypeAdapter(Union[SortRuleInput, Tuple[RuleName, SortDirection]])
_filter_input = TypeAdapter(Union[FilterRuleInput, Tuple[RuleName, FilterOperator, Any]])


def parse_sort_rule(item: Any) -> Optional[SortRule]:
    """
    Turn a bulk-load element into a SortRule.

    Args:
        item: ``{"name", "direction"}`` mapping, ``(name, direction)`` pair
            or an existing SortRule

    Returns:
        A new SortRule, or None when the element is malformed
    """
    if isinstance(item, SortRule):
        return SortRule(item.name, SortDirection(item.direction))

    try:
        parsed = _sort_input.validate_python(item)
    except ValidationError:
        return None

    if isinstance(parsed, SortRuleInput):
        return SortRule(parsed.name, parsed.direction)
    name, direction = parsed
    return SortRule(name, direction)


def parse_filter_rule(item: Any) -> Optional[FilterRule]:
    """
    Turn a bulk-load element into a FilterRule.

    Args:
        item: ``{"name", "operator", "value"}`` mapping,
            ``(name, operator, value)`` triplet or an existing FilterRule

    Returns:
        A new FilterRule, or None when the element is malformed
    """
    if isinstance(item, FilterRule):
        return FilterRule(item.name, FilterOperator(item.operator), item.value)

    try:
        parsed = _filter_input.validate_python(item)
    except ValidationError:
        return None

    if isinstance(parsed, FilterRuleInput):
        return FilterRule(parsed.name, parsed.operator, parsed.value)
    name, operator, value = parsed
    return FilterRule(name, operator, value)


__all__ = [
    "MISSING", "SortDirection", "FilterOperator", "SortRule", "FilterRule",
    "parse_sort_rule", "parse_filter_rule"
]
