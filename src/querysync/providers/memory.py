"""
Memory Data Provider - In-Process Reference Backend

🧠 In-Memory Storage:
Keeps entities as dictionaries, grouped by repository name, and answers
``find_all`` queries by applying filters, multi-key sorting and the page
window in Python. Data is lost when the process exits; intended for
development, tests and examples.
"""

import copy
import logging
import uuid
from collections import defaultdict
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from ..errors import EntityNotFoundError, InvalidArgumentError
from ..state import FilterOperator, PageMeta, SortDirection
from .interface import DataProvider, FindAllResult

logger = logging.getLogger(__name__)

_MISSING_FIELD = object()


class MemoryDataProvider(DataProvider):
    """
    Complete in-memory provider.

    Features:
    - Entities stored per repository, keyed by ``id_field``
    - IDs generated for entities saved without one
    - All filter operators on (dotted) dictionary fields
    - Stable multi-key sorting honouring each rule's direction
    """

    def __init__(self, id_field: str = "id", default_items_per_page: int = 10):
        self.id_field = id_field
        self.default_items_per_page = default_items_per_page
        self._storage: Dict[str, Dict[Any, Dict[str, Any]]] = defaultdict(dict)

    # Helpers
    def _generate_id(self) -> str:
        return str(uuid.uuid4())

    def _to_record(self, entity: Any) -> Dict[str, Any]:
        if isinstance(entity, BaseModel):
            return entity.model_dump()
        if isinstance(entity, Mapping):
            return copy.deepcopy(dict(entity))
        raise InvalidArgumentError(f"Cannot store {type(entity).__name__} in memory provider")

    def _store(self, repository: str, entity: Any) -> Dict[str, Any]:
        record = self._to_record(entity)
        if record.get(self.id_field) is None:
            record[self.id_field] = self._generate_id()

        self._storage[repository][record[self.id_field]] = record
        return copy.deepcopy(record)

    @staticmethod
    def _field_value(record: Mapping[str, Any], name: str) -> Any:
        value: Any = record
        for part in name.split("."):
            if not isinstance(value, Mapping) or part not in value:
                return _MISSING_FIELD
            value = value[part]
        return value

    def _matches(self, record: Mapping[str, Any], rule: Mapping[str, Any]) -> bool:
        field_value = self._field_value(record, rule["name"])
        op = FilterOperator(rule["operator"])
        value = rule.get("value")

        if field_value is _MISSING_FIELD:
            return op == FilterOperator.NE

        try:
            if op == FilterOperator.EQ:
                return field_value == value
            elif op == FilterOperator.NE:
                return field_value != value
            elif op == FilterOperator.GT:
                return field_value is not None and field_value > value
            elif op == FilterOperator.GTE:
                return field_value is not None and field_value >= value
            elif op == FilterOperator.LT:
                return field_value is not None and field_value < value
            elif op == FilterOperator.LTE:
                return field_value is not None and field_value <= value
            elif op == FilterOperator.IN:
                return field_value in value if value else False
        except TypeError as e:
            logger.warning(f"Filter evaluation failed for {rule['name']!r}: {e}")
        return False

    def _sorted(self, records: List[Dict[str, Any]], sorting: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        # Stable sorts applied from the least to the most significant key;
        # records without a value go last in either direction
        for rule in reversed(sorting):
            name = rule["name"]
            present, missing = [], []
            for record in records:
                value = self._field_value(record, name)
                if value is _MISSING_FIELD or value is None:
                    missing.append(record)
                else:
                    present.append(record)

            descending = SortDirection(rule["direction"]) == SortDirection.DESC
            present.sort(key=lambda record: self._field_value(record, name), reverse=descending)
            records = present + missing
        return records

    # DataProvider contract
    async def find(self, repository: str, entity_id: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        record = self._storage[repository].get(entity_id)
        if record is None:
            raise EntityNotFoundError(repository, entity_id)
        return copy.deepcopy(record)

    async def find_all(
        self,
        repository: str,
        query: Mapping[str, Any],
        options: Optional[Mapping[str, Any]] = None
    ) -> FindAllResult:
        filters = query.get("filters") or []
        sorting = query.get("sorting") or []
        pagination = query.get("pagination") or {}

        current_page = pagination.get("currentPage") or 1
        items_per_page = pagination.get("itemsPerPage") or self.default_items_per_page

        records = [
            record for record in self._storage[repository].values()
            if all(self._matches(record, rule) for rule in filters)
        ]
        records = self._sorted(records, sorting)

        start = (current_page - 1) * items_per_page
        page = records[start:start + items_per_page]

        logger.debug(
            f"find_all({repository!r}) matched {len(records)} record(s), "
            f"returning page {current_page} ({len(page)} item(s))"
        )

        meta = PageMeta(count=len(records), items_per_page=items_per_page, current_page=current_page)
        return {
            "data": copy.deepcopy(page),
            "meta": meta.model_dump(by_alias=True),
        }

    async def save(self, repository: str, entity: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        return self._store(repository, entity)

    async def save_all(self, repository: str, entities: List[Any], options: Optional[Mapping[str, Any]] = None) -> bool:
        for entity in entities:
            self._store(repository, entity)
        return True

    async def remove(self, repository: str, entity_id: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
        return self._storage[repository].pop(entity_id, None) is not None

    async def remove_all(self, repository: str, entity_ids: List[Any], options: Optional[Mapping[str, Any]] = None) -> bool:
        removed = [self._storage[repository].pop(entity_id, None) is not None for entity_id in entity_ids]
        return all(removed)

    def count(self, repository: str) -> int:
        return len(self._storage[repository])

    def clear(self, repository: Optional[str] = None) -> None:
        if repository is None:
            self._storage.clear()
        else:
            self._storage.pop(repository, None)


__all__ = ["MemoryDataProvider"]
