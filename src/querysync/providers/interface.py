"""
Data Provider Interface

💾 Standard Data Access Contract:
Repositories delegate all I/O to a DataProvider. Every CRUD operation is
a coroutine that either returns a value or raises. The base class is the
"unimplemented" provider: each operation raises
``ProviderNotImplementedError`` naming the method, while the capability
queries answer True. Partial providers override only what they support.
"""

from typing import Any, Dict, List, Mapping, Optional

from ..errors import ProviderNotImplementedError

# {"data": [...], "meta": {"count", "itemsPerPage", "currentPage"}}
FindAllResult = Dict[str, Any]


class DataProvider:
    """
    Storage/transport contract used by Repository.

    Implementations may raise any exception from an operation; it is
    handed to the caller unchanged. ``ProviderError`` is available for
    providers that report ``{"errors": [...]}`` style failures.
    """

    async def find(self, repository: str, entity_id: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Load one entity.

        Args:
            repository: Repository (entity collection) name
            entity_id: ID of the entity
            options: Provider-specific options

        Returns:
            The entity
        """
        raise ProviderNotImplementedError("find")

    async def find_all(
        self,
        repository: str,
        query: Mapping[str, Any],
        options: Optional[Mapping[str, Any]] = None
    ) -> FindAllResult:
        """
        Load a page of entities.

        Args:
            repository: Repository name
            query: ``{"filters": [...], "sorting": [...], "pagination": {...}}``
            options: Provider-specific options

        Returns:
            ``{"data": [...], "meta": {"count", "itemsPerPage", "currentPage"}}``
        """
        raise ProviderNotImplementedError("find_all")

    async def save(self, repository: str, entity: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        raise ProviderNotImplementedError("save")

    async def save_all(self, repository: str, entities: List[Any], options: Optional[Mapping[str, Any]] = None) -> bool:
        raise ProviderNotImplementedError("save_all")

    async def remove(self, repository: str, entity_id: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
        raise ProviderNotImplementedError("remove")

    async def remove_all(self, repository: str, entity_ids: List[Any], options: Optional[Mapping[str, Any]] = None) -> bool:
        raise ProviderNotImplementedError("remove_all")

    # Capability queries
    def can_get(self) -> bool:
        return True

    def can_save(self) -> bool:
        return True

    def can_remove(self) -> bool:
        return True

    def can_list(self) -> bool:
        return True


__all__ = ["DataProvider", "FindAllResult"]
