"""
Repository - Data Access Façade

🏗️ One Entity, One Provider:
A Repository is bound to an entity name and a DataProvider. It exposes
CRUD coroutines that pass straight through to the provider, builds
queries for that entity, and owns the named Contexts that keep query
state in sync with the provider.

Context synchronization:
    context.filters.where("name", "Bob")
        -> context emits "update"
        -> Repository.update_context(context) schedules a fetch task
        -> provider.find_all(name, context.to_json())
        -> result written back through context.resolve()/fail()
"""

import asyncio
import inspect
import logging
import types
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Set, Tuple, Union

from pydantic import BaseModel

from ..context import Context
from ..errors import InvalidArgumentError
from ..providers import DataProvider, FindAllResult
from ..query import QueryBuilder, QueryRequest
from ..state import MISSING, FilterOperator, PageMeta
from .config import RepositoryConfig

logger = logging.getLogger(__name__)


class Repository:
    """
    Façade over a DataProvider for a single entity name.

    Validation failures of ``save_all``, ``remove_all`` and ``find_by`` are
    raised when the returned coroutine is awaited, before the provider is
    touched. Provider exceptions propagate unchanged.
    """

    def __init__(self, config: Union[RepositoryConfig, Mapping[str, Any]]):
        self.config = RepositoryConfig.coerce(config)
        self._contexts: Dict[str, Context] = {}
        self._context_unsubscribers: Dict[str, Callable[[], None]] = {}
        # Fetch tasks in flight; the loop itself only holds weak references
        self._pending: Set["asyncio.Task[Context]"] = set()
        self._logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def data_provider(self) -> DataProvider:
        return self.config.data_provider

    @property
    def contexts(self) -> List[str]:
        return list(self._contexts)

    @classmethod
    def extend(cls, **behaviors: Any) -> "RepositoryVariant":
        """
        Create a repository variant carrying extra behaviors.

        Functions are bound to each instance as methods; any other value
        becomes a plain attribute.

        Example:
            UserRepository = Repository.extend(
                find_active=lambda self: self.find_by("active", True)
            )
            users = UserRepository({"name": "users", "data_provider": provider})
        """
        return RepositoryVariant(cls, behaviors)

    # Contexts
    def create_context(self, name: str, **page_options: Any) -> Context:
        """
        Return the context registered under ``name``, creating it if needed.

        Args:
            name: Context name, unique within this repository
            **page_options: ``current_page``/``items_per_page`` for a new context
        """
        context = self._contexts.get(name)
        if context is not None:
            return context

        context = Context(name, **page_options)
        self._contexts[name] = context
        self._context_unsubscribers[name] = context.subscribe("update", self._on_context_update)

        self._logger.debug(f"Created context '{name}' on repository '{self.name}'")
        return context

    def get_context(self, name: str) -> Optional[Context]:
        return self._contexts.get(name)

    def remove_context(self, name: str) -> bool:
        """Unregister and detach a context; in-flight results are dropped"""
        context = self._contexts.pop(name, None)
        if context is None:
            return False

        unsubscribe = self._context_unsubscribers.pop(name, None)
        if unsubscribe:
            unsubscribe()
        context.detach()

        self._logger.debug(f"Removed context '{name}' from repository '{self.name}'")
        return True

    def _on_context_update(self, context: Context) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self._logger.warning(
                f"Context '{context.name}' changed outside a running event loop; "
                f"no fetch was issued for repository '{self.name}'"
            )
            return
        self.update_context(context)

    @property
    def pending_fetches(self) -> int:
        return len(self._pending)

    def update_context(self, context: Context) -> "asyncio.Task[Context]":
        """
        Fetch data for the context's current query state.

        The query is captured synchronously, so later mutations do not leak
        into this fetch. Must be called with a running event loop.

        Returns:
            Task resolving to the context once the result was applied or
            discarded. Provider failures end up in ``context.error``.
        """
        loop = asyncio.get_running_loop()
        token = context.begin_fetch()
        query = context.to_json()

        self._logger.debug(f"Issuing fetch #{token} for context '{context.name}': {query}")
        task = loop.create_task(self._sync_context(context, token, query))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _sync_context(self, context: Context, token: int, query: Dict[str, Any]) -> Context:
        try:
            response = await self.data_provider.find_all(self.name, query)
            data, meta = self._unpack_result(response)
        except Exception as error:
            if context.fail(token, error):
                self._logger.warning(f"Fetch #{token} for context '{context.name}' failed: {error!r}")
            return context

        if context.resolve(token, data, meta):
            self._logger.debug(f"Fetch #{token} for context '{context.name}' applied")
        return context

    @staticmethod
    def _unpack_result(response: Any) -> Tuple[Optional[List[Any]], Optional[PageMeta]]:
        if not isinstance(response, Mapping):
            raise TypeError(f"find_all() must return a mapping, got {type(response).__name__}")

        meta = response.get("meta")
        return response.get("data"), PageMeta.model_validate(meta) if meta is not None else None

    # Queries
    def create_query(self) -> QueryBuilder:
        return QueryBuilder.create().from_(self.name)

    def where(self, name: str, operator_or_value: Any, value: Any = MISSING) -> QueryBuilder:
        return self.create_query().where(name, operator_or_value, value)

    def find_all(
        self,
        query: Union[QueryBuilder, QueryRequest],
        options: Optional[Mapping[str, Any]] = None
    ) -> Awaitable[FindAllResult]:
        """
        Run a query through the provider.

        Raises:
            TypeError: immediately, if ``query`` is not a query object
        """
        if not isinstance(query, (QueryBuilder, QueryRequest)):
            raise TypeError(f"find_all() expects a QueryBuilder, got {type(query).__name__}")

        return self._find_all(query, options)

    async def _find_all(self, query: Union[QueryBuilder, QueryRequest], options: Optional[Mapping[str, Any]]) -> FindAllResult:
        request = query.build() if isinstance(query, QueryBuilder) else query
        return await self.data_provider.find_all(self.name, request.to_query(), options)

    async def find_by(self, name: Optional[str] = None, operator_or_value: Any = MISSING, value: Any = MISSING) -> Any:
        """
        Find entities matching a single filter.

        ``find_by(name, value)`` implies ``FilterOperator.EQ``.

        Returns:
            The ``data`` list of the result
        """
        if not name:
            raise InvalidArgumentError("Missing filter name")

        if value is MISSING:
            operator, value = FilterOperator.EQ, operator_or_value
        else:
            operator = operator_or_value

        if value is MISSING or value is None:
            raise InvalidArgumentError("Missing filter value")

        result = await self.find_all(self.where(name, operator, value))
        return result.get("data") if isinstance(result, Mapping) else None

    # CRUD
    async def find(self, entity_id: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.data_provider.find(self.name, entity_id, options)

    async def save(self, entity: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        return await self.data_provider.save(self.name, entity, options)

    async def save_all(self, entities: List[Any], options: Optional[Mapping[str, Any]] = None) -> bool:
        if not isinstance(entities, (list, tuple)) or not entities:
            raise InvalidArgumentError("save_all() expects a non-empty list of entities")

        for entity in entities:
            if not isinstance(entity, (Mapping, BaseModel)):
                raise InvalidArgumentError(f"save_all() got an invalid entity: {entity!r}")

        return await self.data_provider.save_all(self.name, list(entities), options)

    async def remove(self, entity_id: Any, options: Optional[Mapping[str, Any]] = None) -> bool:
        return await self.data_provider.remove(self.name, entity_id, options)

    async def remove_all(self, entity_ids: List[Any], options: Optional[Mapping[str, Any]] = None) -> bool:
        if not isinstance(entity_ids, (list, tuple)) or not entity_ids:
            raise InvalidArgumentError("remove_all() expects a non-empty list of ids")

        if any(entity_id is None for entity_id in entity_ids):
            raise InvalidArgumentError("remove_all() got a missing id")

        return await self.data_provider.remove_all(self.name, list(entity_ids), options)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, contexts={self.contexts!r})"


class RepositoryVariant:
    """
    Factory for repositories with extra behaviors.

    Calling the variant with a configuration returns a regular
    ``Repository`` instance with the behaviors attached, so every variant
    stays interchangeable with the base contract.
    """

    def __init__(self, base: type, behaviors: Dict[str, Any]):
        self.base = base
        self.behaviors = dict(behaviors)

    def __call__(self, config: Union[RepositoryConfig, Mapping[str, Any]]) -> Repository:
        instance = self.base(config)

        for attribute, behavior in self.behaviors.items():
            if inspect.isfunction(behavior):
                behavior = types.MethodType(behavior, instance)
            setattr(instance, attribute, behavior)

        return instance

    def extend(self, **behaviors: Any) -> "RepositoryVariant":
        return RepositoryVariant(self.base, {**self.behaviors, **behaviors})

    def __repr__(self) -> str:
        return f"RepositoryVariant({self.base.__name__}, behaviors={sorted(self.behaviors)!r})"


__all__ = ["Repository", "RepositoryVariant"]
