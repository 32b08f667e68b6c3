"""
querysync - Reactive Query Contexts over Pluggable Data Providers

Application code describes *what* data it wants (filters, sorting,
pagination) and a Repository decides *how* to fetch it through a
DataProvider. Named Contexts keep that query state live: every change
triggers exactly one relevant fetch and the latest issued result wins.

Quick Start:
    from querysync import Repository, MemoryDataProvider

    users = Repository({"name": "users", "data_provider": MemoryDataProvider()})
    context = users.create_context("admin-list")
    context.subscribe("change", lambda ctx: print(ctx.data))
    context.filters.where("role", "admin")
"""

from .configuration import (
    ApplicationConfig, ContextConfig, Environment, LoggingConfig,
    configure_logging, get_config, set_config
)
from .context import Context, ContextStatus
from .errors import (
    ConfigurationError, EntityNotFoundError, InvalidArgumentError, ProviderError,
    ProviderNotImplementedError, QuerySyncError
)
from .events import EventChannel
from .providers import DataProvider, MemoryDataProvider
from .query import QueryBuilder, QueryRequest
from .repositories import Repository, RepositoryConfig, RepositoryVariant
from .state import (
    FilterOperator, FilterRule, FilterState, PageMeta, PaginationState,
    SortDirection, SortRule, SortState
)

__version__ = "0.1.0"

__all__ = [
    # Repository façade
    "Repository", "RepositoryConfig", "RepositoryVariant",
    "Context", "ContextStatus",

    # Query state
    "SortState", "FilterState", "PaginationState", "PageMeta",
    "SortRule", "FilterRule", "SortDirection", "FilterOperator",
    "QueryBuilder", "QueryRequest", "EventChannel",

    # Providers
    "DataProvider", "MemoryDataProvider",

    # Configuration
    "ApplicationConfig", "ContextConfig", "Environment", "LoggingConfig",
    "configure_logging", "get_config", "set_config",

    # Errors
    "QuerySyncError", "ConfigurationError", "InvalidArgumentError",
    "ProviderError", "EntityNotFoundError", "ProviderNotImplementedError",
]
