"""
QuerySync Errors

⚠️ Error Taxonomy:
Local validation failures, configuration problems and provider failures
each get their own exception type so callers can branch on them.
Provider exceptions are never wrapped: whatever the provider raised
reaches the caller (or the context's ``error`` field) unchanged.
"""

from typing import Any, List, Optional


class QuerySyncError(Exception):
    """Base exception for querysync"""
    pass


class ConfigurationError(QuerySyncError):
    """Raised when a repository is constructed without a valid configuration"""
    pass


class InvalidArgumentError(QuerySyncError, ValueError):
    """Raised when an operation receives arguments it cannot work with"""
    pass


class ProviderError(QuerySyncError):
    """
    Failure reported by a data provider.

    Carries the provider's error payload in ``errors`` so application code
    keeps access to provider-specific diagnostics.
    """

    def __init__(self, message: str = "Provider request failed", errors: Optional[List[Any]] = None):
        super().__init__(message)
        self.errors = list(errors or [])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, errors={self.errors!r})"


class EntityNotFoundError(ProviderError):
    """Raised by providers when an entity does not exist"""

    def __init__(self, repository: str, entity_id: Any):
        super().__init__(f"{repository} entity {entity_id!r} not found", errors=["not_found"])
        self.repository = repository
        self.entity_id = entity_id


class ProviderNotImplementedError(QuerySyncError, NotImplementedError):
    """Raised by provider operations that a provider does not implement"""

    def __init__(self, method: str):
        super().__init__(f"{method}() is not implemented")
        self.method = method


__all__ = [
    "QuerySyncError", "ConfigurationError", "InvalidArgumentError",
    "ProviderError", "EntityNotFoundError", "ProviderNotImplementedError"
]
