"""
Query - Builder and serialized request objects.
"""

from .request import QueryRequest
from .builder import QueryBuilder

__all__ = ["QueryBuilder", "QueryRequest"]
