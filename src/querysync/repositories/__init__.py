"""
Repositories - Façades binding an entity name to a data provider.
"""

from .config import RepositoryConfig
from .repository import Repository, RepositoryVariant

__all__ = ["RepositoryConfig", "Repository", "RepositoryVariant"]
