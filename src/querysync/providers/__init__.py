"""
Providers - Storage/transport backends behind a Repository.

Structure:
- interface.py: the DataProvider contract (default: every operation unimplemented)
- memory.py: in-process reference provider
"""

from .interface import DataProvider, FindAllResult
from .memory import MemoryDataProvider

__all__ = ["DataProvider", "FindAllResult", "MemoryDataProvider"]
