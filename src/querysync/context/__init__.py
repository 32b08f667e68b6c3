"""
Context - Live, self-refreshing query-state sessions.
"""

from .context import Context, ContextStatus

__all__ = ["Context", "ContextStatus"]
