"""
Events - Synchronous state-change notifications.
"""

from .channel import EventChannel, EventHandler

__all__ = ["EventChannel", "EventHandler"]
