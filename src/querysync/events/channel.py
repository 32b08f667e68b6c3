"""
Event Channel - Synchronous Publish/Subscribe

🔔 Reactive State Notifications:
Every stateful container in querysync owns an ``EventChannel`` instead of
inheriting from an emitter base class. Listeners are called synchronously,
in subscription order, from inside ``emit``; they observe fully-mutated
state because containers only emit after the mutation is complete.

Key Features:
- Named events with any number of listeners
- ``subscribe`` returns an unsubscribe callable
- Error isolation between listeners
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

EventHandler = Callable[..., Any]


class EventChannel:
    """
    Minimal in-process pub/sub channel.

    Dispatch is synchronous. A listener that raises is logged and the
    remaining listeners still run.
    """

    def __init__(self):
        self._listeners: Dict[str, List[EventHandler]] = defaultdict(list)

    def subscribe(self, event: str, handler: EventHandler) -> Callable[[], None]:
        """
        Subscribe a handler to a named event.

        Args:
            event: Event name (e.g. ``"update"``)
            handler: Callable invoked with the emitted arguments

        Returns:
            A callable that removes this subscription
        """
        self._listeners[event].append(handler)

        def unsubscribe() -> None:
            self.unsubscribe(event, handler)

        return unsubscribe

    def unsubscribe(self, event: str, handler: EventHandler) -> bool:
        """Remove a handler; returns False when it was not subscribed"""
        listeners = self._listeners.get(event)
        if not listeners or handler not in listeners:
            return False

        listeners.remove(handler)
        if not listeners:
            del self._listeners[event]
        return True

    def emit(self, event: str, *args: Any) -> int:
        """
        Call every handler subscribed to ``event``.

        Returns:
            Number of handlers invoked
        """
        # Snapshot so handlers may unsubscribe while being dispatched
        listeners = list(self._listeners.get(event, ()))

        for handler in listeners:
            try:
                handler(*args)
            except Exception:
                logger.exception(f"Listener {handler!r} failed while handling '{event}'")

        return len(listeners)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def clear(self) -> None:
        """Remove all listeners for all events"""
        self._listeners.clear()


__all__ = ["EventChannel", "EventHandler"]
