"""
Single-handler event bus.

Each event name maps to exactly one handler. Dispatch is a table lookup:
the bus does not interpret events, does not transform them and does not
fan them out. An event with no handler is reported back to the caller as
an UnhandledEvent value, never raised.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from eventrouter.engine.event import Event, UnhandledEvent

Handler = Callable[[Event], Any]

logger = logging.getLogger(__name__)


class EventBus:
    """
    Name to handler dispatch table.

    Registering under an existing name replaces the previous handler.
    Mutations swap in a fresh table under a lock, so dispatch always reads
    a consistent snapshot without locking.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}
        self._lock = threading.Lock()

    def register(self, name: str, handler: Handler) -> Handler | None:
        """
        Register a handler for an event name.

        Returns the handler that was replaced, or None.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Event name must be a non-empty string")
        if not callable(handler):
            raise ValueError(f"Handler for '{name}' must be callable")

        with self._lock:
            handlers = dict(self._handlers)
            previous = handlers.get(name)
            handlers[name] = handler
            self._handlers = handlers

        if previous is not None:
            logger.debug("Replaced handler for %s", name)
        return previous

    def unregister(self, name: str) -> bool:
        """
        Remove the handler for an event name. Absent names are ignored.
        """
        with self._lock:
            if name not in self._handlers:
                return False
            handlers = dict(self._handlers)
            del handlers[name]
            self._handlers = handlers
        return True

    def dispatch(self, event: Event) -> Any:
        """
        Invoke the handler registered for event.name and return its result.

        Returns UnhandledEvent when nothing is registered under that name.
        """
        handler = self._handlers.get(event.name)
        if handler is None:
            logger.debug("No handler for %s", event.name)
            return UnhandledEvent(event)

        logger.debug("Dispatching %s", event.name)
        return handler(event)

    def handles(self, name: str) -> bool:
        return name in self._handlers

    def names(self) -> list[str]:
        return list(self._handlers)
