"""Publish-subscribe event bus for resolution lifecycle events."""

from __future__ import annotations

import threading
from typing import Any, Callable


class EventBus:
    """Publish-subscribe event bus.

    Fetch events are emitted from worker threads, so registration and
    dispatch are serialized with a lock. Listeners run on the emitting
    thread in registration order.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._listeners: dict[type, list[Callable[[Any], None]]] = {}
        self._global_listeners: list[Callable[[Any], None]] = []

    def subscribe(self, event_type: type, callback: Callable[[Any], None]) -> None:
        """Register a callback for a specific event type."""
        with self._lock:
            self._listeners.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Callable[[Any], None]) -> None:
        """Register a callback that receives every event."""
        with self._lock:
            self._global_listeners.append(callback)

    def emit(self, event: Any) -> None:
        """Dispatch an event to all matching listeners."""
        with self._lock:
            for cb in self._global_listeners:
                cb(event)
            for cb in self._listeners.get(type(event), []):
                cb(event)
