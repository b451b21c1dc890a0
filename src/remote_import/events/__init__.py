"""Event system: bus, event types and a logging bridge."""

from remote_import.events.bus import EventBus
from remote_import.events.log import logging_listener
from remote_import.events.types import (
    FetchCompleted,
    FetchFailed,
    FetchStarted,
    ImportResolved,
    ImportSkipped,
)

__all__ = [
    "EventBus",
    "logging_listener",
    "FetchCompleted",
    "FetchFailed",
    "FetchStarted",
    "ImportResolved",
    "ImportSkipped",
]
