"""Bridge resolution events onto the standard logging module."""
from __future__ import annotations

import logging
from typing import Any, Callable

from remote_import.events import types as events


def logging_listener(logger: logging.Logger | None = None) -> Callable[[Any], None]:
    """Create an event-bus listener that logs resolution events."""
    log = logger or logging.getLogger("remote_import")

    def listener(event: Any) -> None:
        if isinstance(event, events.FetchStarted):
            log.debug("fetch started: %s", event.url)
        elif isinstance(event, events.FetchCompleted):
            log.info("fetched %s (%d chars)", event.url, event.size)
        elif isinstance(event, events.FetchFailed):
            log.warning("fetch failed: %s: %s", event.url, event.error)
        elif isinstance(event, events.ImportResolved):
            log.info("inlined %s at depth %d", event.url, event.depth)
        elif isinstance(event, events.ImportSkipped):
            log.debug("left %s unresolved (%s)", event.target, event.reason)

    return listener
