"""Tests for the event bus and the logging bridge."""
from __future__ import annotations

import logging
import threading

from remote_import.events import (
    EventBus,
    FetchCompleted,
    FetchFailed,
    FetchStarted,
    ImportResolved,
    ImportSkipped,
    logging_listener,
)


class TestEventBus:
    def test_subscribe_by_type(self) -> None:
        bus = EventBus()
        received: list[object] = []
        bus.subscribe(FetchStarted, received.append)
        bus.emit(FetchStarted(url="https://a.test/a.css"))
        bus.emit(FetchCompleted(url="https://a.test/a.css", size=3))
        assert received == [FetchStarted(url="https://a.test/a.css")]

    def test_on_all(self) -> None:
        bus = EventBus()
        received: list[object] = []
        bus.on_all(received.append)
        bus.emit(FetchStarted(url="u"))
        bus.emit(ImportSkipped(target="a.css", depth=0, reason="local"))
        assert len(received) == 2

    def test_global_listeners_run_first(self) -> None:
        bus = EventBus()
        order: list[str] = []
        bus.subscribe(FetchStarted, lambda e: order.append("typed"))
        bus.on_all(lambda e: order.append("global"))
        bus.emit(FetchStarted(url="u"))
        assert order == ["global", "typed"]

    def test_emit_without_listeners(self) -> None:
        EventBus().emit(FetchStarted(url="u"))

    def test_listener_may_emit(self) -> None:
        bus = EventBus()
        received: list[object] = []

        def relay(event: FetchFailed) -> None:
            bus.emit(ImportSkipped(target=event.url, depth=0, reason="failed"))

        bus.subscribe(FetchFailed, relay)
        bus.subscribe(ImportSkipped, received.append)
        bus.emit(FetchFailed(url="u", error="boom"))
        assert received == [ImportSkipped(target="u", depth=0, reason="failed")]

    def test_emit_from_threads(self) -> None:
        bus = EventBus()
        received: list[object] = []
        bus.on_all(received.append)
        threads = [
            threading.Thread(target=bus.emit, args=(FetchStarted(url=str(i)),))
            for i in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(received) == 20


class TestLoggingListener:
    def test_levels(self, caplog) -> None:
        bus = EventBus()
        bus.on_all(logging_listener())
        with caplog.at_level(logging.DEBUG, logger="remote_import"):
            bus.emit(FetchStarted(url="https://a.test/a.css"))
            bus.emit(FetchCompleted(url="https://a.test/a.css", size=12))
            bus.emit(FetchFailed(url="https://a.test/b.css", error="Not found"))
            bus.emit(ImportResolved(url="https://a.test/a.css", depth=1))
            bus.emit(ImportSkipped(target="local.css", depth=0, reason="local"))

        records = [(r.levelname, r.getMessage()) for r in caplog.records]
        assert records == [
            ("DEBUG", "fetch started: https://a.test/a.css"),
            ("INFO", "fetched https://a.test/a.css (12 chars)"),
            ("WARNING", "fetch failed: https://a.test/b.css: Not found"),
            ("INFO", "inlined https://a.test/a.css at depth 1"),
            ("DEBUG", "left local.css unresolved (local)"),
        ]

    def test_custom_logger(self, caplog) -> None:
        logger = logging.getLogger("custom.resolver")
        bus = EventBus()
        bus.on_all(logging_listener(logger))
        with caplog.at_level(logging.INFO, logger="custom.resolver"):
            bus.emit(FetchCompleted(url="u", size=1))
        assert [r.name for r in caplog.records] == ["custom.resolver"]

    def test_ignores_unknown_events(self, caplog) -> None:
        listener = logging_listener()
        with caplog.at_level(logging.DEBUG, logger="remote_import"):
            listener(object())
        assert caplog.records == []
