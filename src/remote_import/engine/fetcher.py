"""FetchDeduplicator: at most one request per distinct URL within a run."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor, wait

from remote_import._http import Transport
from remote_import.config import AbortSignal
from remote_import.errors import AbortError, TransportError
from remote_import.events import types as events
from remote_import.events.bus import EventBus
from remote_import.model.fetch import FetchResult

# How often a blocked join re-checks the abort signal, in seconds.
_ABORT_POLL_INTERVAL = 0.05


class FetchDeduplicator:
    """Memoizes fetches by absolute URL for the lifetime of one resolution run.

    Requests run on a thread pool so that sibling imports are fetched
    concurrently. Every caller asking for the same URL gets the same
    :class:`~concurrent.futures.Future`, and therefore the same
    :class:`FetchResult`, success or failure. Failures are never retried here.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        headers: Mapping[str, str] | None = None,
        max_workers: int = 8,
        event_bus: EventBus | None = None,
    ) -> None:
        self._transport = transport
        self._headers = dict(headers or {})
        self._event_bus = event_bus or EventBus()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="remote-import-fetch"
        )
        self._lock = threading.Lock()
        self._futures: dict[str, Future[FetchResult]] = {}

    @property
    def requested_urls(self) -> list[str]:
        """URLs requested so far, in first-request order."""
        with self._lock:
            return list(self._futures)

    def submit(self, url: str) -> Future[FetchResult]:
        """Start fetching *url* unless a fetch for it already exists."""
        with self._lock:
            future = self._futures.get(url)
            if future is None:
                future = self._executor.submit(self._fetch, url)
                self._futures[url] = future
            return future

    def fetch(self, url: str, signal: AbortSignal | None = None) -> FetchResult:
        """Fetch *url* (or join the in-flight fetch) and wait for the result."""
        return self.join(self.submit(url), signal)

    def join(
        self, future: Future[FetchResult], signal: AbortSignal | None = None
    ) -> FetchResult:
        """Block until *future* completes, raising AbortError if *signal* fires first."""
        if signal is None:
            return future.result()
        while True:
            done, _ = wait([future], timeout=_ABORT_POLL_INTERVAL)
            if done:
                return future.result()
            if signal.aborted:
                self.cancel_pending()
                raise AbortError("Import resolution aborted while fetching")

    def _fetch(self, url: str) -> FetchResult:
        self._event_bus.emit(events.FetchStarted(url=url))
        try:
            body = self._transport.fetch(url, self._headers)
        except TransportError as exc:
            self._event_bus.emit(events.FetchFailed(url=url, error=str(exc)))
            return FetchResult(url=url, error=exc)
        self._event_bus.emit(events.FetchCompleted(url=url, size=len(body)))
        return FetchResult(url=url, body=body)

    def cancel_pending(self) -> None:
        """Cancel fetches that have not started yet."""
        with self._lock:
            for future in self._futures.values():
                future.cancel()

    def close(self) -> None:
        """Shut down the pool, dropping queued fetches and waiting for running ones."""
        self._executor.shutdown(wait=True, cancel_futures=True)

    def __enter__(self) -> FetchDeduplicator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
