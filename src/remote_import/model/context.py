"""ResolutionContext: per-run state threaded through the recursive walk."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from remote_import.config import AbortSignal, ResolverOptions
from remote_import.errors import AbortError
from remote_import.events.bus import EventBus
from remote_import.model.diagnostic import Diagnostic

if TYPE_CHECKING:
    from remote_import.engine.fetcher import FetchDeduplicator


class DiagnosticLog:
    """Thread-safe, append-only list of diagnostics for one run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._items.append(diagnostic)

    @property
    def items(self) -> list[Diagnostic]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


@dataclass(frozen=True)
class ResolutionContext:
    """State of one resolution run at a given point of the walk.

    The fetcher, diagnostics, event bus and abort signal are shared by every
    context derived from the same run. ``depth`` and ``origin_stack`` are
    per-path: :meth:`descend` returns a new context one level deeper.
    """

    options: ResolverOptions
    fetcher: FetchDeduplicator
    depth: int = 0
    origin_stack: tuple[str, ...] = ()
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    event_bus: EventBus = field(default_factory=EventBus)
    signal: AbortSignal | None = None

    @property
    def origin(self) -> str | None:
        """Origin of the document currently being walked."""
        return self.origin_stack[-1] if self.origin_stack else None

    def has_visited(self, url: str) -> bool:
        return url in self.origin_stack

    def can_descend(self) -> bool:
        """Whether content fetched at this depth may have its own imports resolved."""
        if not self.options.recursive:
            return False
        max_depth = self.options.max_depth
        return max_depth is None or self.depth < max_depth

    def descend(self, origin: str) -> ResolutionContext:
        return replace(self, depth=self.depth + 1, origin_stack=(*self.origin_stack, origin))

    def check_aborted(self) -> None:
        if self.signal is not None and self.signal.aborted:
            raise AbortError("Import resolution aborted")

    def warn(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.add(diagnostic)
