"""FetchResult: the outcome of retrieving one remote stylesheet."""

from __future__ import annotations

from dataclasses import dataclass

from remote_import.errors import TransportError


@dataclass(frozen=True)
class FetchResult:
    """Body or error for a single absolute URL."""

    url: str
    body: str | None = None
    error: TransportError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.body is not None
