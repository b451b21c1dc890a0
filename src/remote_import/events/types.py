"""Event types emitted while resolving imports."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FetchStarted:
    url: str


@dataclass(frozen=True)
class FetchCompleted:
    url: str
    size: int


@dataclass(frozen=True)
class FetchFailed:
    url: str
    error: str


@dataclass(frozen=True)
class ImportResolved:
    url: str
    depth: int
    media: str = ""


@dataclass(frozen=True)
class ImportSkipped:
    target: str
    depth: int
    reason: str  # "local", "not_recursive", "depth_exceeded", "cycle", "failed"
