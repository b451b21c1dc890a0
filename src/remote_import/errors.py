"""Error hierarchy for remote import resolution."""
from __future__ import annotations


class RemoteImportError(Exception):
    """Base error for all remote_import errors."""

    rule = "error"

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class TransportError(RemoteImportError):
    """A remote stylesheet could not be retrieved."""

    rule = "transport_failure"

    def __init__(
        self, message: str, *, url: str = "", cause: Exception | None = None
    ) -> None:
        super().__init__(message, cause=cause)
        self.url = url


class NetworkError(TransportError):
    """A network-level error occurred (DNS, refused connection, bad scheme)."""


class RequestTimeoutError(TransportError):
    """A request timed out."""


class HTTPStatusError(TransportError):
    """The server answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        url: str = "",
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, url=url, cause=cause)
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Content and resolution errors
# ---------------------------------------------------------------------------


class ParseError(RemoteImportError):
    """Raised when stylesheet source cannot be parsed."""

    rule = "parse_failure"

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} at {line}:{column}"
        super().__init__(message)


class CycleDetectedError(RemoteImportError):
    """An import points back at a stylesheet already on the current path."""

    rule = "cycle_detected"

    def __init__(self, url: str, path: tuple[str, ...]) -> None:
        chain = " -> ".join((*path, url))
        super().__init__(f"Import cycle detected: {chain}")
        self.url = url
        self.path = path


class DepthExceededError(RemoteImportError):
    """Recursion stopped because the configured maximum depth was reached."""

    rule = "depth_exceeded"

    def __init__(self, url: str, max_depth: int) -> None:
        super().__init__(
            f"Not resolving {url}: maximum import depth {max_depth} reached"
        )
        self.url = url
        self.max_depth = max_depth


# ---------------------------------------------------------------------------
# Non-recoverable errors
# ---------------------------------------------------------------------------


class AbortError(RemoteImportError):
    """The resolution run was aborted by the caller."""


class ConfigurationError(RemoteImportError):
    """Invalid resolver configuration."""


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------


def error_from_status_code(status_code: int, url: str) -> HTTPStatusError:
    """Build the error raised for a non-2xx response."""
    if status_code == 404:
        message = f"Not found: {url}"
    elif status_code in (401, 403):
        message = f"Access denied ({status_code}): {url}"
    elif 500 <= status_code <= 599:
        message = f"Server error ({status_code}): {url}"
    else:
        message = f"Unexpected status {status_code}: {url}"
    return HTTPStatusError(message, status_code=status_code, url=url)
