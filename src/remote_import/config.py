"""Configuration types."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from remote_import.errors import ConfigurationError

# Sent when ``modern_browser`` is enabled; font services key the returned
# formats (woff2 vs. ttf) off the user agent.
MODERN_BROWSER_USER_AGENT = (
    "Mozilla/5.0 AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class FetchTimeout:
    """Per-request timeout settings for the HTTP transport."""

    connect: float = 5.0
    read: float = 30.0


@dataclass(frozen=True)
class ResolverOptions:
    """Options controlling a resolution run.

    Attributes:
        recursive: Resolve remote imports found inside fetched content.
        resolve_urls: Rewrite relative ``url()`` references in fetched
            content to absolute URLs anchored at the fetch origin.
        max_depth: Maximum number of nested descents when ``recursive`` is
            on. ``None`` means unbounded.
        user_agent: ``User-Agent`` header sent with every fetch.
        modern_browser: Send a modern browser ``User-Agent`` when no
            explicit ``user_agent`` is set.
        headers: Extra request headers.
        timeout: Per-request timeouts.
        max_workers: Size of the fetch thread pool.
        default_scheme: Scheme used for scheme-relative targets (``//host``)
            that have no origin to inherit one from.
    """

    recursive: bool = False
    resolve_urls: bool = False
    max_depth: int | None = None
    user_agent: str | None = None
    modern_browser: bool = False
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    timeout: FetchTimeout = field(default_factory=FetchTimeout)
    max_workers: int = 8
    default_scheme: str = "https"

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ConfigurationError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")

    def request_headers(self) -> dict[str, str]:
        """Return the headers sent with every fetch."""
        headers = dict(self.headers)
        agent = self.user_agent
        if agent is None and self.modern_browser:
            agent = MODERN_BROWSER_USER_AGENT
        if agent:
            headers["User-Agent"] = agent
        return headers

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResolverOptions:
        """Build options from a plugin-style mapping.

        Accepts both the camelCase plugin names (``resolveUrls``) and the
        snake_case field names (``resolve_urls``).
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                raise ConfigurationError(f"Unknown option: {key!r}")
            kwargs[name] = _coerce_option(name, value)
        return cls(**kwargs)


_OPTION_ALIASES: dict[str, str] = {
    "recursive": "recursive",
    "resolveUrls": "resolve_urls",
    "resolve_urls": "resolve_urls",
    "maxDepth": "max_depth",
    "max_depth": "max_depth",
    "userAgent": "user_agent",
    "user_agent": "user_agent",
    "modernBrowser": "modern_browser",
    "modern_browser": "modern_browser",
    "headers": "headers",
    "timeout": "timeout",
    "maxWorkers": "max_workers",
    "max_workers": "max_workers",
    "defaultScheme": "default_scheme",
    "default_scheme": "default_scheme",
}

_BOOL_OPTIONS = {"recursive", "resolve_urls", "modern_browser"}


def _coerce_option(name: str, value: Any) -> Any:
    """Validate a single option value and convert it to the field's type."""
    if name in _BOOL_OPTIONS:
        if not isinstance(value, bool):
            raise ConfigurationError(f"{name} must be a boolean, got {value!r}")
        return value
    if name in ("max_depth", "max_workers"):
        if value is None and name == "max_depth":
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        return value
    if name in ("user_agent", "default_scheme"):
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(f"{name} must be a string, got {value!r}")
        return value
    if name == "headers":
        if not isinstance(value, Mapping):
            raise ConfigurationError(f"headers must be a mapping, got {value!r}")
        return {str(k): str(v) for k, v in value.items()}
    if name == "timeout":
        if isinstance(value, FetchTimeout):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return FetchTimeout(connect=float(value), read=float(value))
        if isinstance(value, Mapping):
            unknown = set(value) - {"connect", "read"}
            if unknown:
                raise ConfigurationError(f"Unknown timeout keys: {sorted(unknown)}")
            return FetchTimeout(**{k: float(v) for k, v in value.items()})
        raise ConfigurationError(f"timeout must be a number or mapping, got {value!r}")
    return value


class AbortSignal:
    """An observable flag indicating whether an operation has been aborted."""

    def __init__(self) -> None:
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def _abort(self) -> None:
        self._aborted = True


class AbortController:
    """Controls an :class:`AbortSignal` to cancel an in-flight resolution."""

    def __init__(self) -> None:
        self.signal = AbortSignal()

    def abort(self) -> None:
        self.signal._abort()
