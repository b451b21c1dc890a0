"""AssetReference: a URL-valued reference inside a declaration value."""

from __future__ import annotations

from dataclasses import dataclass

from remote_import.urls import is_absolute


@dataclass(frozen=True)
class AssetReference:
    """One ``url(...)`` (or ``image-set()`` string) found in a value.

    ``start``/``end`` delimit the URL text itself inside the value, so a
    replacement keeps the surrounding quotes and function wrapper.
    """

    raw_value: str
    url: str
    quote: str
    start: int
    end: int

    @property
    def is_quoted(self) -> bool:
        return bool(self.quote)

    @property
    def is_absolute(self) -> bool:
        return is_absolute(self.url)

    @property
    def is_rewritable(self) -> bool:
        """False for absolute URLs, fragment-only refs and empty values."""
        return bool(self.url) and not self.is_absolute and not self.url.startswith("#")
