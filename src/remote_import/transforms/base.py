"""Base protocol for stylesheet transforms."""

from __future__ import annotations

from typing import Protocol

from remote_import.stylesheet.model import Stylesheet


class Transform(Protocol):
    """An in-place stylesheet-to-stylesheet transformation step."""

    def apply(self, stylesheet: Stylesheet) -> Stylesheet: ...
