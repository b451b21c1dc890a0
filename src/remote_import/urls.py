"""Classify import targets and resolve relative references to absolute URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit

__all__ = [
    "Local",
    "Remote",
    "classify",
    "is_absolute",
    "is_remote",
    "resolve_relative",
]

# scheme://... or //host/...
_REMOTE_RE = re.compile(r"^(?:[a-z][a-z0-9+.\-]*:)?//", re.IGNORECASE)
# Any URL carrying a scheme, including opaque ones such as data: or mailto:.
_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*:", re.IGNORECASE)


@dataclass(frozen=True)
class Remote:
    """A network-addressable target, already made absolute."""

    url: str


@dataclass(frozen=True)
class Local:
    """A filesystem-style target, passed through unresolved."""

    path: str


def is_remote(target: str) -> bool:
    """True if *target* has a network scheme or is scheme-relative."""
    return bool(_REMOTE_RE.match(target))


def is_absolute(reference: str) -> bool:
    """True if *reference* carries a scheme (``http:``, ``data:``, ...)."""
    return bool(_SCHEME_RE.match(reference))


def resolve_relative(reference: str, origin: str) -> str:
    """Resolve *reference* against *origin* using RFC 3986 semantics.

    - ``http://a/b.png``  -> unchanged
    - ``//cdn/b.png``     -> origin's scheme
    - ``/b.png``          -> origin's authority
    - ``b.png``, ``./b.png``, ``../b.png``, ``../../b.png`` -> origin's
      directory, one level up per ``..`` segment (never above the root)
    """
    if is_absolute(reference):
        return reference
    return urljoin(origin, reference)


def classify(
    target: str, source_origin: str | None = None, *, default_scheme: str = "https"
) -> Remote | Local:
    """Classify an import *target* found in a document fetched from *source_origin*.

    Targets with a scheme or a leading ``//`` are remote. Anything else is
    remote only when the containing document itself came from the network,
    in which case it is resolved against that origin; otherwise it is local.
    """
    if is_remote(target):
        if target.startswith("//"):
            if source_origin and is_remote(source_origin):
                return Remote(resolve_relative(target, source_origin))
            return Remote(f"{default_scheme}:{target}")
        return Remote(target)
    if is_absolute(target):
        return Local(target)
    if source_origin and urlsplit(source_origin).scheme in ("http", "https"):
        return Remote(resolve_relative(target, source_origin))
    return Local(target)
