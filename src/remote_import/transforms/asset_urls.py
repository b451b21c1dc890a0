"""Asset URL transform: anchors relative references in fetched content at its origin."""

from __future__ import annotations

import re

from remote_import.model.asset import AssetReference
from remote_import.model.directive import find_imports
from remote_import.stylesheet.model import Stylesheet
from remote_import.urls import resolve_relative

# url(x), url('x'), url("x") -- group "url" is the reference itself.
_URL_FUNC_RE = re.compile(
    r"""url\(\s*(?:(?P<q>["'])(?P<qurl>.*?)(?P=q)|(?P<url>[^)"'\s]*))\s*\)""",
    re.IGNORECASE | re.DOTALL,
)
_IMAGE_SET_RE = re.compile(r"(?:-webkit-)?image-set\(", re.IGNORECASE)
_STRING_RE = re.compile(r"""(?P<q>["'])(?P<qurl>.*?)(?P=q)""", re.DOTALL)


def find_asset_references(value: str) -> list[AssetReference]:
    """Return every URL reference in a declaration *value*, in order.

    Covers ``url()`` in all three quoting styles and bare strings inside
    ``image-set()``, which are URLs without a function wrapper.
    """
    refs: list[AssetReference] = []
    taken: list[tuple[int, int]] = []
    for match in _URL_FUNC_RE.finditer(value):
        taken.append(match.span())
        if match.group("q"):
            refs.append(
                AssetReference(
                    raw_value=match.group(0),
                    url=match.group("qurl"),
                    quote=match.group("q"),
                    start=match.start("qurl"),
                    end=match.end("qurl"),
                )
            )
        else:
            refs.append(
                AssetReference(
                    raw_value=match.group(0),
                    url=match.group("url"),
                    quote="",
                    start=match.start("url"),
                    end=match.end("url"),
                )
            )

    for match in _IMAGE_SET_RE.finditer(value):
        close = _closing_paren(value, match.end() - 1)
        for string in _STRING_RE.finditer(value, match.end(), close):
            if any(start <= string.start() < end for start, end in taken):
                continue
            refs.append(
                AssetReference(
                    raw_value=string.group(0),
                    url=string.group("qurl"),
                    quote=string.group("q"),
                    start=string.start("qurl"),
                    end=string.end("qurl"),
                )
            )
    refs.sort(key=lambda r: r.start)
    return refs


def _closing_paren(value: str, open_index: int) -> int:
    depth = 0
    for i in range(open_index, len(value)):
        if value[i] == "(":
            depth += 1
        elif value[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    return len(value)


def rewrite_value(value: str, origin: str) -> str:
    """Return *value* with every relative URL reference made absolute."""
    out = value
    for ref in reversed(find_asset_references(value)):
        if not ref.is_rewritable:
            continue
        out = out[: ref.start] + resolve_relative(ref.url, origin) + out[ref.end :]
    return out


class AssetUrlTransform:
    """Rewrite relative references in a fetched stylesheet to absolute URLs.

    Declaration values (``background``, ``src``, ...) and nested ``@import``
    targets are resolved against *origin*. Absolute URLs, ``data:`` URIs and
    fragment-only references (``url(#id)``) are left unchanged, and each
    reference keeps its original quoting.
    """

    def __init__(self, origin: str) -> None:
        self.origin = origin

    def apply(self, stylesheet: Stylesheet) -> Stylesheet:
        for decl in stylesheet.walk_decls():
            if "url(" in decl.value.lower() or "image-set(" in decl.value.lower():
                decl.value = rewrite_value(decl.value, self.origin)
        for directive in find_imports(stylesheet, self.origin):
            absolute = resolve_relative(directive.target, self.origin)
            if directive.target and absolute != directive.target:
                directive.retarget(absolute)
        return stylesheet

