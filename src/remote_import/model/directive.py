"""ImportDirective: a decoded ``@import`` at-rule."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from remote_import.stylesheet.model import AtRule

# url(...) with optional quotes, or a bare quoted string.
_TARGET_RE = re.compile(
    r"""
    url\(\s*(?P<fq>["']?)(?P<furl>.*?)(?P=fq)\s*\)   # url(x) / url('x') / url("x")
    |
    (?P<sq>["'])(?P<surl>.*?)(?P=sq)                 # 'x' / "x"
    """,
    re.IGNORECASE | re.VERBOSE | re.DOTALL,
)
_LAYER_RE = re.compile(r"layer(?:\(\s*(?P<name>[^)]*?)\s*\))?(?=\s|$)", re.IGNORECASE)
_SUPPORTS_RE = re.compile(r"supports\(", re.IGNORECASE)


@dataclass(eq=False)
class ImportDirective:
    """An ``@import`` statement found in a stylesheet.

    Attributes:
        target: The referenced URL or path, unquoted.
        quote: Quote character used around the target (``'``, ``"`` or ``""``).
        url_function: Whether the target was wrapped in ``url()``.
        media: Trailing media query list, verbatim (may be empty).
        layer: Cascade layer name; ``""`` for an anonymous ``layer`` and
            ``None`` when absent.
        supports: Condition inside ``supports(...)``, or ``None``.
        source_origin: URL of the document the directive was found in.
        node: The at-rule this directive was decoded from.
    """

    target: str
    quote: str = ""
    url_function: bool = False
    media: str = ""
    layer: str | None = None
    supports: str | None = None
    source_origin: str | None = None
    node: AtRule | None = field(default=None, repr=False)
    target_span: tuple[int, int] = field(default=(0, 0), repr=False)

    @property
    def has_conditions(self) -> bool:
        return bool(self.media) or self.layer is not None or self.supports is not None

    @classmethod
    def from_at_rule(
        cls, node: AtRule, source_origin: str | None = None
    ) -> ImportDirective | None:
        """Decode *node*'s params; ``None`` if it is not a well-formed import."""
        if node.name.lower() != "import" or node.has_block:
            return None
        params = node.params
        match = _TARGET_RE.match(params)
        if match is None:
            return None
        if match.group("furl") is not None:
            target, quote, wrapped = match.group("furl"), match.group("fq"), True
            span = match.span("furl")
        else:
            target, quote, wrapped = match.group("surl"), match.group("sq"), False
            span = match.span("surl")

        rest = params[match.end() :].strip()
        layer: str | None = None
        layer_match = _LAYER_RE.match(rest)
        if layer_match:
            layer = layer_match.group("name") or ""
            rest = rest[layer_match.end() :].strip()

        supports: str | None = None
        if _SUPPORTS_RE.match(rest):
            close = _matching_paren(rest, len("supports"))
            if close != -1:
                supports = rest[len("supports") + 1 : close].strip()
                rest = rest[close + 1 :].strip()

        return cls(
            target=target.strip(),
            quote=quote,
            url_function=wrapped,
            media=rest,
            layer=layer,
            supports=supports,
            source_origin=source_origin,
            node=node,
            target_span=span,
        )

    def retarget(self, url: str) -> None:
        """Point the underlying at-rule at *url*, keeping its quoting style."""
        if self.node is None:
            raise ValueError("directive is not attached to an at-rule")
        start, end = self.target_span
        params = self.node.params
        self.node.params = params[:start] + url + params[end:]
        self.target_span = (start, start + len(url))
        self.target = url


def _matching_paren(text: str, open_index: int) -> int:
    """Index of the ``)`` closing the ``(`` at *open_index*, or -1."""
    depth = 0
    quote = ""
    for i in range(open_index, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def find_imports(container, source_origin: str | None = None) -> list[ImportDirective]:
    """Return decoded import directives in *container*, in document order."""
    directives: list[ImportDirective] = []
    for node in container.walk_at_rules("import"):
        directive = ImportDirective.from_at_rule(node, source_origin)
        if directive is not None:
            directives.append(directive)
    return directives
