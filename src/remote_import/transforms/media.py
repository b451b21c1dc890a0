"""Wrap spliced content in the conditions carried by its import directive."""

from __future__ import annotations

from remote_import.model.directive import ImportDirective
from remote_import.stylesheet.model import AtRule, Node


def _wrap(name: str, params: str, nodes: list[Node]) -> AtRule:
    if nodes and not nodes[0].before:
        nodes[0].before = "\n"
    return AtRule(
        name=name,
        params=params,
        children=nodes,
        after_name=" " if params else "",
        between=" ",
        after="\n",
    )


def wrap_conditions(nodes: list[Node], directive: ImportDirective) -> list[Node]:
    """Nest *nodes* in ``@layer``, ``@supports`` and ``@media`` blocks as needed.

    Nesting order from the outside in: media, supports, layer. With no
    conditions on the directive *nodes* are returned unchanged.

    The media condition is used verbatim, so comma-separated lists keep
    their order and duplicates. Media blocks already present in the fetched
    content stay nested inside the wrapper and the browser applies both.
    """
    wrapped = list(nodes)
    if directive.layer is not None:
        wrapped = [_wrap("layer", directive.layer, wrapped)]
    if directive.supports is not None:
        supports = directive.supports
        if not supports.startswith("("):
            supports = f"({supports})"
        wrapped = [_wrap("supports", supports, wrapped)]
    media = directive.media.strip()
    if media:
        wrapped = [_wrap("media", media, wrapped)]
    return wrapped
