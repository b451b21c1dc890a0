"""Stylesheet tree: Comment, Declaration, Rule, AtRule and Stylesheet nodes.

Every node keeps the raw text surrounding its semantic parts so that
serializing an untouched tree reproduces the parsed source exactly:

    before  -- whitespace (and stray semicolons) preceding the node
    between -- text between a node's head and its ``{`` / ``;``
    after   -- whitespace before a container's closing ``}`` (or EOF)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union


class _ContainerMixin:
    """Tree helpers shared by Rule, AtRule and Stylesheet."""

    children: list[Node] | None

    def walk(self) -> Iterator[Node]:
        """Yield every descendant node in document order (depth-first)."""
        for child in self.children or []:
            yield child
            if isinstance(child, _ContainerMixin):
                yield from child.walk()

    def walk_at_rules(self, name: str | None = None) -> Iterator[AtRule]:
        """Yield descendant at-rules, optionally only those named *name*."""
        for node in self.walk():
            if isinstance(node, AtRule) and (name is None or node.name.lower() == name):
                yield node

    def walk_decls(self) -> Iterator[Declaration]:
        """Yield every descendant declaration."""
        for node in self.walk():
            if isinstance(node, Declaration):
                yield node

    def replace_child(self, old: Node, new_nodes: list[Node]) -> None:
        """Replace *old* with *new_nodes* at the same position."""
        children = self.children or []
        for i, child in enumerate(children):
            if child is old:
                self.children = children[:i] + list(new_nodes) + children[i + 1 :]
                return
        raise ValueError("node is not a child of this container")

    def _children_css(self) -> str:
        return "".join(child.to_css() for child in self.children or [])


@dataclass(eq=False)
class Comment:
    """A ``/* ... */`` comment."""

    text: str
    before: str = ""

    def to_css(self) -> str:
        return f"{self.before}/*{self.text}*/"

    def __str__(self) -> str:
        return self.to_css()


@dataclass(eq=False)
class Declaration:
    """A ``prop: value`` pair inside a block."""

    prop: str
    value: str
    before: str = ""
    between: str = ": "
    trailing: str = ""  # whitespace between the value and ";"
    semicolon: bool = True

    @property
    def important(self) -> bool:
        return self.value.replace(" ", "").lower().endswith("!important")

    def to_css(self) -> str:
        end = f"{self.trailing};" if self.semicolon else ""
        return f"{self.before}{self.prop}{self.between}{self.value}{end}"

    def __str__(self) -> str:
        return self.to_css()


@dataclass(eq=False)
class Rule(_ContainerMixin):
    """A qualified rule: ``selector { ... }``."""

    selector: str
    children: list[Node] = field(default_factory=list)
    before: str = ""
    between: str = " "
    after: str = ""

    def to_css(self) -> str:
        return f"{self.before}{self.selector}{self.between}{{{self._children_css()}{self.after}}}"

    def __str__(self) -> str:
        return self.to_css()


@dataclass(eq=False)
class AtRule(_ContainerMixin):
    """An at-rule, with a block (``@media x { ... }``) or without (``@import x;``).

    ``children`` is ``None`` for block-less at-rules.
    """

    name: str
    params: str = ""
    children: list[Node] | None = None
    before: str = ""
    after_name: str = " "
    between: str = ""
    after: str = ""
    semicolon: bool = True

    @property
    def has_block(self) -> bool:
        return self.children is not None

    def to_css(self) -> str:
        head = f"{self.before}@{self.name}{self.after_name}{self.params}{self.between}"
        if self.children is not None:
            return f"{head}{{{self._children_css()}{self.after}}}"
        return f"{head};" if self.semicolon else head

    def __str__(self) -> str:
        return self.to_css()


@dataclass(eq=False)
class Stylesheet(_ContainerMixin):
    """Root of a parsed stylesheet.

    ``origin`` is the absolute URL the text was fetched from, or ``None`` for
    caller-supplied input.
    """

    children: list[Node] = field(default_factory=list)
    after: str = ""
    origin: str | None = None

    def to_css(self) -> str:
        return f"{self._children_css()}{self.after}"

    def __str__(self) -> str:
        return self.to_css()


Node = Union[Comment, Declaration, Rule, AtRule]


def serialize(node: Node | Stylesheet) -> str:
    """Serialize a node (and its subtree) back to stylesheet text."""
    return node.to_css()
