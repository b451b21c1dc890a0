"""Hand-written, lossless parser for CSS stylesheets.

The parser only recovers the block structure the import resolver needs
(rules, at-rules, declarations, comments). Selectors, at-rule params and
declaration values are kept as raw text, so

    serialize(parse_stylesheet(text)) == text

for any input that parses.
"""

from __future__ import annotations

import re

from remote_import.errors import ParseError
from remote_import.stylesheet.model import (
    AtRule,
    Comment,
    Declaration,
    Node,
    Rule,
    Stylesheet,
)

__all__ = ["parse_stylesheet"]

_AT_NAME_RE = re.compile(r"@(?P<name>-?[A-Za-z_][\w-]*)")
_WHITESPACE = " \t\n\r\f\ufeff"


class _Parser:
    def __init__(self, source: str) -> None:
        self.src = source
        self.pos = 0

    # --- errors ---------------------------------------------------------------

    def error(self, message: str, index: int) -> ParseError:
        line = self.src.count("\n", 0, index) + 1
        column = index - (self.src.rfind("\n", 0, index) + 1) + 1
        return ParseError(message, line=line, column=column)

    # --- low-level scanning -----------------------------------------------------

    def skip_trivia(self) -> str:
        """Consume whitespace and stray semicolons; return the consumed text."""
        start = self.pos
        while self.pos < len(self.src) and (
            self.src[self.pos] in _WHITESPACE or self.src[self.pos] == ";"
        ):
            self.pos += 1
        return self.src[start : self.pos]

    def skip_string(self, index: int) -> int:
        """Return the index just past the string literal starting at *index*."""
        quote = self.src[index]
        i = index + 1
        while i < len(self.src):
            ch = self.src[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                return i + 1
            i += 1
        raise self.error("Unclosed string", index)

    def skip_comment(self, index: int) -> int:
        """Return the index just past the comment starting at *index*."""
        end = self.src.find("*/", index + 2)
        if end == -1:
            raise self.error("Unclosed comment", index)
        return end + 2

    def scan_until(self, stops: str) -> int:
        """Return the index of the first *stops* char outside strings, comments and brackets."""
        depth = 0
        i = self.pos
        while i < len(self.src):
            ch = self.src[i]
            if ch in "\"'":
                i = self.skip_string(i)
                continue
            if ch == "/" and self.src.startswith("/*", i):
                i = self.skip_comment(i)
                continue
            if ch == "\\":
                i += 2
                continue
            if ch in "([":
                depth += 1
            elif ch in ")]":
                depth = max(depth - 1, 0)
            elif depth == 0 and ch in stops:
                return i
            i += 1
        return len(self.src)

    # --- structure ---------------------------------------------------------------

    def parse_block(self, opened_at: int | None) -> tuple[list[Node], str]:
        """Parse nodes until the matching ``}`` (or EOF at top level).

        Returns the children and the trailing whitespace before the end.
        The closing brace itself is left for the caller.
        """
        children: list[Node] = []
        while True:
            before = self.skip_trivia()
            if self.pos >= len(self.src):
                if opened_at is not None:
                    raise self.error("Unclosed block", opened_at)
                return children, before
            ch = self.src[self.pos]
            if ch == "}":
                if opened_at is None:
                    raise self.error("Unexpected }", self.pos)
                return children, before
            if self.src.startswith("/*", self.pos):
                end = self.skip_comment(self.pos)
                children.append(Comment(text=self.src[self.pos + 2 : end - 2], before=before))
                self.pos = end
            elif ch == "@":
                children.append(self.parse_at_rule(before))
            else:
                children.append(self.parse_rule_or_declaration(before))

    def parse_nested(self, brace: int) -> tuple[list[Node], str]:
        self.pos = brace + 1
        children, after = self.parse_block(opened_at=brace)
        self.pos += 1  # closing brace
        return children, after

    def parse_at_rule(self, before: str) -> AtRule:
        match = _AT_NAME_RE.match(self.src, self.pos)
        if match is None:
            raise self.error("At-rule without name", self.pos)
        name = match.group("name")
        self.pos = match.end()
        stop = self.scan_until(";{}")
        prelude = self.src[self.pos : stop]
        stripped = prelude.strip(_WHITESPACE)
        if stripped:
            after_name = prelude[: len(prelude) - len(prelude.lstrip(_WHITESPACE))]
            params = stripped
            between = prelude[len(after_name) + len(params) :]
        else:
            after_name, params, between = "", "", prelude

        node = AtRule(name=name, params=params, before=before, after_name=after_name, between=between)
        if stop < len(self.src) and self.src[stop] == "{":
            node.children, node.after = self.parse_nested(stop)
        elif stop < len(self.src) and self.src[stop] == ";":
            self.pos = stop + 1
        else:
            # Ends at "}" or EOF: leave the trailing whitespace to the parent.
            node.semicolon = False
            self.pos = stop - len(between)
            node.between = ""
        return node

    def parse_rule_or_declaration(self, before: str) -> Node:
        start = self.pos
        stop = self.scan_until(";{}")
        text = self.src[start:stop]
        if stop < len(self.src) and self.src[stop] == "{":
            selector = text.rstrip(_WHITESPACE)
            rule = Rule(selector=selector, before=before, between=text[len(selector) :])
            rule.children, rule.after = self.parse_nested(stop)
            return rule

        colon = self._find_colon(text)
        if colon == -1:
            raise self.error("Unknown word", start)
        prop = text[:colon].rstrip(_WHITESPACE)
        rest = text[colon + 1 :]
        lead = rest[: len(rest) - len(rest.lstrip(_WHITESPACE))]
        value = rest[len(lead) :].rstrip(_WHITESPACE)
        trailing = rest[len(lead) + len(value) :]
        decl = Declaration(
            prop=prop,
            value=value,
            before=before,
            between=text[len(prop) : colon + 1] + lead,
            trailing=trailing,
        )
        if stop < len(self.src) and self.src[stop] == ";":
            self.pos = stop + 1
        else:
            decl.semicolon = False
            decl.trailing = ""
            self.pos = stop - len(trailing)
        return decl

    def _find_colon(self, text: str) -> int:
        """Index of the first ``:`` in *text* outside strings and comments."""
        i = 0
        while i < len(text):
            ch = text[i]
            if ch in "\"'":
                end = text.find(ch, i + 1)
                i = len(text) if end == -1 else end + 1
                continue
            if text.startswith("/*", i):
                end = text.find("*/", i + 2)
                i = len(text) if end == -1 else end + 2
                continue
            if ch == ":":
                return i
            i += 1
        return -1


def parse_stylesheet(source: str, *, origin: str | None = None) -> Stylesheet:
    """Parse stylesheet text into a :class:`Stylesheet` tree.

    *origin* records where the text was fetched from; relative references
    inside the tree are resolved against it.

    Raises :class:`~remote_import.errors.ParseError` on unbalanced braces or
    unterminated strings and comments.
    """
    parser = _Parser(source)
    children, after = parser.parse_block(opened_at=None)
    return Stylesheet(children=children, after=after, origin=origin)
