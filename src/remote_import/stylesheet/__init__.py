from remote_import.stylesheet.parser import parse_stylesheet
from remote_import.stylesheet.model import (
    AtRule,
    Comment,
    Declaration,
    Node,
    Rule,
    Stylesheet,
    serialize,
)

__all__ = [
    "parse_stylesheet",
    "serialize",
    "Stylesheet",
    "Rule",
    "AtRule",
    "Declaration",
    "Comment",
    "Node",
]
