"""ResolveResult: the resolved tree plus the diagnostics gathered on the way."""

from __future__ import annotations

from dataclasses import dataclass, field

from remote_import.model.diagnostic import Diagnostic
from remote_import.stylesheet.model import Stylesheet


@dataclass
class ResolveResult:
    stylesheet: Stylesheet
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def css(self) -> str:
        return self.stylesheet.to_css()

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]

    def __str__(self) -> str:
        return self.css
