"""Diagnostic model: non-fatal findings attached to a resolution result."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from remote_import.errors import RemoteImportError


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding produced while resolving imports.

    Attributes:
        rule: Identifier of the failure kind (``transport_failure``,
            ``parse_failure``, ``cycle_detected``, ``depth_exceeded``).
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        url: The import target involved, if applicable.
        depth: Nesting depth of the document holding the directive.
    """

    rule: str
    severity: Severity
    message: str
    url: str | None = None
    depth: int = 0

    @classmethod
    def from_error(
        cls,
        error: RemoteImportError,
        *,
        url: str | None = None,
        depth: int = 0,
        severity: Severity = Severity.WARNING,
    ) -> Diagnostic:
        return cls(rule=error.rule, severity=severity, message=str(error), url=url, depth=depth)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [url={self.url}]" if self.url else ""
        return f"{self.severity.value}{location}: {self.message}"
