"""remote_import model layer -- public type re-exports."""

from remote_import.model.asset import AssetReference
from remote_import.model.context import DiagnosticLog, ResolutionContext
from remote_import.model.diagnostic import Diagnostic, Severity
from remote_import.model.directive import ImportDirective, find_imports
from remote_import.model.fetch import FetchResult
from remote_import.model.result import ResolveResult

__all__ = [
    # directive
    "ImportDirective",
    "find_imports",
    # fetch
    "FetchResult",
    # asset
    "AssetReference",
    # context
    "ResolutionContext",
    "DiagnosticLog",
    # diagnostic
    "Severity",
    "Diagnostic",
    # result
    "ResolveResult",
]
