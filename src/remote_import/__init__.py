"""remote_import: inline remote stylesheet @import directives."""
from __future__ import annotations

__version__ = "0.1.0"

# Config
from remote_import.config import (
    AbortController,
    AbortSignal,
    FetchTimeout,
    ResolverOptions,
)

# Errors
from remote_import.errors import (
    RemoteImportError,
    TransportError,
    NetworkError,
    RequestTimeoutError,
    HTTPStatusError,
    ParseError,
    CycleDetectedError,
    DepthExceededError,
    AbortError,
    ConfigurationError,
)

# Model
from remote_import.model import (
    AssetReference,
    Diagnostic,
    FetchResult,
    ImportDirective,
    ResolveResult,
    Severity,
)

# Stylesheet
from remote_import.stylesheet import parse_stylesheet, serialize, Stylesheet

# URLs
from remote_import.urls import Local, Remote, classify, resolve_relative

# Engine
from remote_import.engine import FetchDeduplicator, ImportResolver, resolve_imports

# Transport
from remote_import._http import HttpClient, HttpTransport, Transport

__all__ = [
    "__version__",
    # config
    "AbortController",
    "AbortSignal",
    "FetchTimeout",
    "ResolverOptions",
    # errors
    "RemoteImportError",
    "TransportError",
    "NetworkError",
    "RequestTimeoutError",
    "HTTPStatusError",
    "ParseError",
    "CycleDetectedError",
    "DepthExceededError",
    "AbortError",
    "ConfigurationError",
    # model
    "AssetReference",
    "Diagnostic",
    "FetchResult",
    "ImportDirective",
    "ResolveResult",
    "Severity",
    # stylesheet
    "parse_stylesheet",
    "serialize",
    "Stylesheet",
    # urls
    "Local",
    "Remote",
    "classify",
    "resolve_relative",
    # engine
    "FetchDeduplicator",
    "ImportResolver",
    "resolve_imports",
    # transport
    "HttpClient",
    "HttpTransport",
    "Transport",
]
