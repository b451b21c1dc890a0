from remote_import.engine.fetcher import FetchDeduplicator
from remote_import.engine.resolver import ImportResolver, resolve_imports

__all__ = ["FetchDeduplicator", "ImportResolver", "resolve_imports"]
