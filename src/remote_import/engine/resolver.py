"""Recursive resolver: replaces remote @import directives with fetched content."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from concurrent.futures import Future
from typing import Any

from remote_import._http import HttpClient, HttpTransport, Transport
from remote_import.config import AbortSignal, ResolverOptions
from remote_import.engine.fetcher import FetchDeduplicator
from remote_import.errors import (
    CycleDetectedError,
    DepthExceededError,
    ParseError,
)
from remote_import.events import types as events
from remote_import.events.bus import EventBus
from remote_import.model.context import ResolutionContext
from remote_import.model.diagnostic import Diagnostic
from remote_import.model.directive import ImportDirective, find_imports
from remote_import.model.fetch import FetchResult
from remote_import.model.result import ResolveResult
from remote_import.stylesheet.model import AtRule, Node, Rule, Stylesheet
from remote_import.stylesheet.parser import parse_stylesheet
from remote_import.transforms.asset_urls import AssetUrlTransform
from remote_import.transforms.base import Transform
from remote_import.transforms.media import wrap_conditions
from remote_import.urls import Remote, classify

log = logging.getLogger("remote_import")


class ImportResolver:
    """Inline remote ``@import`` directives.

    For each remote directive, in document order:

    1. fetch the target (once per URL per run, siblings concurrently);
    2. parse the body with the fetched URL as its origin;
    3. optionally anchor relative asset URLs at that origin;
    4. optionally recurse into the fetched content;
    5. wrap it in the directive's media/supports/layer conditions;
    6. splice it in place of the directive.

    Local imports are left untouched. Directives that cannot be resolved
    (transport or parse failure, import cycle, depth limit) stay in place
    and a warning is recorded on the result.

    The input tree is never modified: the resolved tree is a new
    :class:`Stylesheet` sharing untouched nodes with the input.
    """

    def __init__(
        self,
        options: ResolverOptions | Mapping[str, Any] | None = None,
        *,
        transport: Transport | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        if options is None:
            options = ResolverOptions()
        elif not isinstance(options, ResolverOptions):
            options = ResolverOptions.from_dict(options)
        self.options = options
        self.transport = transport
        self.event_bus = event_bus or EventBus()

    # --- public API -------------------------------------------------------------

    def process(
        self,
        css: str,
        *,
        source_url: str | None = None,
        signal: AbortSignal | None = None,
    ) -> ResolveResult:
        """Parse *css*, resolve its imports and return the result.

        *source_url* is where *css* lives; when it is an http(s) URL,
        relative imports are resolved against it and fetched too.
        """
        return self.resolve(parse_stylesheet(css, origin=source_url), signal=signal)

    def resolve(
        self, stylesheet: Stylesheet, *, signal: AbortSignal | None = None
    ) -> ResolveResult:
        """Resolve the imports of an already-parsed *stylesheet*."""
        transport = self.transport
        owned: HttpTransport | None = None
        if transport is None:
            owned = transport = HttpTransport(HttpClient(timeout=self.options.timeout))

        headers = self.options.request_headers()
        try:
            with FetchDeduplicator(
                transport,
                headers=headers,
                max_workers=self.options.max_workers,
                event_bus=self.event_bus,
            ) as fetcher:
                ctx = ResolutionContext(
                    options=self.options,
                    fetcher=fetcher,
                    origin_stack=(stylesheet.origin,) if stylesheet.origin else (),
                    event_bus=self.event_bus,
                    signal=signal,
                )
                children = self._resolve_children(stylesheet.children or [], ctx)
        finally:
            if owned is not None:
                owned.close()

        resolved = Stylesheet(children=children, after=stylesheet.after, origin=stylesheet.origin)
        diagnostics = ctx.diagnostics.items
        if diagnostics:
            log.info("resolved with %d warning(s)", len(diagnostics))
        return ResolveResult(stylesheet=resolved, diagnostics=diagnostics)

    # --- tree walk ---------------------------------------------------------------

    def _resolve_children(self, children: list[Node], ctx: ResolutionContext) -> list[Node]:
        """Map each child to zero or more output nodes, keeping document order."""
        ctx.check_aborted()

        # Issue every sibling fetch before joining any of them.
        pending: dict[int, tuple[ImportDirective, str, Future[FetchResult]]] = {}
        for index, child in enumerate(children):
            plan = self._plan(child, ctx)
            if plan is not None:
                directive, url = plan
                pending[index] = (directive, url, ctx.fetcher.submit(url))

        out: list[Node] = []
        for index, child in enumerate(children):
            if index in pending:
                directive, url, future = pending[index]
                result = ctx.fetcher.join(future, ctx.signal)
                out.extend(self._inline(directive, url, result, ctx))
            elif _contains_import(child):
                clone = copy.copy(child)
                clone.children = self._resolve_children(child.children or [], ctx)
                out.append(clone)
            else:
                out.append(child)
        return out

    def _plan(
        self, node: Node, ctx: ResolutionContext
    ) -> tuple[ImportDirective, str] | None:
        """Decide whether *node* is a remote import to fetch now."""
        if not isinstance(node, AtRule):
            return None
        directive = ImportDirective.from_at_rule(node, ctx.origin)
        if directive is None:
            return None
        target = classify(
            directive.target, ctx.origin, default_scheme=self.options.default_scheme
        )
        if not isinstance(target, Remote):
            self.event_bus.emit(
                events.ImportSkipped(target=directive.target, depth=ctx.depth, reason="local")
            )
            return None
        if ctx.has_visited(target.url):
            error = CycleDetectedError(target.url, ctx.origin_stack)
            ctx.warn(Diagnostic.from_error(error, url=target.url, depth=ctx.depth))
            self.event_bus.emit(
                events.ImportSkipped(target=target.url, depth=ctx.depth, reason="cycle")
            )
            return None
        return directive, target.url

    def _inline(
        self,
        directive: ImportDirective,
        url: str,
        result: FetchResult,
        ctx: ResolutionContext,
    ) -> list[Node]:
        """Turn a fetched import into the nodes that replace its directive."""
        original: list[Node] = [directive.node] if directive.node is not None else []
        if not result.ok:
            ctx.warn(Diagnostic.from_error(result.error, url=url, depth=ctx.depth))
            self.event_bus.emit(
                events.ImportSkipped(target=url, depth=ctx.depth, reason="failed")
            )
            return original

        try:
            subtree = parse_stylesheet(result.body, origin=url)
        except ParseError as exc:
            ctx.warn(Diagnostic.from_error(exc, url=url, depth=ctx.depth))
            self.event_bus.emit(
                events.ImportSkipped(target=url, depth=ctx.depth, reason="failed")
            )
            return original

        for transform in self._transforms_for(url):
            transform.apply(subtree)

        child_ctx = ctx.descend(url)
        if ctx.can_descend():
            nodes = self._resolve_children(subtree.children, child_ctx)
        else:
            self._report_unresolved(subtree, child_ctx)
            nodes = list(subtree.children)

        nodes = [n for n in nodes if not (isinstance(n, AtRule) and n.name.lower() == "charset")]
        nodes = wrap_conditions(nodes, directive)
        if nodes and directive.node is not None:
            nodes[0].before = directive.node.before

        self.event_bus.emit(events.ImportResolved(url=url, depth=ctx.depth, media=directive.media))
        return nodes

    def _transforms_for(self, origin: str) -> list[Transform]:
        """Transforms applied to content fetched from *origin* before recursing."""
        transforms: list[Transform] = []
        if self.options.resolve_urls:
            transforms.append(AssetUrlTransform(origin))
        return transforms

    def _report_unresolved(self, subtree: Stylesheet, ctx: ResolutionContext) -> None:
        """Record remote imports left in *subtree* because recursion stopped."""
        for directive in find_imports(subtree, ctx.origin):
            target = classify(
                directive.target, ctx.origin, default_scheme=self.options.default_scheme
            )
            if not isinstance(target, Remote):
                continue
            if not self.options.recursive:
                reason = "not_recursive"
            else:
                reason = "depth_exceeded"
                error = DepthExceededError(target.url, self.options.max_depth)
                ctx.warn(Diagnostic.from_error(error, url=target.url, depth=ctx.depth))
            self.event_bus.emit(
                events.ImportSkipped(target=target.url, depth=ctx.depth, reason=reason)
            )


def _contains_import(node: Node) -> bool:
    if not isinstance(node, (Rule, AtRule)) or node.children is None:
        return False
    return any(True for _ in node.walk_at_rules("import"))


def resolve_imports(
    css: str,
    options: ResolverOptions | Mapping[str, Any] | None = None,
    *,
    source_url: str | None = None,
    transport: Transport | None = None,
    event_bus: EventBus | None = None,
    signal: AbortSignal | None = None,
) -> ResolveResult:
    """Inline the remote ``@import`` directives of *css*.

    Example::

        result = resolve_imports(
            "@import url(https://fonts.googleapis.com/css?family=Tangerine) print;",
            {"resolveUrls": True},
        )
        print(result.css)
        for warning in result.warnings:
            print(warning)
    """
    resolver = ImportResolver(options, transport=transport, event_bus=event_bus)
    return resolver.process(css, source_url=source_url, signal=signal)
