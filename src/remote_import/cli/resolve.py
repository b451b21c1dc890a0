"""CLI command: remote-import resolve -- inline remote imports of a stylesheet."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, TextIO

import click

from remote_import._http import HttpClient, HttpTransport, Transport
from remote_import.config import ResolverOptions
from remote_import.engine.resolver import ImportResolver
from remote_import.errors import ConfigurationError, ParseError
from remote_import.events.bus import EventBus
from remote_import.events.log import logging_listener


def _make_transport(options: ResolverOptions) -> Transport:
    return HttpTransport(HttpClient(timeout=options.timeout))


def _parse_headers(values: tuple[str, ...]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got {raw!r}", param_hint="--header")
        headers[name.strip()] = value.strip()
    return headers


def _load_options(config_path: str | None, overrides: dict[str, Any]) -> ResolverOptions:
    """Merge a JSON config file with command-line overrides (flags win)."""
    data: dict[str, Any] = {}
    if config_path:
        with open(config_path, encoding="utf-8") as fh:
            loaded = json.load(fh)
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"{config_path}: expected a JSON object")
        data.update(loaded)
    headers = dict(data.pop("headers", {}) or {})
    headers.update(overrides.pop("headers", {}))
    data.update({k: v for k, v in overrides.items() if v is not None})
    if headers:
        data["headers"] = headers
    return ResolverOptions.from_dict(data)


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("-o", "--output", type=click.File("w", encoding="utf-8"), default="-", help="Output file (default: stdout)")
@click.option("--from", "source_url", default=None, help="URL the input stylesheet lives at")
@click.option("--recursive/--no-recursive", default=None, help="Resolve imports inside fetched stylesheets")
@click.option("--resolve-urls/--no-resolve-urls", default=None, help="Make relative url() references absolute")
@click.option("--max-depth", type=click.IntRange(min=0), default=None, help="Maximum nested import depth")
@click.option("--user-agent", default=None, help="User-Agent header sent with every fetch")
@click.option("--modern-browser/--no-modern-browser", default=None, help="Send a modern browser User-Agent")
@click.option("-H", "--header", "headers", multiple=True, help="Extra request header, 'Name: value'")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None, help="JSON options file")
@click.option("--timeout", type=float, default=None, help="Per-request timeout in seconds")
@click.option("--strict", is_flag=True, help="Exit with status 1 if any import could not be resolved")
@click.option("-v", "--verbose", is_flag=True, help="Log fetches to stderr")
def resolve(
    source: TextIO,
    output: TextIO,
    source_url: str | None,
    recursive: bool | None,
    resolve_urls: bool | None,
    max_depth: int | None,
    user_agent: str | None,
    modern_browser: bool | None,
    headers: tuple[str, ...],
    config_path: str | None,
    timeout: float | None,
    strict: bool,
    verbose: bool,
) -> None:
    """Inline the remote @import directives of SOURCE (default: stdin).

    Warnings about imports left unresolved are printed to stderr.
    """
    try:
        options = _load_options(
            config_path,
            {
                "recursive": recursive,
                "resolve_urls": resolve_urls,
                "max_depth": max_depth,
                "user_agent": user_agent,
                "modern_browser": modern_browser,
                "timeout": timeout,
                "headers": _parse_headers(headers),
            },
        )
    except (ConfigurationError, TypeError, ValueError) as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(2)

    bus = EventBus()
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("remote_import").setLevel(logging.INFO)
        bus.on_all(logging_listener())

    transport = _make_transport(options)
    resolver = ImportResolver(options, transport=transport, event_bus=bus)
    try:
        result = resolver.process(source.read(), source_url=source_url)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    finally:
        close = getattr(transport, "close", None)
        if close is not None:
            close()

    output.write(result.css)

    for diag in result.diagnostics:
        click.echo(str(diag), err=True)

    if strict and result.warnings:
        sys.exit(1)
