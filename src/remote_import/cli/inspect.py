"""CLI command: remote-import inspect -- list the import directives of a stylesheet."""

from __future__ import annotations

import sys
from typing import TextIO

import click

from remote_import.errors import ParseError
from remote_import.model.directive import find_imports
from remote_import.stylesheet import parse_stylesheet
from remote_import.urls import Remote, classify


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--from", "source_url", default=None, help="URL the input stylesheet lives at")
def inspect(source: TextIO, source_url: str | None) -> None:
    """Parse SOURCE and list its @import directives without fetching anything.

    Each line shows whether the import is remote (and its absolute URL) or
    local, followed by any layer/supports/media conditions.
    """
    try:
        sheet = parse_stylesheet(source.read(), origin=source_url)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    directives = find_imports(sheet, source_url)
    click.echo(f"Imports: {len(directives)}")
    for directive in directives:
        target = classify(directive.target, source_url)
        if isinstance(target, Remote):
            parts = [f"  remote  {target.url}"]
        else:
            parts = [f"  local   {target.path}"]
        if directive.layer is not None:
            parts.append(f"layer={directive.layer or '<anonymous>'}")
        if directive.supports is not None:
            parts.append(f"supports={directive.supports}")
        if directive.media:
            parts.append(f'media="{directive.media}"')
        click.echo("  ".join(parts))
