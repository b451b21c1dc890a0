"""remote-import CLI entry point: Click group with subcommands."""

import click

from remote_import import __version__


@click.group()
@click.version_option(version=__version__, prog_name="remote-import")
def cli() -> None:
    """remote-import - inline remote stylesheet @import directives."""


# Import and register subcommands
from remote_import.cli.resolve import resolve  # noqa: E402
from remote_import.cli.inspect import inspect  # noqa: E402

cli.add_command(resolve)
cli.add_command(inspect)
