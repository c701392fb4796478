"""Subcommand modules for contentctl.

Provides register_commands(), which imports command modules lazily so
``contentctl --help`` does not load the content pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root group."""
    from contentctl.commands.cache import cache
    from contentctl.commands.check import check
    from contentctl.commands.query import query

    cli.add_command(query)
    cli.add_command(cache)
    cli.add_command(check)
