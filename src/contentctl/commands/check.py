"""Command: validate every content file before publishing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from contentctl.commands._base import ContentCommand

if TYPE_CHECKING:
    from contentctl.commands._context import AppContext


@click.command(
    cls=ContentCommand,
    examples="""\
  contentctl check
  contentctl check --type post --type testimonial
  contentctl --json check""",
)
@click.option(
    "--type",
    "content_types",
    multiple=True,
    type=click.Choice(["post", "service", "testimonial"], case_sensitive=False),
    help="Only check this type (repeatable).",
)
@click.pass_obj
def check(app: AppContext, content_types: tuple[str, ...]) -> None:
    """Validate content files and list every failure (exit 1 if any)."""
    from contentctl.services.check import CheckService

    app.emit(CheckService(app.repository).validate(content_types))
