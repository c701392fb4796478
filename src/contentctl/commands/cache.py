"""Command group: inspect and reset collection caches."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from contentctl.commands._base import ContentGroup
from contentctl.services.cache import CacheService

if TYPE_CHECKING:
    from contentctl.commands._context import AppContext

_TYPE_OPTION = click.Choice(["post", "service", "testimonial"], case_sensitive=False)


@click.group(
    cls=ContentGroup,
    examples="""\
  contentctl cache status --warm
  contentctl cache clear --type post""",
)
def cache() -> None:
    """Collection cache diagnostics."""


@cache.command()
@click.option("--type", "content_type", type=_TYPE_OPTION, default=None, help="One type only.")
@click.option("--warm", is_flag=True, help="Build each collection before reporting.")
@click.pass_obj
def status(app: AppContext, content_type: str | None, warm: bool) -> None:
    """Show whether each collection is cached, and since when."""
    app.emit(CacheService(app.repository).status(content_type, warm=warm))


@cache.command()
@click.option("--type", "content_type", type=_TYPE_OPTION, default=None, help="One type only.")
@click.pass_obj
def clear(app: AppContext, content_type: str | None) -> None:
    """Force the next read to rebuild from files."""
    app.emit(CacheService(app.repository).clear(content_type))
