"""Command group: list, retrieve, and search site content."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from contentctl.commands._base import ContentGroup
from contentctl.services.query import ContentFilter, QueryService

if TYPE_CHECKING:
    from contentctl.commands._context import AppContext

_TYPE_CHOICES = click.Choice(
    ["post", "posts", "blog", "service", "services", "testimonial", "testimonials"],
    case_sensitive=False,
)

_QUERY_EXAMPLES = """\
  contentctl query list posts
  contentctl query list posts --category "Stock Photography" --tag ebay
  contentctl query list testimonials --min-rating 4 --featured
  contentctl query get post stock-photography-lessons
  contentctl query search photo --type service
  contentctl --json query list posts --offset 2 --limit 2"""


@click.group(cls=ContentGroup, examples=_QUERY_EXAMPLES)
def query() -> None:
    """List, retrieve, and search posts, services, and testimonials."""


@query.command(
    name="list",
    examples="""\
  contentctl query list posts
  contentctl query list posts --featured --limit 3
  contentctl query list posts --author jane --search lighting
  contentctl query list services --not-featured
  contentctl query list testimonials --service photography --min-rating 5""",
)
@click.argument("content_type", type=_TYPE_CHOICES)
@click.option("--category", default=None, help="Posts in this category.")
@click.option("--tag", default=None, help="Posts with this tag.")
@click.option(
    "--featured/--not-featured",
    "featured",
    default=None,
    help="Only featured (or only non-featured) items.",
)
@click.option("--author", default=None, help="Author contains this text (case-insensitive).")
@click.option("--min-rating", type=click.IntRange(1, 5), default=None, help="Minimum rating.")
@click.option("--service", default=None, help="Testimonials related to this service slug.")
@click.option("--search", "search_text", default=None, help="Case-insensitive text search.")
@click.option("--offset", type=click.IntRange(min=0), default=0, help="Skip this many results.")
@click.option(
    "--limit", type=click.IntRange(min=0), default=0, help="Max results (0 = no limit)."
)
@click.pass_obj
def list_cmd(
    app: AppContext,
    content_type: str,
    category: str | None,
    tag: str | None,
    featured: bool | None,
    author: str | None,
    min_rating: int | None,
    service: str | None,
    search_text: str | None,
    offset: int,
    limit: int,
) -> None:
    """List one content type in its fixed order, filtered and paginated."""
    criteria = ContentFilter(
        category=category,
        tag=tag,
        featured=featured,
        author=author,
        min_rating=min_rating,
        service=service,
    )
    svc = QueryService(app.repository)
    app.emit(
        svc.list_items(
            content_type,
            criteria=criteria,
            search=search_text,
            offset=offset,
            limit=limit,
        )
    )


@query.command(
    examples="""\
  contentctl query get post stock-photography-lessons
  contentctl --json query get testimonial acme-ceo"""
)
@click.argument("content_type", type=_TYPE_CHOICES)
@click.argument("identifier")
@click.pass_obj
def get(app: AppContext, content_type: str, identifier: str) -> None:
    """Show one record by slug or id."""
    app.emit(QueryService(app.repository).get(content_type, identifier))


@query.command(
    examples="""\
  contentctl query search photo
  contentctl query search "long-term roi" --type post --limit 5"""
)
@click.argument("query_text")
@click.option("--type", "content_type", type=_TYPE_CHOICES, default=None, help="Limit to a type.")
@click.option("--offset", type=click.IntRange(min=0), default=0, help="Skip this many results.")
@click.option(
    "--limit", type=click.IntRange(min=0), default=0, help="Max results (0 = no limit)."
)
@click.pass_obj
def search(
    app: AppContext,
    query_text: str,
    content_type: str | None,
    offset: int,
    limit: int,
) -> None:
    """Case-insensitive substring search across content."""
    svc = QueryService(app.repository)
    app.emit(svc.search(query_text, content_type=content_type, offset=offset, limit=limit))
