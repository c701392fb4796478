"""Content records: the immutable values served to page code.

A record merges validated front matter, the identifier derived from the
file name, the raw body, its rendered HTML, and derived fields.  The
transform functions are pure: no I/O, and they cannot fail on valid input.

INVARIANT: Records are frozen and hold tuples, never lists, so a record
shared from the cache cannot be mutated by a caller.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar

from pydantic import BaseModel

from contentctl.domain.frontmatter import (
    Frontmatter,
    PostFrontmatter,
    PricingInfo,
    ServiceFrontmatter,
    TestimonialFrontmatter,
)
from contentctl.domain.types import ContentType

DEFAULT_WORDS_PER_MINUTE = 200

_WORD_RE = re.compile(r"\S+")


class ContentRecord(BaseModel, ABC):
    """Fields shared by every record type."""

    model_config = {"frozen": True}

    body: str
    html: str
    featured: bool = False

    content_type: ClassVar[ContentType]
    # Attributes scanned by full-text search, in display order.
    search_fields: ClassVar[tuple[str, ...]] = ()

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Slug for posts and services, ``id`` for testimonials."""

    def summary(self) -> dict[str, Any]:
        """Compact listing row for CLI output."""
        return {"id": self.identifier}


class PostRecord(ContentRecord):
    """A blog post with its reading-time estimate."""

    content_type: ClassVar[ContentType] = ContentType.POST
    search_fields: ClassVar[tuple[str, ...]] = (
        "title",
        "excerpt",
        "body",
        "categories",
        "tags",
        "author",
    )

    slug: str
    title: str
    date: str
    author: str
    excerpt: str
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    featured_image: str | None = None
    reading_minutes: int
    reading_time: str

    @property
    def identifier(self) -> str:
        return self.slug

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.slug,
            "title": self.title,
            "date": self.date,
            "author": self.author,
            "reading_time": self.reading_time,
            "featured": self.featured,
        }


class ServiceRecord(ContentRecord):
    """A service description, ordered by its explicit ``order`` key."""

    content_type: ClassVar[ContentType] = ContentType.SERVICE
    search_fields: ClassVar[tuple[str, ...]] = (
        "title",
        "short_description",
        "body",
        "features",
        "benefits",
    )

    slug: str
    title: str
    short_description: str
    featured_image: str
    icon: str
    order: int
    features: tuple[str, ...] = ()
    benefits: tuple[str, ...] = ()
    pricing: PricingInfo | None = None

    @property
    def identifier(self) -> str:
        return self.slug

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.slug,
            "title": self.title,
            "order": self.order,
            "featured": self.featured,
        }


class TestimonialRecord(ContentRecord):
    """A client testimonial with a 1-5 rating."""

    content_type: ClassVar[ContentType] = ContentType.TESTIMONIAL
    search_fields: ClassVar[tuple[str, ...]] = (
        "author",
        "company",
        "position",
        "content",
        "body",
    )

    id: str
    author: str
    position: str
    content: str
    rating: int
    order: int
    company: str | None = None
    avatar: str | None = None
    services: tuple[str, ...] = ()

    @property
    def identifier(self) -> str:
        return self.id

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "author": self.author,
            "company": self.company,
            "rating": self.rating,
            "order": self.order,
        }


Record = PostRecord | ServiceRecord | TestimonialRecord


# ---------------------------------------------------------------------------
# Derived fields
# ---------------------------------------------------------------------------


def count_words(text: str) -> int:
    return len(_WORD_RE.findall(text))


def reading_minutes(text: str, *, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    """``ceil(words / wpm)``, never less than one minute."""
    return max(1, math.ceil(count_words(text) / words_per_minute))


def format_reading_time(minutes: int) -> str:
    return f"{minutes} min read"


# ---------------------------------------------------------------------------
# Transformers
# ---------------------------------------------------------------------------


def transform_post(
    fm: PostFrontmatter,
    slug: str,
    body: str,
    html: str,
    *,
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
) -> PostRecord:
    minutes = reading_minutes(body, words_per_minute=words_per_minute)
    return PostRecord(
        slug=slug,
        title=fm.title,
        date=fm.date,
        author=fm.author,
        excerpt=fm.excerpt,
        categories=tuple(fm.categories),
        tags=tuple(fm.tags),
        featured=fm.featured,
        featured_image=fm.featured_image,
        reading_minutes=minutes,
        reading_time=format_reading_time(minutes),
        body=body,
        html=html,
    )


def transform_service(fm: ServiceFrontmatter, slug: str, body: str, html: str) -> ServiceRecord:
    return ServiceRecord(
        slug=slug,
        title=fm.title,
        short_description=fm.short_description,
        featured_image=fm.featured_image,
        icon=fm.icon,
        order=fm.order,
        features=tuple(fm.features),
        benefits=tuple(fm.benefits),
        pricing=fm.pricing,
        featured=fm.featured,
        body=body,
        html=html,
    )


def transform_testimonial(
    fm: TestimonialFrontmatter,
    testimonial_id: str,
    body: str,
    html: str,
) -> TestimonialRecord:
    return TestimonialRecord(
        id=testimonial_id,
        author=fm.author,
        position=fm.position,
        content=fm.content,
        rating=fm.rating,
        order=fm.order,
        featured=fm.featured,
        company=fm.company,
        avatar=fm.avatar,
        services=tuple(fm.services),
        body=body,
        html=html,
    )


def transform_record(
    content_type: ContentType,
    fm: Frontmatter,
    identifier: str,
    body: str,
    html: str,
    *,
    words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
) -> Record:
    """Dispatch to the transformer for *content_type*."""
    if content_type is ContentType.POST:
        assert isinstance(fm, PostFrontmatter)
        return transform_post(fm, identifier, body, html, words_per_minute=words_per_minute)
    if content_type is ContentType.SERVICE:
        assert isinstance(fm, ServiceFrontmatter)
        return transform_service(fm, identifier, body, html)
    assert isinstance(fm, TestimonialFrontmatter)
    return transform_testimonial(fm, identifier, body, html)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def sort_records(content_type: ContentType, records: Iterable[Record]) -> tuple[Record, ...]:
    """Apply the fixed per-type order.

    Posts: newest ``date`` first.  Services and testimonials: ``order``
    ascending.  Sorting is stable, so ties keep enumeration order.
    """
    items = list(records)
    if content_type is ContentType.POST:
        items.sort(key=lambda r: r.date, reverse=True)  # type: ignore[union-attr]
    else:
        items.sort(key=lambda r: r.order)  # type: ignore[union-attr]
    return tuple(items)
