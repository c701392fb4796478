"""Content types served by the site content store."""

from __future__ import annotations

from enum import StrEnum


class ContentType(StrEnum):
    """The three kinds of content, each with its own schema and directory."""

    POST = "post"
    SERVICE = "service"
    TESTIMONIAL = "testimonial"


def parse_content_type(value: str) -> ContentType:
    """Resolve a user-supplied type name, accepting plurals and ``blog``.

    Raises:
        ValueError: If *value* names no known content type.
    """
    normalized = value.strip().lower()
    aliases = {
        "posts": ContentType.POST,
        "blog": ContentType.POST,
        "services": ContentType.SERVICE,
        "testimonials": ContentType.TESTIMONIAL,
    }
    if normalized in aliases:
        return aliases[normalized]
    try:
        return ContentType(normalized)
    except ValueError:
        choices = ", ".join(t.value for t in ContentType)
        msg = f"Unknown content type: {value!r} (expected one of: {choices})"
        raise ValueError(msg) from None
