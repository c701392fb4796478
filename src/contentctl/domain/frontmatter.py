"""Front-matter schema models per content type.

Keys are accepted in the store's camelCase spelling (``shortDescription``)
as well as snake_case.  Unknown keys are ignored.  Scalars validate strictly:
a quoted ``"1"`` is not an order and ``1`` is not a title.

All models are frozen; a validated value is only ever produced by
:func:`validate_frontmatter` (or direct model validation in tests).
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    Field,
    StrictBool,
    StrictInt,
    StringConstraints,
    ValidationError,
    field_validator,
)

from contentctl.domain.errors import ContentValidationError, FieldError
from contentctl.domain.types import ContentType

NonEmptyStr = Annotated[str, StringConstraints(strict=True, strip_whitespace=True, min_length=1)]
TagList = list[Annotated[str, StringConstraints(strict=True, strip_whitespace=True)]]

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_BASE_CONFIG: dict[str, Any] = {
    "frozen": True,
    "populate_by_name": True,
    "extra": "ignore",
}


class PostFrontmatter(BaseModel):
    """Front matter for blog posts."""

    model_config = _BASE_CONFIG

    title: NonEmptyStr
    date: NonEmptyStr
    author: NonEmptyStr
    excerpt: NonEmptyStr
    categories: TagList = Field(default_factory=list)
    tags: TagList = Field(default_factory=list)
    featured: StrictBool = False
    featured_image: NonEmptyStr | None = Field(default=None, alias="featuredImage")

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_iso(cls, value: Any) -> Any:
        # Unquoted YAML dates arrive as ``date`` objects; timestamps carry a
        # time of day and are not dates.
        if isinstance(value, datetime):
            msg = "must be a date in YYYY-MM-DD format"
            raise ValueError(msg)
        if isinstance(value, date):
            return value.isoformat()
        return value

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        if not DATE_PATTERN.match(value):
            msg = "must be a date in YYYY-MM-DD format"
            raise ValueError(msg)
        try:
            date.fromisoformat(value)
        except ValueError:
            msg = f"{value!r} is not a calendar date"
            raise ValueError(msg) from None
        return value


class PricingInfo(BaseModel):
    """Optional ``pricing`` block on a service."""

    model_config = _BASE_CONFIG

    starting_price: Annotated[float, Field(ge=0, allow_inf_nan=False)] = Field(
        alias="startingPrice"
    )
    currency: NonEmptyStr
    billing_period: NonEmptyStr = Field(alias="billingPeriod")

    @field_validator("starting_price", mode="before")
    @classmethod
    def _reject_non_numbers(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, int | float):
            msg = "must be a number"
            raise ValueError(msg)
        return value


class ServiceFrontmatter(BaseModel):
    """Front matter for service descriptions."""

    model_config = _BASE_CONFIG

    title: NonEmptyStr
    short_description: NonEmptyStr = Field(alias="shortDescription")
    featured_image: NonEmptyStr = Field(alias="featuredImage")
    icon: NonEmptyStr
    order: Annotated[StrictInt, Field(ge=0)]
    features: TagList = Field(default_factory=list)
    benefits: TagList = Field(default_factory=list)
    pricing: PricingInfo | None = None
    featured: StrictBool = False


class TestimonialFrontmatter(BaseModel):
    """Front matter for client testimonials."""

    model_config = _BASE_CONFIG

    author: NonEmptyStr
    position: NonEmptyStr
    content: NonEmptyStr
    rating: Annotated[StrictInt, Field(ge=1, le=5)]
    order: Annotated[StrictInt, Field(ge=0)]
    featured: StrictBool = False
    company: NonEmptyStr | None = None
    avatar: NonEmptyStr | None = None
    services: TagList = Field(default_factory=list)


Frontmatter = PostFrontmatter | ServiceFrontmatter | TestimonialFrontmatter

SCHEMAS: dict[ContentType, type[BaseModel]] = {
    ContentType.POST: PostFrontmatter,
    ContentType.SERVICE: ServiceFrontmatter,
    ContentType.TESTIMONIAL: TestimonialFrontmatter,
}


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Collapse a pydantic error into one :class:`FieldError` per field.

    Nested locations are dotted (``pricing.startingPrice``); list positions
    are dropped so every bad tag of a list reports under the list's name.
    """
    grouped: dict[str, list[str]] = {}
    for err in exc.errors(include_url=False):
        parts = [str(p) for p in err["loc"] if not isinstance(p, int)]
        name = ".".join(parts) or "__root__"
        message = err["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages = grouped.setdefault(name, [])
        if message not in messages:
            messages.append(message)
    return [FieldError(field=name, message="; ".join(msgs)) for name, msgs in grouped.items()]


def validate_frontmatter(
    content_type: ContentType,
    data: dict[str, Any],
    path: Path,
) -> Frontmatter:
    """Validate raw front matter against *content_type*'s schema.

    Raises:
        ContentValidationError: With every offending field, not just the first.
    """
    schema = SCHEMAS[content_type]
    try:
        return schema.model_validate(data)  # type: ignore[return-value]
    except ValidationError as exc:
        raise ContentValidationError(str(content_type), path, field_errors(exc)) from exc
