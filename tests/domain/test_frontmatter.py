"""Tests for the per-type front-matter schemas."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any

import pytest

from contentctl.domain.errors import ContentValidationError
from contentctl.domain.frontmatter import (
    PostFrontmatter,
    ServiceFrontmatter,
    TestimonialFrontmatter as TestimonialFm,
    validate_frontmatter,
)
from contentctl.domain.types import ContentType

PATH = Path("content/x.md")


def _post(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "title": "Lighting Basics",
        "date": "2024-02-10",
        "author": "Jane Doe",
        "excerpt": "How to light a product shot.",
    }
    data.update(overrides)
    return data


def _service(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "title": "Photography Services",
        "shortDescription": "Product photos.",
        "featuredImage": "/img/photo.jpg",
        "icon": "camera",
        "order": 0,
    }
    data.update(overrides)
    return data


def _testimonial(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "author": "Alex Smith",
        "position": "CEO",
        "content": "Great results.",
        "rating": 5,
        "order": 0,
    }
    data.update(overrides)
    return data


def _fields(content_type: ContentType, data: dict[str, Any]) -> list[str]:
    with pytest.raises(ContentValidationError) as excinfo:
        validate_frontmatter(content_type, data, PATH)
    return excinfo.value.fields


class TestDefaults:
    def test_post_defaults(self) -> None:
        fm = validate_frontmatter(ContentType.POST, _post(), PATH)
        assert isinstance(fm, PostFrontmatter)
        assert fm.categories == []
        assert fm.tags == []
        assert fm.featured is False
        assert fm.featured_image is None

    def test_service_defaults(self) -> None:
        fm = validate_frontmatter(ContentType.SERVICE, _service(), PATH)
        assert isinstance(fm, ServiceFrontmatter)
        assert fm.features == []
        assert fm.benefits == []
        assert fm.pricing is None
        assert fm.featured is False

    def test_testimonial_defaults(self) -> None:
        fm = validate_frontmatter(ContentType.TESTIMONIAL, _testimonial(), PATH)
        assert isinstance(fm, TestimonialFm)
        assert fm.featured is False
        assert fm.company is None
        assert fm.avatar is None
        assert fm.services == []


class TestRequiredFields:
    @pytest.mark.parametrize("missing", ["title", "date", "author", "excerpt"])
    def test_post_missing(self, missing: str) -> None:
        data = _post()
        del data[missing]
        assert missing in _fields(ContentType.POST, data)

    @pytest.mark.parametrize(
        ("missing", "reported"),
        [
            ("title", "title"),
            ("shortDescription", "shortDescription"),
            ("featuredImage", "featuredImage"),
            ("icon", "icon"),
            ("order", "order"),
        ],
    )
    def test_service_missing(self, missing: str, reported: str) -> None:
        data = _service()
        del data[missing]
        assert reported in _fields(ContentType.SERVICE, data)

    @pytest.mark.parametrize("missing", ["author", "position", "content", "rating", "order"])
    def test_testimonial_missing(self, missing: str) -> None:
        data = _testimonial()
        del data[missing]
        assert missing in _fields(ContentType.TESTIMONIAL, data)

    def test_reports_every_failing_field(self) -> None:
        fields = _fields(ContentType.POST, {"title": "Only a title"})
        assert sorted(fields) == ["author", "date", "excerpt"]

    def test_blank_string_is_missing(self) -> None:
        assert _fields(ContentType.POST, _post(title="   ")) == ["title"]


class TestStrictTypes:
    def test_quoted_number_is_not_an_order(self) -> None:
        assert _fields(ContentType.SERVICE, _service(order="1")) == ["order"]

    def test_number_is_not_a_title(self) -> None:
        assert _fields(ContentType.POST, _post(title=42)) == ["title"]

    def test_string_is_not_a_bool(self) -> None:
        assert _fields(ContentType.POST, _post(featured="yes")) == ["featured"]

    def test_negative_order(self) -> None:
        assert _fields(ContentType.TESTIMONIAL, _testimonial(order=-1)) == ["order"]

    def test_tags_must_be_strings(self) -> None:
        assert _fields(ContentType.POST, _post(tags=["ok", 3])) == ["tags"]

    def test_unknown_keys_ignored(self) -> None:
        fm = validate_frontmatter(ContentType.POST, _post(layout="wide"), PATH)
        assert not hasattr(fm, "layout")

    def test_snake_case_keys_accepted(self) -> None:
        data = _service()
        data["short_description"] = data.pop("shortDescription")
        fm = validate_frontmatter(ContentType.SERVICE, data, PATH)
        assert fm.short_description == "Product photos."


class TestPostDate:
    def test_yaml_date_normalized(self) -> None:
        fm = validate_frontmatter(ContentType.POST, _post(date=date(2024, 5, 1)), PATH)
        assert fm.date == "2024-05-01"

    @pytest.mark.parametrize("value", ["05/01/2024", "2024-5-1", "yesterday", "2024-02-30"])
    def test_invalid_dates(self, value: str) -> None:
        assert _fields(ContentType.POST, _post(date=value)) == ["date"]

    def test_timestamp_rejected(self) -> None:
        value = datetime(2024, 3, 5, 10, 30)
        assert _fields(ContentType.POST, _post(date=value)) == ["date"]

    def test_date_message(self) -> None:
        with pytest.raises(ContentValidationError) as excinfo:
            validate_frontmatter(ContentType.POST, _post(date="soon"), PATH)
        assert excinfo.value.messages() == ["date: must be a date in YYYY-MM-DD format"]


class TestTestimonialRating:
    @pytest.mark.parametrize("rating", [0, 6])
    def test_out_of_range(self, rating: int) -> None:
        assert _fields(ContentType.TESTIMONIAL, _testimonial(rating=rating)) == ["rating"]

    @pytest.mark.parametrize("rating", [1, 5])
    def test_bounds_inclusive(self, rating: int) -> None:
        fm = validate_frontmatter(ContentType.TESTIMONIAL, _testimonial(rating=rating), PATH)
        assert fm.rating == rating

    def test_fractional_rating_rejected(self) -> None:
        assert _fields(ContentType.TESTIMONIAL, _testimonial(rating=4.5)) == ["rating"]


class TestPricing:
    def test_valid(self) -> None:
        pricing = {"startingPrice": 499, "currency": "USD", "billingPeriod": "project"}
        fm = validate_frontmatter(ContentType.SERVICE, _service(pricing=pricing), PATH)
        assert fm.pricing is not None
        assert fm.pricing.starting_price == 499
        assert fm.pricing.billing_period == "project"

    def test_nested_field_error_is_dotted(self) -> None:
        pricing = {"startingPrice": "cheap", "currency": "USD", "billingPeriod": "month"}
        fields = _fields(ContentType.SERVICE, _service(pricing=pricing))
        assert fields == ["pricing.startingPrice"]

    def test_negative_price(self) -> None:
        pricing = {"startingPrice": -5, "currency": "USD", "billingPeriod": "month"}
        assert _fields(ContentType.SERVICE, _service(pricing=pricing)) == [
            "pricing.startingPrice"
        ]

    def test_bool_is_not_a_price(self) -> None:
        pricing = {"startingPrice": True, "currency": "USD", "billingPeriod": "month"}
        assert _fields(ContentType.SERVICE, _service(pricing=pricing)) == [
            "pricing.startingPrice"
        ]


class TestValidationError:
    def test_carries_path_and_type(self) -> None:
        with pytest.raises(ContentValidationError) as excinfo:
            validate_frontmatter(ContentType.TESTIMONIAL, _testimonial(rating=6), PATH)
        err = excinfo.value
        assert err.path == PATH
        assert err.content_type == "testimonial"
        assert err.kind == "schema"
        assert "rating" in str(err)
