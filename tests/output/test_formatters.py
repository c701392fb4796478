"""Tests for output mode selection and Rich rendering."""

from __future__ import annotations

import json

from contentctl.output.formatters import OutputSettings, format_result
from contentctl.output.renderers import render_quiet, render_result
from contentctl.services.result import ServiceResult

LIST_RESULT = ServiceResult(
    ok=True,
    op="list",
    data={
        "type": "post",
        "items": [
            {"id": "first", "title": "First [post]", "date": "2024-01-02"},
            {"id": "second", "title": "Second", "date": "2024-01-01"},
        ],
        "count": 2,
    },
    meta={"total": 5, "offset": 0, "limit": 2},
)

FAILED_CHECK = ServiceResult.failure(
    "validate",
    "VALIDATION_FAILED",
    "1 content file failed validation",
    failures=[
        {
            "type": "testimonial",
            "path": "content/testimonials/bad.md",
            "kind": "schema",
            "errors": ["rating: Input should be less than or equal to 5"],
        }
    ],
)


class TestFormatResult:
    def test_json(self) -> None:
        out = format_result(LIST_RESULT, settings=OutputSettings(json_output=True))
        assert json.loads(out)["data"]["count"] == 2

    def test_quiet_lists_ids(self) -> None:
        out = format_result(LIST_RESULT, settings=OutputSettings(quiet=True))
        assert out == "first\nsecond"

    def test_default_is_rich(self) -> None:
        out = format_result(LIST_RESULT)
        assert "OK" in out
        assert "first" in out


class TestRenderQuiet:
    def test_ok_without_items(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="cache_clear")) == "OK: cache_clear"

    def test_error(self) -> None:
        assert render_quiet(FAILED_CHECK) == (
            "ERROR: validate: 1 content file failed validation"
        )


class TestRenderResult:
    def test_list_table_and_totals(self) -> None:
        out = render_result(LIST_RESULT)
        assert "First [post]" in out
        assert "2 of 5 shown" in out

    def test_empty_list(self) -> None:
        result = ServiceResult(ok=True, op="list", data={"items": [], "count": 0})
        assert "No matching content." in render_result(result)

    def test_get_panel(self) -> None:
        result = ServiceResult(
            ok=True,
            op="get",
            data={
                "id": "acme",
                "type": "testimonial",
                "author": "Alex",
                "content": "Great work.",
                "rating": 5,
                "html": "<p>x</p>",
            },
        )
        out = render_result(result)
        assert "Alex" in out
        assert "Great work." in out
        assert "<p>x</p>" not in out

    def test_validation_failures_listed(self) -> None:
        out = render_result(FAILED_CHECK)
        assert "ERROR" in out
        assert "content/testimonials/bad.md" in out
        assert "rating: Input should be less than or equal to 5" in out

    def test_cache_status(self) -> None:
        result = ServiceResult(
            ok=True,
            op="cache_status",
            data={
                "items": [{"type": "post", "populated": False, "records": 0}],
                "freshness_seconds": 300.0,
            },
        )
        out = render_result(result)
        assert "freshness_seconds: 300.0" in out
        assert "Populated" in out

    def test_generic(self) -> None:
        result = ServiceResult(ok=True, op="cache_clear", data={"cleared": ["post", "service"]})
        assert "cleared: post, service" in render_result(result)
