"""Tests for the config section models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from contentctl.config.models import (
    CacheConfig,
    ContentConfig,
    MarkupConfig,
    QueryConfig,
    ReadingConfig,
)


class TestDefaults:
    def test_content(self) -> None:
        cfg = ContentConfig()
        assert (cfg.root, cfg.posts_dir, cfg.services_dir, cfg.testimonials_dir) == (
            "content",
            "blog",
            "services",
            "testimonials",
        )
        assert cfg.extension == ".md"

    def test_other_sections(self) -> None:
        assert CacheConfig().freshness_seconds == 300.0
        assert MarkupConfig().allow_html is False
        assert ReadingConfig().words_per_minute == 200
        assert QueryConfig().high_rating_threshold == 4


class TestValidation:
    def test_extension_gets_leading_dot(self) -> None:
        assert ContentConfig(extension="markdown").extension == ".markdown"

    def test_negative_freshness(self) -> None:
        with pytest.raises(ValidationError):
            CacheConfig(freshness_seconds=-1)

    def test_zero_words_per_minute(self) -> None:
        with pytest.raises(ValidationError):
            ReadingConfig(words_per_minute=0)

    def test_rating_threshold_bounds(self) -> None:
        with pytest.raises(ValidationError):
            QueryConfig(high_rating_threshold=6)
