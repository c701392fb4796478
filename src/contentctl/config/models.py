"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, contentctl.toml only contains
overrides.  A site following the default layout needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ContentConfig(BaseModel):
    """[content] section: where each content type lives."""

    model_config = {"frozen": True}

    root: str = "content"
    posts_dir: str = "blog"
    services_dir: str = "services"
    testimonials_dir: str = "testimonials"
    extension: str = ".md"

    @field_validator("extension")
    @classmethod
    def _leading_dot(cls, value: str) -> str:
        return value if value.startswith(".") else f".{value}"


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    freshness_seconds: float = Field(default=300.0, ge=0)


class MarkupConfig(BaseModel):
    """[markup] section."""

    model_config = {"frozen": True}

    tables: bool = True
    strikethrough: bool = True
    allow_html: bool = False


class ReadingConfig(BaseModel):
    """[reading] section."""

    model_config = {"frozen": True}

    words_per_minute: int = Field(default=200, gt=0)


class QueryConfig(BaseModel):
    """[query] section: default sizes for the named catalog views."""

    model_config = {"frozen": True}

    recent_limit: int = Field(default=3, ge=0)
    related_limit: int = Field(default=3, ge=0)
    high_rating_threshold: int = Field(default=4, ge=1, le=5)
