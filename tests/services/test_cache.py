"""Tests for CacheService."""

from __future__ import annotations

from pathlib import Path

from contentctl.infrastructure.repository import ContentRepository
from contentctl.services.cache import CacheService
from tests.conftest import FakeClock, write_post


class TestCacheService:
    def test_status_cold(self, repository: ContentRepository) -> None:
        result = CacheService(repository).status()
        assert result.ok
        assert result.op == "cache_status"
        assert [i["type"] for i in result.data["items"]] == ["post", "service", "testimonial"]
        assert not any(i["populated"] for i in result.data["items"])
        assert result.data["freshness_seconds"] == 300.0

    def test_status_warm(self, content_root: Path, repository: ContentRepository) -> None:
        write_post(content_root, "p")
        result = CacheService(repository).status("post", warm=True)
        (item,) = result.data["items"]
        assert item["populated"] is True
        assert item["records"] == 1
        assert item["rebuilds"] == 1

    def test_status_age(
        self, content_root: Path, repository: ContentRepository, clock: FakeClock
    ) -> None:
        write_post(content_root, "p")
        CacheService(repository).status(warm=True)
        clock.advance(42)
        (item,) = CacheService(repository).status("post").data["items"]
        assert item["age_seconds"] == 42

    def test_status_unknown_type(self, repository: ContentRepository) -> None:
        result = CacheService(repository).status("pages")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_TYPE"

    def test_clear_one(self, repository: ContentRepository) -> None:
        svc = CacheService(repository)
        svc.status(warm=True)
        result = svc.clear("service")
        assert result.data == {"cleared": ["service"]}
        items = {i["type"]: i["populated"] for i in svc.status().data["items"]}
        assert items == {"post": True, "service": False, "testimonial": True}

    def test_clear_all(self, repository: ContentRepository) -> None:
        svc = CacheService(repository)
        svc.status(warm=True)
        result = svc.clear()
        assert result.data == {"cleared": ["post", "service", "testimonial"]}
        assert not any(i["populated"] for i in svc.status().data["items"])
