"""Shared pytest fixtures and test helpers for contentctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner
from ruamel.yaml import YAML

from contentctl.infrastructure.repository import ContentRepository
from contentctl.services.catalog import ContentCatalog


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep handlers installed by one CLI invocation out of later tests."""
    monkeypatch.delenv("CONTENTCTL_CONFIG", raising=False)
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    logging.getLogger("contentctl").setLevel(logging.NOTSET)
    structlog.reset_defaults()


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Temporary content directory with one folder per content type.

    This is the single source of truth for the content layout in tests;
    the site root is its parent (``tmp_path``).
    """
    root = tmp_path / "content"
    for name in ("blog", "services", "testimonials"):
        (root / name).mkdir(parents=True)
    return root


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repository(content_root: Path, clock: FakeClock) -> ContentRepository:
    """Repository over ``content_root`` driven by a fake clock."""
    return ContentRepository(content_root, clock=clock)


@pytest.fixture
def catalog(repository: ContentRepository) -> ContentCatalog:
    return ContentCatalog(repository)


@pytest.fixture
def _isolated_site(tmp_path: Path, content_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp site root so the CLI reads the test content.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers (used across test modules)
# ---------------------------------------------------------------------------


def dump_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Serialize *frontmatter* and *body* the way authors write content files."""
    yaml = YAML(typ="safe", pure=True)
    yaml.default_flow_style = False
    buf = StringIO()
    yaml.dump(frontmatter, buf)
    return f"---\n{buf.getvalue()}---\n\n{body}\n"


def write_content(
    directory: Path, name: str, frontmatter: dict[str, Any], body: str = "Body text."
) -> Path:
    path = directory / f"{name}.md"
    path.write_text(dump_frontmatter(frontmatter, body), encoding="utf-8")
    return path


def write_post(
    content_root: Path, slug: str, *, body: str = "A short post body.", **fields: Any
) -> Path:
    """Write a valid post; *fields* override or extend the defaults."""
    frontmatter: dict[str, Any] = {
        "title": f"Post {slug}",
        "date": "2024-01-15",
        "author": "Jane Doe",
        "excerpt": f"Excerpt for {slug}.",
    }
    frontmatter.update(fields)
    return write_content(content_root / "blog", slug, frontmatter, body)


def write_service(
    content_root: Path, slug: str, *, body: str = "Service details.", **fields: Any
) -> Path:
    """Write a valid service; *fields* override or extend the defaults."""
    frontmatter: dict[str, Any] = {
        "title": f"Service {slug}",
        "shortDescription": f"About {slug}.",
        "featuredImage": f"/images/{slug}.jpg",
        "icon": "camera",
        "order": 0,
    }
    frontmatter.update(fields)
    return write_content(content_root / "services", slug, frontmatter, body)


def write_testimonial(
    content_root: Path, testimonial_id: str, *, body: str = "", **fields: Any
) -> Path:
    """Write a valid testimonial; *fields* override or extend the defaults."""
    frontmatter: dict[str, Any] = {
        "author": "Alex Smith",
        "position": "CEO",
        "content": "Fantastic work.",
        "rating": 5,
        "order": 0,
    }
    frontmatter.update(fields)
    return write_content(content_root / "testimonials", testimonial_id, frontmatter, body)


def touch_newer(path: Path, seconds: int = 10) -> None:
    """Push *path*'s modification time forward so it reads as newer."""
    st = path.stat()
    bumped = st.st_mtime_ns + seconds * 1_000_000_000
    os.utime(path, ns=(st.st_atime_ns, bumped))
