"""ContentRepository: the load/validate/transform pipeline behind a cache.

The repository is the single dependency handed to services and page code.
It owns the :class:`CacheManager` and the markup converter, and exposes two
deliberately separate ways of running the pipeline:

- :meth:`ContentRepository.build_collection` (used by :meth:`get`) skips and
  logs any file that fails, so one bad file never hides the others.
- :meth:`ContentRepository.validate_all` never skips: it reports every
  failing file so authors can fix them before publishing.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from contentctl.domain.errors import ContentError
from contentctl.domain.frontmatter import validate_frontmatter
from contentctl.domain.records import (
    DEFAULT_WORDS_PER_MINUTE,
    Record,
    sort_records,
    transform_record,
)
from contentctl.domain.types import ContentType
from contentctl.infrastructure.cache import DEFAULT_FRESHNESS_SECONDS, CacheManager, CacheStatus
from contentctl.infrastructure.filesystem import (
    CONTENT_PATHS,
    DEFAULT_EXTENSION,
    latest_mtime_ns,
    load_raw_files,
)
from contentctl.infrastructure.markup import MarkupConverter

if TYPE_CHECKING:
    from contentctl.config.settings import ContentSettings
    from contentctl.domain.content import RawContentFile

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Aggregate validation report
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationFailure:
    """One failing file in an aggregate report."""

    content_type: ContentType
    path: Path
    kind: str
    errors: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.content_type),
            "path": str(self.path),
            "kind": self.kind,
            "errors": list(self.errors),
        }


@dataclass
class ValidationReport:
    """Outcome of validating every file of the requested types."""

    checked: int = 0
    failures: list[ValidationFailure] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.failures

    @property
    def failed_paths(self) -> list[Path]:
        return [f.path for f in self.failures]


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ContentRepository:
    """Cached access to the three content collections under *content_root*.

    Usage::

        repo = ContentRepository(Path("content"))
        posts = repo.get(ContentType.POST)
    """

    def __init__(
        self,
        content_root: Path,
        *,
        directories: dict[ContentType, str] | None = None,
        extension: str = DEFAULT_EXTENSION,
        converter: MarkupConverter | None = None,
        words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
        freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.root = content_root
        self._directories = {**CONTENT_PATHS, **(directories or {})}
        self._extension = extension
        self._converter = converter or MarkupConverter()
        self._words_per_minute = words_per_minute
        self._cache: CacheManager[Record] = CacheManager(
            self.build_collection,
            self._probe,
            freshness_seconds=freshness_seconds,
            clock=clock,
        )

    @classmethod
    def from_settings(cls, settings: ContentSettings) -> ContentRepository:
        """Build a repository from resolved :class:`ContentSettings`."""
        content = settings.content
        return cls(
            settings.content_root,
            directories={
                ContentType.POST: content.posts_dir,
                ContentType.SERVICE: content.services_dir,
                ContentType.TESTIMONIAL: content.testimonials_dir,
            },
            extension=content.extension,
            converter=MarkupConverter(
                tables=settings.markup.tables,
                strikethrough=settings.markup.strikethrough,
                allow_html=settings.markup.allow_html,
            ),
            words_per_minute=settings.reading.words_per_minute,
            freshness_seconds=settings.cache.freshness_seconds,
        )

    def directory_for(self, content_type: ContentType) -> Path:
        return self.root / self._directories[content_type]

    # --- Cached access ---

    def get(self, content_type: ContentType) -> tuple[Record, ...]:
        """Current collection for *content_type* (rebuilt if stale)."""
        return self._cache.get(content_type)

    def invalidate(self, content_type: ContentType | None = None) -> None:
        """Force the next :meth:`get` to rebuild one type, or all of them."""
        self._cache.invalidate(content_type)

    def status(self, content_type: ContentType) -> CacheStatus:
        return self._cache.status(content_type)

    @property
    def freshness_seconds(self) -> float:
        return self._cache.freshness_seconds

    # --- Pipeline ---

    def process_file(self, content_type: ContentType, raw: RawContentFile) -> Record:
        """Validate, render, and transform one parsed file.

        Raises:
            ContentValidationError: Front matter fails the schema.
            ContentProcessingError: The body cannot be rendered.
        """
        fm = validate_frontmatter(content_type, raw.frontmatter, raw.path)
        html = self._converter.convert(raw.body, raw.path)
        return transform_record(
            content_type,
            fm,
            raw.identifier,
            raw.body,
            html,
            words_per_minute=self._words_per_minute,
        )

    def build_collection(self, content_type: ContentType) -> tuple[Record, ...]:
        """Run the full pipeline for one type, skipping files that fail.

        Each failing file is logged with its path and problems and left out
        of the collection.  Only directory-level ``OSError`` propagates.
        """
        directory = self.directory_for(content_type)
        loaded = load_raw_files(directory, extension=self._extension)
        for failure in loaded.failures:
            self._log_skipped(content_type, failure)

        records: list[Record] = []
        for raw in loaded.files:
            try:
                records.append(self.process_file(content_type, raw))
            except ContentError as exc:
                self._log_skipped(content_type, exc)
        return sort_records(content_type, records)

    def validate_all(self, types: Iterable[ContentType] | None = None) -> ValidationReport:
        """Run the pipeline over every file and report all failures.

        Does not touch the cache.  Directory-level ``OSError`` propagates.
        """
        report = ValidationReport()
        for content_type in types or list(ContentType):
            directory = self.directory_for(content_type)
            loaded = load_raw_files(directory, extension=self._extension)
            report.checked += len(loaded.files) + len(loaded.failures)
            failures: list[ContentError] = list(loaded.failures)
            for raw in loaded.files:
                try:
                    self.process_file(content_type, raw)
                except ContentError as exc:
                    failures.append(exc)
            failures.sort(key=lambda e: e.path)
            report.failures.extend(
                ValidationFailure(
                    content_type=content_type,
                    path=exc.path,
                    kind=exc.kind,
                    errors=exc.messages(),
                )
                for exc in failures
            )
        return report

    # --- Internals ---

    def _probe(self, content_type: ContentType) -> int:
        return latest_mtime_ns(self.directory_for(content_type), extension=self._extension)

    @staticmethod
    def _log_skipped(content_type: ContentType, exc: ContentError) -> None:
        logger.warning(
            "Skipping %s file %s (%s): %s",
            content_type,
            exc.path,
            exc.kind,
            "; ".join(exc.messages()),
        )
