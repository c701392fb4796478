"""Per-type collection cache with time- and modification-based invalidation.

Lifecycle per content type: ``EMPTY -> POPULATED -> (STALE -> POPULATED)*``.

An entry is stale when either:

1. it is older than the freshness window, or
2. the directory probe reports a modification time different from the
   one recorded when the entry was built (a removed directory probes as 0).

The probe is a cheap ``stat`` sweep; the builder re-reads, re-validates and
re-renders every file.  Entries are replaced wholesale, never patched.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Generic, TypeVar

import structlog

from contentctl.domain.types import ContentType

DEFAULT_FRESHNESS_SECONDS = 300.0

log = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """The last built collection for one type plus staleness bookkeeping."""

    collection: tuple[T, ...]
    built_at: datetime
    built_monotonic: float
    source_mtime_ns: int


@dataclass(frozen=True)
class CacheStatus:
    """Diagnostic snapshot of one content type's cache."""

    content_type: ContentType
    populated: bool
    built_at: datetime | None = None
    age_seconds: float | None = None
    records: int = 0
    rebuilds: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "type": str(self.content_type),
            "populated": self.populated,
            "built_at": self.built_at.isoformat() if self.built_at else None,
            "age_seconds": round(self.age_seconds, 3) if self.age_seconds is not None else None,
            "records": self.records,
            "rebuilds": self.rebuilds,
        }


class CacheManager(Generic[T]):
    """Holds one :class:`CacheEntry` per content type.

    Args:
        builder: Rebuilds the full collection for a type.
        probe: Returns the current source modification time for a type.
        freshness_seconds: Maximum age before an entry is rebuilt regardless
            of the probe.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        builder: Callable[[ContentType], tuple[T, ...]],
        probe: Callable[[ContentType], int],
        *,
        freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._builder = builder
        self._probe = probe
        self._freshness = freshness_seconds
        self._clock = clock
        self._entries: dict[ContentType, CacheEntry[T]] = {}
        self._rebuilds: dict[ContentType, int] = dict.fromkeys(ContentType, 0)
        # One lock per type so a slow rebuild never blocks another type.
        self._locks: dict[ContentType, threading.Lock] = {t: threading.Lock() for t in ContentType}

    @property
    def freshness_seconds(self) -> float:
        return self._freshness

    def get(self, content_type: ContentType) -> tuple[T, ...]:
        """Return the current collection, rebuilding it first if stale."""
        entry = self._entries.get(content_type)
        if entry is not None:
            mtime = self._probe(content_type)
            if not self._is_stale(entry, mtime):
                log.debug("cache.hit", content_type=str(content_type))
                return entry.collection

        with self._locks[content_type]:
            # Another caller may have rebuilt while we waited for the lock.
            mtime = self._probe(content_type)
            entry = self._entries.get(content_type)
            if entry is not None and not self._is_stale(entry, mtime):
                return entry.collection
            return self._rebuild(content_type, mtime).collection

    def invalidate(self, content_type: ContentType | None = None) -> None:
        """Drop one type's entry, or every entry when *content_type* is None."""
        if content_type is None:
            self._entries.clear()
            log.debug("cache.invalidate", content_type="all")
            return
        self._entries.pop(content_type, None)
        log.debug("cache.invalidate", content_type=str(content_type))

    def status(self, content_type: ContentType) -> CacheStatus:
        entry = self._entries.get(content_type)
        rebuilds = self._rebuilds[content_type]
        if entry is None:
            return CacheStatus(content_type=content_type, populated=False, rebuilds=rebuilds)
        return CacheStatus(
            content_type=content_type,
            populated=True,
            built_at=entry.built_at,
            age_seconds=self._clock() - entry.built_monotonic,
            records=len(entry.collection),
            rebuilds=rebuilds,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _is_stale(self, entry: CacheEntry[T], mtime: int) -> bool:
        if self._clock() - entry.built_monotonic >= self._freshness:
            return True
        return mtime != entry.source_mtime_ns

    def _rebuild(self, content_type: ContentType, mtime: int) -> CacheEntry[T]:
        # *mtime* was probed before building, so an edit landing mid-build
        # still reads as newer on the next call.
        started = self._clock()
        collection = self._builder(content_type)
        entry = CacheEntry(
            collection=tuple(collection),
            built_at=datetime.now(UTC),
            built_monotonic=self._clock(),
            source_mtime_ns=mtime,
        )
        self._entries[content_type] = entry
        self._rebuilds[content_type] += 1
        log.info(
            "cache.rebuild",
            content_type=str(content_type),
            records=len(entry.collection),
            duration_ms=round((entry.built_monotonic - started) * 1000, 2),
        )
        return entry
