"""Query engine: filter, search, and paginate collections.

The module-level functions are pure: they take a collection (any sequence of
records) and return a new tuple, never mutating their input.  Sort order is
the collection's own fixed per-type order and is not configurable here.

:class:`QueryService` wraps them for the CLI, reading collections through the
repository cache and returning :class:`ServiceResult`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, fields
from typing import Any, TypeVar

from contentctl.domain.records import ContentRecord, Record
from contentctl.domain.types import ContentType
from contentctl.services.base import BaseService
from contentctl.services.result import INVALID_QUERY, IO_ERROR, NOT_FOUND, ServiceResult

T = TypeVar("T")
R = TypeVar("R", bound=ContentRecord)

_MISSING = object()


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContentFilter:
    """Filter criteria; every supplied criterion must hold (logical AND).

    A criterion naming a field the record type does not have (``category``
    on a testimonial, ``min_rating`` on a post) matches nothing.
    """

    category: str | None = None
    tag: str | None = None
    featured: bool | None = None
    author: str | None = None
    min_rating: int | None = None
    service: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def matches(self, record: ContentRecord) -> bool:
        if self.category is not None and not _contains(record, "categories", self.category):
            return False
        if self.tag is not None and not _contains(record, "tags", self.tag):
            return False
        if self.service is not None and not _contains(record, "services", self.service):
            return False
        if self.featured is not None and record.featured is not self.featured:
            return False
        if self.author is not None:
            author = getattr(record, "author", None)
            if author is None or self.author.casefold() not in author.casefold():
                return False
        if self.min_rating is not None:
            rating = getattr(record, "rating", None)
            if rating is None or rating < self.min_rating:
                return False
        return True


def _contains(record: ContentRecord, attr: str, wanted: str) -> bool:
    values = getattr(record, attr, _MISSING)
    if values is _MISSING:
        return False
    needle = wanted.casefold()
    return any(v.casefold() == needle for v in values)  # type: ignore[union-attr]


def filter_records(records: Iterable[R], criteria: ContentFilter) -> tuple[R, ...]:
    if criteria.is_empty():
        return tuple(records)
    return tuple(r for r in records if criteria.matches(r))


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def _field_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, tuple | list):
        return "\n".join(str(v) for v in value)
    return str(value)


def record_matches(record: ContentRecord, query: str) -> bool:
    """Case-insensitive substring match over the record's search fields."""
    needle = query.casefold()
    return any(
        needle in _field_text(getattr(record, name, None)).casefold()
        for name in record.search_fields
    )


def search_records(records: Iterable[R], query: str) -> tuple[R, ...]:
    """Records matching *query* anywhere in their search fields.

    A blank query returns every record.
    """
    query = query.strip()
    if not query:
        return tuple(records)
    return tuple(r for r in records if record_matches(r, query))


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def paginate(records: Sequence[T], offset: int = 0, limit: int = 0) -> tuple[T, ...]:
    """Skip *offset* records, then keep at most *limit* (0 = no limit).

    Raises:
        ValueError: If *offset* or *limit* is negative.
    """
    if offset < 0 or limit < 0:
        msg = f"offset and limit must be non-negative (got offset={offset}, limit={limit})"
        raise ValueError(msg)
    page = records[offset:] if offset else records
    if limit:
        page = page[:limit]
    return tuple(page)


@dataclass(frozen=True)
class QueryPage:
    """One page of results plus the size of the full matching set."""

    items: tuple[Record, ...]
    total: int
    offset: int = 0
    limit: int = 0


def query_records(
    records: Sequence[Record],
    *,
    criteria: ContentFilter | None = None,
    search: str | None = None,
    offset: int = 0,
    limit: int = 0,
) -> QueryPage:
    """Filter, then search, then paginate *records*."""
    matched: tuple[Record, ...] = tuple(records)
    if criteria is not None:
        matched = filter_records(matched, criteria)
    if search:
        matched = search_records(matched, search)
    return QueryPage(
        items=paginate(matched, offset, limit),
        total=len(matched),
        offset=offset,
        limit=limit,
    )


# ---------------------------------------------------------------------------
# QueryService
# ---------------------------------------------------------------------------


def _page_meta(page: QueryPage) -> dict[str, Any]:
    return {"total": page.total, "offset": page.offset, "limit": page.limit}


class QueryService(BaseService):
    """Listing, retrieval, and search over cached collections."""

    def list_items(
        self,
        content_type: str,
        *,
        criteria: ContentFilter | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int = 0,
    ) -> ServiceResult:
        """List one content type with optional filters, search, and paging."""
        op = "list"
        resolved = self._resolve_type(op, content_type)
        if isinstance(resolved, ServiceResult):
            return resolved
        try:
            records = self._repo.get(resolved)
            page = query_records(
                records, criteria=criteria, search=search, offset=offset, limit=limit
            )
        except ValueError as exc:
            return ServiceResult.failure(op, INVALID_QUERY, str(exc))
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, str(exc), type=str(resolved))

        items = [r.summary() for r in page.items]
        return ServiceResult(
            ok=True,
            op=op,
            data={"type": str(resolved), "items": items, "count": len(items)},
            meta=_page_meta(page),
        )

    def get(self, content_type: str, identifier: str) -> ServiceResult:
        """Retrieve one full record by slug or id."""
        op = "get"
        resolved = self._resolve_type(op, content_type)
        if isinstance(resolved, ServiceResult):
            return resolved
        try:
            records = self._repo.get(resolved)
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, str(exc), type=str(resolved))

        for record in records:
            if record.identifier == identifier:
                data = record.model_dump(mode="json")
                data["id"] = record.identifier
                data["type"] = str(resolved)
                return ServiceResult(ok=True, op=op, data=data)
        return ServiceResult.failure(
            op,
            NOT_FOUND,
            f"No {resolved} with identifier {identifier!r}",
            type=str(resolved),
            id=identifier,
        )

    def search(
        self,
        query: str,
        *,
        content_type: str | None = None,
        offset: int = 0,
        limit: int = 0,
    ) -> ServiceResult:
        """Case-insensitive search across one type, or all types in turn."""
        op = "search"
        if not query.strip():
            return ServiceResult.failure(op, INVALID_QUERY, "Search query cannot be empty")

        types: list[ContentType] = list(ContentType)
        if content_type is not None:
            resolved = self._resolve_type(op, content_type)
            if isinstance(resolved, ServiceResult):
                return resolved
            types = [resolved]

        rows: list[dict[str, Any]] = []
        try:
            for ct in types:
                rows.extend(
                    {"type": str(ct), **record.summary()}
                    for record in search_records(self._repo.get(ct), query)
                )
            items = list(paginate(rows, offset, limit))
        except ValueError as exc:
            return ServiceResult.failure(op, INVALID_QUERY, str(exc))
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, str(exc))

        return ServiceResult(
            ok=True,
            op=op,
            data={"query": query, "items": items, "count": len(items)},
            meta={"total": len(rows), "offset": offset, "limit": limit},
        )
