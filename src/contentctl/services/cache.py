"""CacheService: diagnostics and manual invalidation for collection caches."""

from __future__ import annotations

from contentctl.domain.types import ContentType
from contentctl.services.base import BaseService
from contentctl.services.result import IO_ERROR, ServiceResult


class CacheService(BaseService):
    """Reports and resets the repository's per-type cache entries."""

    def _types(self, op: str, content_type: str | None) -> list[ContentType] | ServiceResult:
        if content_type is None:
            return list(ContentType)
        resolved = self._resolve_type(op, content_type)
        if isinstance(resolved, ServiceResult):
            return resolved
        return [resolved]

    def status(self, content_type: str | None = None, *, warm: bool = False) -> ServiceResult:
        """Cache state per type; *warm* populates each entry first."""
        op = "cache_status"
        types = self._types(op, content_type)
        if isinstance(types, ServiceResult):
            return types
        if warm:
            try:
                for ct in types:
                    self._repo.get(ct)
            except OSError as exc:
                return ServiceResult.failure(op, IO_ERROR, str(exc))
        entries = [self._repo.status(ct).to_dict() for ct in types]
        return ServiceResult(
            ok=True,
            op=op,
            data={"items": entries, "freshness_seconds": self._repo.freshness_seconds},
        )

    def clear(self, content_type: str | None = None) -> ServiceResult:
        """Invalidate one type's entry, or every entry."""
        op = "cache_clear"
        types = self._types(op, content_type)
        if isinstance(types, ServiceResult):
            return types
        if content_type is None:
            self._repo.invalidate()
        else:
            self._repo.invalidate(types[0])
        return ServiceResult(ok=True, op=op, data={"cleared": [str(t) for t in types]})
