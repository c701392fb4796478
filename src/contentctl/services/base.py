"""BaseService — shared foundation for contentctl services.

Every service receives a :class:`ContentRepository` at construction time and
reads collections through it, so all services share one cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from contentctl.domain.types import ContentType, parse_content_type
from contentctl.services.result import UNKNOWN_TYPE, ServiceResult

if TYPE_CHECKING:
    from contentctl.infrastructure.repository import ContentRepository


class BaseService:
    """Base for service-layer classes.

    Usage::

        class QueryService(BaseService):
            def list_items(self, content_type: str, ...) -> ServiceResult:
                records = self._repo.get(ContentType.POST)
                ...
    """

    def __init__(self, repository: ContentRepository) -> None:
        self._repo = repository

    @staticmethod
    def _resolve_type(op: str, value: str) -> ContentType | ServiceResult:
        """Parse *value*, or return an ``UNKNOWN_TYPE`` failure for *op*."""
        try:
            return parse_content_type(value)
        except ValueError as exc:
            return ServiceResult.failure(op, UNKNOWN_TYPE, str(exc), value=value)
