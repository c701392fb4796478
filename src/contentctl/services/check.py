"""CheckService — the "validate everything" report for content authors.

Unlike a collection rebuild, which skips and logs bad files, this runs the
full pipeline over every file and fails when any file fails, listing each
one.  Intended for pre-publish checks and CI.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from contentctl.domain.types import ContentType
from contentctl.services.base import BaseService
from contentctl.services.result import IO_ERROR, VALIDATION_FAILED, ServiceResult


class CheckService(BaseService):
    """Validates the content store without touching the cache."""

    def validate(self, content_types: Iterable[str] | None = None) -> ServiceResult:
        """Validate the requested types (default: all) and report failures."""
        op = "validate"
        types: list[ContentType] = []
        for value in content_types or ():
            resolved = self._resolve_type(op, value)
            if isinstance(resolved, ServiceResult):
                return resolved
            types.append(resolved)

        try:
            report = self._repo.validate_all(types or None)
        except OSError as exc:
            return ServiceResult.failure(op, IO_ERROR, str(exc))

        failures = [f.to_dict() for f in report.failures]
        data: dict[str, Any] = {
            "types": [str(t) for t in (types or list(ContentType))],
            "checked": report.checked,
            "failed": len(failures),
            "failures": failures,
        }
        if report.valid:
            return ServiceResult(ok=True, op=op, data=data)

        noun = "file" if len(failures) == 1 else "files"
        return ServiceResult.failure(
            op,
            VALIDATION_FAILED,
            f"{len(failures)} content {noun} failed validation",
            **data,
        )
