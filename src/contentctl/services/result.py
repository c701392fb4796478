"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Every service-layer operation returns a ServiceResult.  Domain
exceptions are translated into ``error`` payloads here so that commands only
ever decide between "print to stdout" and "print to stderr, exit 1".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes emitted by services.
UNKNOWN_TYPE = "UNKNOWN_TYPE"
NOT_FOUND = "NOT_FOUND"
INVALID_QUERY = "INVALID_QUERY"
VALIDATION_FAILED = "VALIDATION_FAILED"
IO_ERROR = "IO_ERROR"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"list"``, ``"validate"``, ...).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered along the way.
        error: Structured error when ``ok`` is False.
        meta: Optional extras such as pagination totals.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for an ``ok=False`` result."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
