"""Per-file failure conditions raised by the content pipeline.

Every condition identifies the source file so that a rebuild can log and
skip it, and so that the aggregate validation report can list it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FieldError:
    """One schema problem attached to one front-matter field."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ContentError(Exception):
    """Base class for failures scoped to a single content file."""

    kind = "content"

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path

    def messages(self) -> list[str]:
        """Human-readable problem list for reports."""
        return [str(self)]


class FrontmatterError(ContentError):
    """The file could not be read or its front matter could not be parsed."""

    kind = "frontmatter"

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(path, f"Cannot parse front matter in {path}: {cause}")
        self.cause = cause


class ContentValidationError(ContentError):
    """Front matter does not satisfy its content type's schema."""

    kind = "schema"

    def __init__(self, content_type: str, path: Path, errors: list[FieldError]) -> None:
        fields = ", ".join(e.field for e in errors)
        super().__init__(
            path,
            f"Schema validation failed for {content_type} {path} ({fields})",
        )
        self.content_type = content_type
        self.errors = list(errors)

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]


class ContentProcessingError(ContentError):
    """The body could not be converted to markup."""

    kind = "processing"

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(path, f"Content processing failed for {path}: {cause}")
        self.cause = cause
