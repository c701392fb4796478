"""File-store access for site content.

INVARIANT: Files are truth. Records and cache entries are derived and can
always be rebuilt from the content directories alone.

One directory per content type, one file per record; the file name minus
its extension is the record's identifier.  This module only reads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from contentctl.domain.content import FrontmatterSyntaxError, RawContentFile, parse_frontmatter
from contentctl.domain.errors import FrontmatterError
from contentctl.domain.types import ContentType

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".md"

# Map content type to its directory under the content root.
CONTENT_PATHS: dict[ContentType, str] = {
    ContentType.POST: "blog",
    ContentType.SERVICE: "services",
    ContentType.TESTIMONIAL: "testimonials",
}


@dataclass
class LoadResult:
    """Files that parsed, and the per-file failures that did not."""

    files: list[RawContentFile] = field(default_factory=list)
    failures: list[FrontmatterError] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_content_files(directory: Path, *, extension: str = DEFAULT_EXTENSION) -> list[Path]:
    """List content files directly inside *directory*, sorted by name.

    A missing directory is an empty store, not an error.  Hidden files
    (editor swap files, ``.DS_Store``) are skipped.

    Raises:
        OSError: If the directory exists but cannot be listed.
    """
    if not directory.is_dir():
        return []
    return sorted(
        path
        for path in directory.iterdir()
        if path.suffix == extension and not path.name.startswith(".") and path.is_file()
    )


def latest_mtime_ns(directory: Path, *, extension: str = DEFAULT_EXTENSION) -> int:
    """Highest modification time across *directory* and its content files.

    The directory's own mtime is included so that added, removed, or
    renamed files register even when no surviving file changed.  Returns 0
    for a missing directory.
    """
    try:
        latest = directory.stat().st_mtime_ns
    except FileNotFoundError:
        return 0
    for path in find_content_files(directory, extension=extension):
        try:
            latest = max(latest, path.stat().st_mtime_ns)
        except FileNotFoundError:
            # Deleted between listing and stat; the directory mtime covers it.
            continue
    return latest


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def read_raw_file(path: Path) -> RawContentFile:
    """Read *path* and split it into front matter and body.

    Raises:
        FrontmatterError: If the file cannot be read, is not UTF-8, or its
            front matter is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
        frontmatter, body = parse_frontmatter(text)
    except (OSError, UnicodeDecodeError, FrontmatterSyntaxError) as exc:
        raise FrontmatterError(path, exc) from exc
    return RawContentFile(path=path, frontmatter=frontmatter, body=body)


def load_raw_files(directory: Path, *, extension: str = DEFAULT_EXTENSION) -> LoadResult:
    """Read every content file in *directory*, isolating per-file failures.

    Raises:
        OSError: Only for directory-level failures (e.g. permission denied
            while listing), which abort the whole load.
    """
    result = LoadResult()
    for path in find_content_files(directory, extension=extension):
        try:
            result.files.append(read_raw_file(path))
        except FrontmatterError as exc:
            logger.debug("Unreadable content file %s: %s", path, exc.cause)
            result.failures.append(exc)
    return result
