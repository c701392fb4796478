"""Front-matter splitting for content files.

A content file is a YAML block fenced by ``---`` lines followed by a
Markdown body::

    ---
    title: Photography Services
    order: 0
    ---
    Body text here.

Pure parsing lives here so the dependency direction stays clean:
infrastructure -> domain, never the reverse.  File I/O lives in
:mod:`contentctl.infrastructure.filesystem`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

_FRONTMATTER_DELIMITER = "---"


class FrontmatterSyntaxError(ValueError):
    """The YAML block is malformed or is not a key/value mapping."""


@dataclass(frozen=True)
class RawContentFile:
    """One file as read from the store, before validation."""

    path: Path
    frontmatter: dict[str, Any]
    body: str

    @property
    def identifier(self) -> str:
        """Slug or id: the file name without its extension."""
        return self.path.stem


def _new_yaml() -> YAML:
    """Create a fresh safe YAML loader.

    Content files are only ever read, so the safe loader is used; it yields
    plain ``dict``/``list``/``str`` values that validate strictly.
    """
    return YAML(typ="safe", pure=True)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split *content* into ``(frontmatter_dict, body_text)``.

    Expects the file to start with ``---`` on the first line. The second
    ``---`` closes the YAML block. Everything after is the body. Handles
    both ``\\n`` and ``\\r\\n`` line endings.

    If no opening or closing delimiter is found, returns ``({}, content)``.

    Raises:
        FrontmatterSyntaxError: If the YAML block cannot be parsed or does
            not contain a mapping.
    """
    normalized = content.replace("\r\n", "\n")
    if normalized.startswith("\ufeff"):
        normalized = normalized[1:]
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    if body.startswith("\n"):
        body = body[1:]

    try:
        loaded = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        raise FrontmatterSyntaxError(str(exc)) from exc

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        msg = f"Front matter must be a mapping, got {type(loaded).__name__}"
        raise FrontmatterSyntaxError(msg)
    return {str(k): v for k, v in loaded.items()}, body
