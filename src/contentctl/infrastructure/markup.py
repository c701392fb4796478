"""Markdown body rendering via markdown-it-py.

CommonMark plus the GitHub-style ``table`` and ``strikethrough`` rules.
Raw HTML in a body is escaped unless explicitly allowed, and markdown-it's
link validator refuses ``javascript:``/``vbscript:``/``file:`` targets, so
the output is safe to embed in a page.
"""

from __future__ import annotations

from pathlib import Path

from markdown_it import MarkdownIt

from contentctl.domain.errors import ContentProcessingError


class MarkupConverter:
    """Render Markdown bodies to sanitized HTML."""

    def __init__(
        self,
        *,
        tables: bool = True,
        strikethrough: bool = True,
        allow_html: bool = False,
    ) -> None:
        md = MarkdownIt("commonmark", {"html": allow_html})
        extensions = [
            name
            for name, enabled in (("table", tables), ("strikethrough", strikethrough))
            if enabled
        ]
        if extensions:
            md.enable(extensions)
        self._md = md

    def convert(self, body: str, path: Path) -> str:
        """Return the HTML for *body*.

        Raises:
            ContentProcessingError: If rendering fails for any reason; no
                partial output is returned.
        """
        try:
            return self._md.render(body)
        except Exception as exc:
            raise ContentProcessingError(path, exc) from exc
