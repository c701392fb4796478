"""Rich Console factory and theme for contentctl output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` step.  In non-TTY environments (tests, pipes) Rich
drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CONTENT_THEME = Theme(
    {
        "cc.ok": "bold green",
        "cc.error": "bold red",
        "cc.warning": "bold yellow",
        "cc.op": "bold cyan",
        "cc.key": "dim",
        "cc.id": "bold blue",
        "cc.path": "dim",
        "cc.title": "bold",
        "cc.type.post": "green",
        "cc.type.service": "magenta",
        "cc.type.testimonial": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CONTENT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(content_type: str) -> str:
    """Return the Rich style name for a content type."""
    return f"cc.type.{content_type}" if content_type else ""
