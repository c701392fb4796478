"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`; unknown
ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from contentctl.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from contentctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: identifiers only, or a status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        ids = [str(item.get("id", "")) for item in items if isinstance(item, dict)]
        return "\n".join(i for i in ids if i)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cc.ok"), Text(f"  {result.op}", style="cc.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="cc.key")
    if key in ("id", "slug"):
        v = Text(str(value), style="cc.id")
    elif key == "path":
        v = Text(str(value), style="cc.path")
    elif key == "title":
        v = Text(str(value), style="cc.title")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_page_meta(console: Console, result: ServiceResult) -> None:
    meta = result.meta or {}
    if "total" in meta:
        shown = result.data.get("count", 0)
        console.print(Text(f"  {shown} of {meta['total']} shown", style="dim"))


def _item_table(items: list[dict[str, Any]]) -> Table:
    """Table with one column per key seen in *items* (``id`` first)."""
    columns: list[str] = []
    for item in items:
        for key in item:
            if key not in columns:
                columns.append(key)
    if "id" in columns:
        columns.remove("id")
        columns.insert(0, "id")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for col in columns:
        style = "cc.id" if col == "id" else "cc.title" if col in ("title", "author") else None
        table.add_column(col.replace("_", " ").title(), style=style, no_wrap=col == "id")
    for item in items:
        row = []
        for col in columns:
            value = item.get(col)
            if col == "type":
                row.append(Text(str(value), style=style_for_type(str(value))))
            else:
                row.append(Text("" if value is None else str(value)))
        table.add_row(*row)
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="cc.error")
    console.print(label, Text(f"  {result.op}", style="cc.op"), Text(msg))

    if err is None:
        return
    for failure in err.detail.get("failures", []):
        _render_failure(console, failure)
    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k != "failures":
                console.print(Text(f"    {k}: {v}"))


def _render_failure(console: Console, failure: dict[str, Any]) -> None:
    console.print(
        Text("  ✗ ", style="cc.error"),
        Text(str(failure.get("path", "")), style="cc.path"),
        Text(f" [{failure.get('type', '')}/{failure.get('kind', '')}]", style="dim"),
    )
    for message in failure.get("errors", []):
        console.print(Text(f"      {message}"))


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    if not items:
        console.print(Text("  No matching content.", style="dim"))
        return
    console.print(_item_table(items))
    _render_page_meta(console, result)


def _render_get(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    title = d.get("title") or d.get("author") or d.get("id", "")
    lines: list[str] = []
    skip = {"title", "body", "html", "content"} if not verbose else {"title", "html"}
    for key, value in d.items():
        if key in skip or value in (None, [], ""):
            continue
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        lines.append(f"[cc.key]{key}:[/cc.key] {escape(str(value))}")
    body = d.get("content") if d.get("type") == "testimonial" else d.get("excerpt")
    if body and not verbose:
        lines.extend(["", escape(str(body))])
    panel_title = Text(str(title), style="cc.title")
    console.print(Panel("\n".join(lines), title=panel_title, title_align="left", expand=False))


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "types", ", ".join(result.data.get("types", [])))
    _field(console, "checked", result.data.get("checked", 0))
    _field(console, "failed", result.data.get("failed", 0))


def _render_cache_status(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    _field(console, "freshness_seconds", result.data.get("freshness_seconds"))
    console.print(_item_table(result.data.get("items", [])))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        _field(console, key, value)


_OP_RENDERERS = {
    "list": _render_list,
    "search": _render_list,
    "get": _render_get,
    "validate": _render_validate,
    "cache_status": _render_cache_status,
}
