"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from subjectid.output.console import create_console, get_output, style_for_format

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from subjectid.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "normalize_phone":
        return str(result.data["phone_number"])
    if result.op == "validate":
        return str(result.data["format"])
    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("format", "")) for item in items)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "sid.ok"), (f"  {result.op}", "sid.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="sid.key")
    if key == "format":
        v = Text(str(value), style=style_for_format(str(value)))
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text.assemble(("  WARNING ", "sid.warning"), warning))


def _items_table(items: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Status")
    table.add_column("Format")
    table.add_column("Detail")
    for item in items:
        if item.get("ok"):
            status = Text("ok", style="sid.ok")
            fmt = str(item.get("format", ""))
            detail = Text(json.dumps(item.get("identifier", {}), separators=(",", ":")))
        else:
            status = Text("error", style="sid.error")
            fmt = ""
            detail = Text(str(item.get("error", "")))
        fmt_text = Text(fmt, style=style_for_format(fmt))
        table.add_row(str(item.get("index", "")), status, fmt_text, detail)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "sid.error"), (f"  {result.op}", "sid.op"), " — ", msg))

    items = result.data.get("items")
    if items:
        console.print(_items_table(items))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "format", result.data["format"])
    if result.data["format"] == "aliases":
        _field(console, "count", result.data["count"])
        _field(console, "formats", ", ".join(result.data["formats"]))
    if verbose or result.data["format"] != "aliases":
        _field(console, "identifier", result.data["identifier"])
    _render_warnings(console, result)


def _render_batch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "valid", result.data["valid"])
    _field(console, "invalid", result.data["invalid"])
    if result.data["items"]:
        console.print(_items_table(result.data["items"]))
    _render_warnings(console, result)


def _render_phone(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "phone_number", result.data["phone_number"])
    if verbose:
        _field(console, "digits", result.data["digits"])


def _render_formats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Format")
    table.add_column("Members")
    for item in result.data["items"]:
        fmt = item["format"]
        table.add_row(Text(fmt, style=style_for_format(fmt)), Text(", ".join(item["members"])))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    _render_warnings(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "validate": _render_validate,
    "validate_batch": _render_batch,
    "normalize_phone": _render_phone,
    "formats": _render_formats,
}
