"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a StringIO-backed Rich Console; the caller gets
the text back from :func:`render_result`. Renderers are dispatched by
``result.op``; unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from timectl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from timectl.services.result import ServiceResult

_Renderer = Callable[..., None]

_ORDER_WORDS = {-1: "before", 0: "equal to", 1: "after"}


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Plain text (no ANSI) when Rich detects no terminal, which is the
    case inside Click's CliRunner and piped output.
    """
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Only the value: the time text, the comparison integer, or layout names."""
    if not result.ok:
        return result.error.message if result.error else "Unknown error"
    if "time" in result.data:
        return str(result.data["time"])
    if "result" in result.data:
        return str(result.data["result"])
    if "formats" in result.data:
        return "\n".join(item["name"] for item in result.data["formats"])
    return ""


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="time.ok"), Text(f"  {result.op}", style="time.op"), sep="")


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    console.print(Text(f"  {key}: ", style="time.key"), Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_telemetry_tree(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}", markup=False)


def _render_telemetry_tree(console: Console, span: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = Text(prefix)
    line.append(f"{duration:>8.3f}ms", style=style)
    line.append(f"  {span.get('name', '?')}")
    annotations = span.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)
    for child in span.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="time.error"),
        Text(f"  {result.op}", style="time.op"),
        Text(f" - {msg}"),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}", markup=False)


# ── Operation renderers ───────────────────────────────────────────────


def _render_time(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "time", result.data["time"], style="time.value")


def _render_compare(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    order = result.data["result"]
    _field(console, "result", order, style="time.value")
    _field(console, "meaning", f"time_a is {_ORDER_WORDS.get(order, '?')} time_b")


def _render_formats(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Name", style="time.op", no_wrap=True)
    table.add_column("Layout", style="time.layout")
    for item in result.data["formats"]:
        table.add_row(item["name"], Text(item["layout"]))
    console.print(table)
    if result.meta and "default_format" in result.meta:
        console.print(Text(f"\ndefault: {result.meta['default_format']}", style="dim"))


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, _Renderer] = {
    "current": _render_time,
    "convert": _render_time,
    "add": _render_time,
    "relative": _render_time,
    "compare": _render_compare,
    "formats": _render_formats,
}
