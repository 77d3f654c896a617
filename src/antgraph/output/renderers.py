"""Operation-specific Rich renderers for ServiceResult.

Each renderer draws onto the console of a
:class:`~antgraph.output.console.Canvas`; :func:`render_result` returns
the canvas text.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from antgraph.output.console import Canvas

if TYPE_CHECKING:
    from rich.console import Console

    from antgraph.services.result import ServiceResult

type Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text when Rich detects no terminal, which is the case
    inside Click's CliRunner and piped output.
    """
    canvas = Canvas()
    console = canvas.console

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return canvas.text()


def render_quiet(result: ServiceResult) -> str:
    """Render minimal, line-oriented output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    match result.op:
        case "dfs" | "bfs":
            return "\n".join(label(v) for v in d.get("visits", []))
        case "paths":
            return "\n".join(" ".join(label(v) for v in path) for path in d.get("paths", []))
        case "intersections" | "interference":
            return "\n".join(f"{item['x']},{item['y']}" for item in d.get("items", []))
        case "graph_summary":
            return "\n".join(label(item) for item in d.get("items", []))
        case "render_map":
            return "\n".join(d.get("grid", []))
        case "init_map":
            return str(d.get("path", ""))
    return f"OK: {result.op}"


def label(ref: dict[str, Any]) -> str:
    """Display form of a serialized antenna: ``F(x,y)``."""
    return f"{ref['frequency']}({ref['x']},{ref['y']})"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="ant.ok"), Text(f"  {result.op}", style="ant.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ant.key")
    if key in ("path", "source"):
        v = Text(str(value), style="ant.path")
    elif isinstance(value, dict) and "frequency" in value:
        v = Text(label(value), style="ant.antenna")
    else:
        v = Text(str(value))
    console.print(k + v)


def _chain(refs: list[dict[str, Any]], separator: str = " -> ") -> Text:
    text = Text()
    for i, ref in enumerate(refs):
        if i:
            text.append(separator)
        text.append(label(ref), style="ant.antenna")
    return text


def _segment_pair(pair: dict[str, Any]) -> str:
    a = "-".join(label(v) for v in pair["a"])
    b = "-".join(label(v) for v in pair["b"])
    return f"{a} / {b}"


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a span tree with color-coded timing."""
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append(f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})")
    counters = span_data.get("counters") or {}
    if counters:
        line.append(f"  [{', '.join(f'{k}: {v}' for k, v in counters.items())}]", style="dim")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text("ERROR", style="ant.error")
    line.append(f"  {result.op}", style="ant.op")
    line.append(f"  {msg}")
    console.print(line)
    if err and err.code:
        console.print(Text(f"  code: {err.code}", style="dim"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Graph renderers ───────────────────────────────────────────────────


def _render_summary(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Adjacency listing: every antenna followed by its neighbours."""
    _status_line(console, result)
    d = result.data
    if d.get("source"):
        _field(console, "source", d["source"])
    _field(console, "size", f"{d['rows']}x{d['cols']}")
    _field(console, "vertices", d["vertices"])
    _field(console, "edges", d["edges"])
    _field(console, "components", d["components"])
    _field(console, "frequencies", " ".join(d["frequencies"]) or "(none)")

    items = d.get("items", [])
    if items:
        console.print()
    for item in items:
        line = Text("  ")
        line.append(label(item), style="ant.antenna")
        line.append(": ")
        if item["neighbors"]:
            line.append_text(_chain(item["neighbors"], separator=" "))
        else:
            line.append("no connections", style="dim")
        console.print(line)


def _render_traversal(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Numbered visit order for dfs / bfs."""
    _status_line(console, result)
    d = result.data
    _field(console, "start", d["start"])
    _field(console, "visited", d["count"])
    if d.get("unreached"):
        _field(console, "unreached", d["unreached"])
    console.print()
    for number, ref in enumerate(d.get("visits", []), start=1):
        line = Text(f"  {number:>3}. ")
        line.append(label(ref), style="ant.antenna")
        console.print(line)


def _render_paths(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """One numbered chain per simple path."""
    _status_line(console, result)
    d = result.data
    if d.get("origin"):
        _field(console, "origin", d["origin"])
    if d.get("destination"):
        _field(console, "destination", d["destination"])
    _field(console, "count", d["count"])
    if d.get("reason"):
        _field(console, "reason", d["reason"])
    if d.get("truncated"):
        console.print(Text("  limit reached, more paths exist", style="ant.warning"))

    paths = d.get("paths", [])
    if not paths:
        if not d.get("reason"):
            console.print(Text("  No path found.", style="dim"))
        return
    console.print()
    for number, path in enumerate(paths, start=1):
        line = Text(f"  {number:>3}. ")
        line.append_text(_chain(path))
        console.print(line)


def _render_intersections(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "frequencies", f"{d['freq_a']} x {d['freq_b']}")
    _field(console, "narrowing", d["narrowing"])
    _field(console, "count", d["count"])

    items = d.get("items", [])
    if not items:
        return
    console.print()
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Exact", style="ant.exact")
    table.add_column("Segments", justify="right")
    if verbose:
        table.add_column("Pairs")
    for item in items:
        row: list[str | Text] = [
            str(item["x"]),
            str(item["y"]),
            f"({item['exact_x']}, {item['exact_y']})",
            str(len(item["segments"])),
        ]
        if verbose:
            row.append(Text("; ".join(_segment_pair(pair) for pair in item["segments"])))
        table.add_row(*row)
    console.print(table)


# ── Map renderers ─────────────────────────────────────────────────────


def _render_interference(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "size", f"{d['rows']}x{d['cols']}")
    _field(console, "count", d["count"])

    items = d.get("items", [])
    if not items:
        return
    console.print()
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Frequency", style="ant.antenna")
    table.add_column("Sources", justify="right")
    for item in items:
        table.add_row(
            str(item["x"]), str(item["y"]), Text(item["frequency"]), str(item["sources"])
        )
    console.print(table)


def _render_map(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Print the grid with antennas and interference markers highlighted."""
    d = result.data
    marker = d.get("marker")
    blank = d.get("blank")
    for row in d.get("grid", []):
        line = Text()
        for cell in row:
            if cell == blank:
                line.append(cell, style="ant.blank")
            elif cell == marker:
                line.append(cell, style="ant.marker")
            else:
                line.append(cell, style="ant.antenna")
        console.print(line)
    if verbose:
        console.print()
        _field(console, "antennas", d["antennas"])
        _field(console, "interference", d["interference_count"])


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "path", d["path"])
    _field(console, "format", d["format"])
    _field(console, "size", f"{d['rows']}x{d['cols']}")


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    # Graph
    "graph_summary": _render_summary,
    "dfs": _render_traversal,
    "bfs": _render_traversal,
    "paths": _render_paths,
    "intersections": _render_intersections,
    # Map
    "interference": _render_interference,
    "render_map": _render_map,
    "init_map": _render_init,
}
