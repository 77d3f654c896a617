"""Map files — loading antenna grids into a GraphStore and writing them back.

Two encodings, chosen by file suffix:

- **Binary** (``.bin``): two little-endian signed 32-bit integers ``rows``
  and ``cols``, then ``rows * cols`` one-byte cells in row-major order.
- **Text** (anything else): one line per row, all of equal width.

Every cell other than the blank character becomes an antenna at
``(column, row)`` whose frequency is the cell character. After all cells are
read, each unordered pair of same-frequency antennas is connected once.
"""

from __future__ import annotations

import itertools
import logging
import struct
from dataclasses import dataclass
from pathlib import Path

from antgraph.domain.errors import MapFormatError, MapIOError, MapNotFoundError
from antgraph.domain.types import MapFormat
from antgraph.infrastructure.graph.engine import GraphStore

logger = logging.getLogger(__name__)

_HEADER = struct.Struct("<ii")

DEFAULT_BLANK = "."

# Reference 12x12 map materialised when no map file exists yet.
DEFAULT_MAP: tuple[str, ...] = (
    "............",
    "............",
    "............",
    ".......0....",
    "....0.......",
    "......A.....",
    ".........0..",
    ".....0......",
    "........A...",
    "............",
    ".......A....",
    "............",
)


@dataclass
class AntennaMap:
    """A loaded map: the antenna graph plus the grid it was read from."""

    graph: GraphStore
    rows: int
    cols: int
    source: Path | None = None

    def close(self) -> None:
        """Destroy the graph. The map is unusable afterwards."""
        self.graph.destroy()


def map_format_for(path: Path) -> MapFormat:
    """Infer the encoding from *path*'s suffix."""
    return MapFormat.BINARY if path.suffix.lower() == ".bin" else MapFormat.TEXT


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _decode_binary(raw: bytes, path: Path) -> list[str]:
    if len(raw) < _HEADER.size:
        msg = f"{path}: header truncated ({len(raw)} bytes)"
        raise MapFormatError(msg)
    rows, cols = _HEADER.unpack_from(raw)
    if rows <= 0 or cols <= 0:
        msg = f"{path}: invalid dimensions {rows}x{cols}"
        raise MapFormatError(msg)

    body = raw[_HEADER.size :]
    expected = rows * cols
    if len(body) < expected:
        msg = f"{path}: expected {expected} cells, found {len(body)}"
        raise MapFormatError(msg)
    if len(body) > expected:
        logger.warning("%s: ignoring %d trailing bytes", path, len(body) - expected)

    try:
        text = body[:expected].decode("ascii")
    except UnicodeDecodeError as exc:
        msg = f"{path}: non-ASCII cell at offset {exc.start}"
        raise MapFormatError(msg) from exc
    return [text[r * cols : (r + 1) * cols] for r in range(rows)]


def _decode_text(raw: bytes, path: Path) -> list[str]:
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as exc:
        msg = f"{path}: non-ASCII character at offset {exc.start}"
        raise MapFormatError(msg) from exc
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        msg = f"{path}: map is empty"
        raise MapFormatError(msg)
    width = len(lines[0])
    for row, line in enumerate(lines):
        if len(line) != width:
            msg = f"{path}: row {row} has width {len(line)}, expected {width}"
            raise MapFormatError(msg)
    return lines


def read_grid(path: Path) -> list[str]:
    """Read the raw character grid from *path*.

    Raises:
        MapNotFoundError: *path* is not a file.
        MapFormatError: The contents are not a valid grid.
        MapIOError: The file exists but cannot be read.
    """
    if not path.is_file():
        raise MapNotFoundError(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise MapIOError(path, exc) from exc
    if map_format_for(path) is MapFormat.BINARY:
        return _decode_binary(raw, path)
    return _decode_text(raw, path)


# ---------------------------------------------------------------------------
# Graph construction
# ---------------------------------------------------------------------------


def build_graph(grid: list[str] | tuple[str, ...], *, blank: str = DEFAULT_BLANK) -> GraphStore:
    """Build the antenna graph for an in-memory grid.

    Vertices are added in row-major order; every same-frequency pair is
    then connected with one ``add_edge`` call.
    """
    graph = GraphStore.create()
    for y, line in enumerate(grid):
        for x, cell in enumerate(line):
            if cell != blank and not cell.isspace():
                graph.add_vertex(cell, x, y)

    for frequency in graph.frequencies():
        for u, v in itertools.combinations(graph.vertices_with_frequency(frequency), 2):
            graph.add_edge(u, v)
    return graph


def load_map(
    path: Path,
    *,
    blank: str = DEFAULT_BLANK,
    create_default: bool = False,
) -> AntennaMap:
    """Load the map at *path* into an :class:`AntennaMap`.

    Args:
        path: Map file (``.bin`` for binary, anything else for text).
        blank: Cell character meaning "no antenna".
        create_default: Write :data:`DEFAULT_MAP` first if *path* is missing.
    """
    if not path.is_file():
        if not create_default:
            raise MapNotFoundError(path)
        logger.info("Map %s missing, writing default map", path)
        try:
            write_default_map(path)
        except OSError as exc:
            raise MapIOError(path, exc) from exc

    grid = read_grid(path)
    graph = build_graph(grid, blank=blank)
    logger.debug(
        "Loaded map %s: %dx%d, %d antennas, %d links",
        path,
        len(grid),
        len(grid[0]),
        graph.number_of_vertices,
        graph.number_of_edges,
    )
    return AntennaMap(graph=graph, rows=len(grid), cols=len(grid[0]), source=path)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def write_map(path: Path, grid: list[str] | tuple[str, ...], fmt: MapFormat | None = None) -> Path:
    """Write *grid* to *path*, creating parent directories as needed."""
    if not grid or not grid[0]:
        msg = "Cannot write an empty map"
        raise MapFormatError(msg)
    width = len(grid[0])
    if any(len(line) != width for line in grid):
        msg = "All map rows must have the same width"
        raise MapFormatError(msg)

    fmt = fmt or map_format_for(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt is MapFormat.BINARY:
        payload = _HEADER.pack(len(grid), width) + "".join(grid).encode("ascii")
        path.write_bytes(payload)
    else:
        path.write_text("\n".join(grid) + "\n", encoding="utf-8")
    return path


def write_default_map(path: Path, *, fmt: MapFormat | None = None) -> Path:
    """Write the reference 12x12 map to *path*."""
    return write_map(path, DEFAULT_MAP, fmt)
