"""Interference positions implied by aligned same-frequency pairs.

For every ordered pair (u, v) of distinct antennas sharing a frequency and
offset ``(dx, dy) = v - u`` in forced alignment, the cells ``u - (dx, dy)``
and ``v + (dx, dy)`` are interference candidates. Candidates off the grid or
on an antenna are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antgraph.domain.errors import InvalidArgumentError
from antgraph.domain.geometry import in_bounds, is_forced_alignment

if TYPE_CHECKING:
    from antgraph.infrastructure.graph.engine import GraphStore, Vertex


@dataclass
class InterferencePoint:
    x: int
    y: int
    frequency: str
    sources: list[tuple[Vertex, Vertex]] = field(default_factory=list)

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class InterferenceReport:
    rows: int
    cols: int
    points: tuple[InterferencePoint, ...]
    aligned_pairs: int = 0

    @property
    def count(self) -> int:
        return len(self.points)

    def positions(self) -> set[tuple[int, int]]:
        return {p.position for p in self.points}


def map_interference(graph: GraphStore | None, rows: int, cols: int) -> InterferenceReport:
    """Derive interference points on a ``rows x cols`` grid.

    Points are deduplicated by position and returned in row-major order.
    """
    if graph is None:
        raise InvalidArgumentError("Interference mapping requires a graph")
    if rows <= 0 or cols <= 0:
        raise InvalidArgumentError(f"Grid bounds must be positive: {rows}x{cols}")

    vertices = graph.vertices
    occupied = {v.position for v in vertices}
    points: dict[tuple[int, int], InterferencePoint] = {}
    aligned = 0

    for u in vertices:
        for v in vertices:
            if u is v or u.frequency != v.frequency:
                continue
            dx, dy = v.x - u.x, v.y - u.y
            if not is_forced_alignment(dx, dy):
                continue
            aligned += 1
            for candidate in ((u.x - dx, u.y - dy), (v.x + dx, v.y + dy)):
                if not in_bounds(candidate, rows, cols) or candidate in occupied:
                    continue
                point = points.get(candidate)
                if point is None:
                    point = InterferencePoint(x=candidate[0], y=candidate[1], frequency=u.frequency)
                    points[candidate] = point
                point.sources.append((u, v))

    ordered = sorted(points.values(), key=lambda p: (p.y, p.x))
    return InterferenceReport(rows=rows, cols=cols, points=tuple(ordered), aligned_pairs=aligned)
