"""Crossings between the edge segments of two frequency classes.

Every undirected edge inside a class is a straight segment between its two
antennas. Each segment of class A is tested once against each segment of
class B; crossings are snapped to the grid and deduplicated by grid point.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import TYPE_CHECKING

from antgraph.domain.errors import InvalidArgumentError
from antgraph.domain.geometry import narrow, segment_intersection
from antgraph.domain.types import Narrowing

if TYPE_CHECKING:
    from antgraph.infrastructure.graph.engine import GraphStore, Vertex

logger = logging.getLogger(__name__)

type Segment = tuple[Vertex, Vertex]


@dataclass
class Intersection:
    """A distinct grid point where segments of the two classes cross.

    Attributes:
        x, y: Crossing snapped to the grid.
        exact_x, exact_y: Exact crossing of the first segment pair found.
        segments: Every (A-segment, B-segment) pair landing on this point.
    """

    x: int
    y: int
    exact_x: Fraction
    exact_y: Fraction
    segments: list[tuple[Segment, Segment]] = field(default_factory=list)

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class IntersectionReport:
    freq_a: str
    freq_b: str
    narrowing: Narrowing
    points: tuple[Intersection, ...]
    pairs_checked: int = 0

    @property
    def count(self) -> int:
        return len(self.points)


def class_segments(graph: GraphStore, frequency: str) -> list[Segment]:
    """Edges among *frequency* antennas, each once, lower index first."""
    return [(u, v) for u, v in graph.edges() if u.frequency == frequency]


def find_intersections(
    graph: GraphStore | None,
    freq_a: str,
    freq_b: str,
    *,
    narrowing: Narrowing = Narrowing.TRUNCATE,
) -> IntersectionReport:
    """Find the distinct grid points where an A-segment crosses a B-segment.

    *freq_a* may equal *freq_b*; segments sharing an endpoint then meet at
    that antenna. Parallel and coincident segments never intersect.
    """
    if graph is None:
        raise InvalidArgumentError("Intersection search requires a graph")

    segments_a = class_segments(graph, freq_a)
    segments_b = class_segments(graph, freq_b)

    found: dict[tuple[int, int], Intersection] = {}
    for seg_a in segments_a:
        a1, a2 = seg_a
        for seg_b in segments_b:
            b1, b2 = seg_b
            crossing = segment_intersection(a1.position, a2.position, b1.position, b2.position)
            if crossing is None:
                continue
            point = (narrow(crossing.x, narrowing), narrow(crossing.y, narrowing))
            hit = found.get(point)
            if hit is None:
                hit = Intersection(x=point[0], y=point[1], exact_x=crossing.x, exact_y=crossing.y)
                found[point] = hit
                logger.debug(
                    "Segment %s-%s crosses %s-%s at (%d,%d)",
                    a1.label,
                    a2.label,
                    b1.label,
                    b2.label,
                    *point,
                )
            hit.segments.append((seg_a, seg_b))

    return IntersectionReport(
        freq_a=freq_a,
        freq_b=freq_b,
        narrowing=narrowing,
        points=tuple(found.values()),
        pairs_checked=len(segments_a) * len(segments_b),
    )
