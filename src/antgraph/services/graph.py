"""GraphService — traversal, path enumeration, and segment intersections.

Every method resolves grid coordinates to antennas, runs the matching
engine algorithm from :mod:`antgraph.infrastructure.graph`, and returns a
validated ServiceResult. Engine exceptions are translated at this boundary.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from antgraph.domain.errors import AntGraphError
from antgraph.domain.types import Narrowing, PathFailure, SearchKind
from antgraph.infrastructure.graph.intersections import find_intersections
from antgraph.infrastructure.graph.paths import enumerate_paths
from antgraph.infrastructure.graph.traversal import breadth_first_search, depth_first_search
from antgraph.services.base import BaseService, failure_from_exception, vertex_ref
from antgraph.services.contracts import (
    IntersectionsResultData,
    PathsResultData,
    TraversalResultData,
    dump_validated,
)
from antgraph.services.result import ErrorCode, ServiceResult, error_result
from antgraph.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from antgraph.infrastructure.graph.engine import Vertex

logger = logging.getLogger(__name__)

_PATH_FAILURE_MESSAGES: dict[PathFailure, str] = {
    PathFailure.BOTH_NOT_FOUND: "Neither antenna exists on the map",
    PathFailure.ORIGIN_NOT_FOUND: "Origin antenna does not exist on the map",
    PathFailure.DESTINATION_NOT_FOUND: "Destination antenna does not exist on the map",
    PathFailure.INCOMPATIBLE_FREQUENCY: "Antennas have different frequencies",
}


class GraphService(BaseService):
    """Handles traversal and geometric queries over the antenna graph."""

    # ------------------------------------------------------------------
    # dfs / bfs
    # ------------------------------------------------------------------

    @traced
    def dfs(self, x: int, y: int) -> ServiceResult:
        """Depth-first traversal from the antenna at ``(x, y)``."""
        return self._traverse(SearchKind.DFS, x, y)

    @traced
    def bfs(self, x: int, y: int) -> ServiceResult:
        """Breadth-first traversal from the antenna at ``(x, y)``."""
        return self._traverse(SearchKind.BFS, x, y)

    def _traverse(self, kind: SearchKind, x: int, y: int) -> ServiceResult:
        op = kind.value
        warnings: list[str] = []
        search = depth_first_search if kind is SearchKind.DFS else breadth_first_search
        visits: list[dict[str, Any]] = []

        def on_visit(vertex: Vertex) -> None:
            logger.debug("Visiting %s", vertex.label)
            visits.append(vertex_ref(vertex))

        try:
            start = self._locate(x, y, warnings)
            if start is None:
                return error_result(
                    op, ErrorCode.NOT_FOUND, f"No antenna at ({x},{y})", x=x, y=y
                )
            with trace_span("search") as span:
                search(self.graph, start, on_visit=on_visit)
                unreached = len(self.graph) - len(self.graph.reachable(start))
                if span:
                    span.annotate("visits", len(visits))
        except AntGraphError as exc:
            return failure_from_exception(op, exc)

        data = dump_validated(
            TraversalResultData,
            {
                "kind": op,
                "start": vertex_ref(start),
                "count": len(visits),
                "visits": visits,
                "unreached": unreached,
            },
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # paths: every simple path between two antennas
    # ------------------------------------------------------------------

    @traced
    def paths(
        self,
        origin: tuple[int, int],
        destination: tuple[int, int],
        *,
        limit: int | None = None,
    ) -> ServiceResult:
        """Enumerate every simple path between two antennas.

        Missing antennas and mismatched frequencies are not failures: the
        result is ok with zero paths, a ``reason`` code, and a warning.

        Args:
            origin: ``(x, y)`` of the first antenna.
            destination: ``(x, y)`` of the last antenna.
            limit: Stop after this many paths.
        """
        op = "paths"
        warnings: list[str] = []

        try:
            source = self._locate(*origin, warnings)
            target = self._locate(*destination, warnings)
            with trace_span("enumerate") as span:
                found = enumerate_paths(self.graph, source, target, limit=limit)
                if span:
                    span.annotate("paths", found.count)
        except AntGraphError as exc:
            return failure_from_exception(op, exc)

        if found.failure is not None:
            warnings.append(_describe_failure(found.failure, origin, destination, source, target))
        elif found.count == 0:
            warnings.append("No path found between the antennas")
        if found.truncated:
            warnings.append(f"Stopped after {found.count} paths (limit reached)")

        for number, path in enumerate(found.paths, start=1):
            logger.debug("Path %d: %s", number, " ".join(v.label for v in path))

        data = dump_validated(
            PathsResultData,
            {
                "origin": vertex_ref(source) if source else None,
                "destination": vertex_ref(target) if target else None,
                "count": found.count,
                "paths": [[vertex_ref(v) for v in path] for path in found.paths],
                "reason": found.failure.value if found.failure else None,
                "truncated": found.truncated,
            },
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # intersections: crossings between two frequency classes
    # ------------------------------------------------------------------

    @traced
    def intersections(
        self,
        freq_a: str,
        freq_b: str,
        *,
        narrowing: Narrowing = Narrowing.TRUNCATE,
    ) -> ServiceResult:
        """Find grid points where a segment of *freq_a* crosses one of *freq_b*."""
        op = "intersections"
        warnings: list[str] = []

        try:
            known = set(self.graph.frequencies())
            with trace_span("detect", narrowing=narrowing.value) as span:
                report = find_intersections(self.graph, freq_a, freq_b, narrowing=narrowing)
                if span:
                    span.annotate("points", report.count)
                    span.tally("segment_pairs", report.pairs_checked)
        except AntGraphError as exc:
            return failure_from_exception(op, exc)

        for freq in dict.fromkeys((freq_a, freq_b)):
            if freq not in known:
                warnings.append(f"No antennas with frequency {freq!r}")

        items = [
            {
                "x": point.x,
                "y": point.y,
                "exact_x": str(point.exact_x),
                "exact_y": str(point.exact_y),
                "segments": [
                    {"a": [vertex_ref(v) for v in seg_a], "b": [vertex_ref(v) for v in seg_b]}
                    for seg_a, seg_b in point.segments
                ],
            }
            for point in report.points
        ]
        data = dump_validated(
            IntersectionsResultData,
            {
                "freq_a": freq_a,
                "freq_b": freq_b,
                "narrowing": narrowing.value,
                "count": report.count,
                "items": items,
            },
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)


def _describe_failure(
    failure: PathFailure,
    origin: tuple[int, int],
    destination: tuple[int, int],
    source: Vertex | None,
    target: Vertex | None,
) -> str:
    message = _PATH_FAILURE_MESSAGES[failure]
    if failure is PathFailure.INCOMPATIBLE_FREQUENCY and source and target:
        return f"{message} ({source.label} and {target.label})"
    return f"{message}: ({origin[0]},{origin[1]}) -> ({destination[0]},{destination[1]})"
