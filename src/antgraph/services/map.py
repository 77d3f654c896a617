"""MapService — graph listing, interference, grid rendering, and map files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from antgraph.domain.errors import AntGraphError, MapError
from antgraph.domain.geometry import in_bounds
from antgraph.domain.types import MapFormat
from antgraph.infrastructure.graph.interference import map_interference
from antgraph.infrastructure.maps import DEFAULT_MAP, map_format_for, write_default_map
from antgraph.services.base import BaseService, failure_from_exception, vertex_ref
from antgraph.services.contracts import (
    GraphSummaryData,
    InitMapData,
    InterferenceResultData,
    RenderMapData,
    dump_validated,
)
from antgraph.services.result import ErrorCode, ServiceResult, error_result
from antgraph.services.telemetry import trace_span, traced


class MapService(BaseService):
    """Operations on a whole loaded map."""

    @traced
    def summary(self) -> ServiceResult:
        """List every antenna with its neighbours in adjacency order."""
        op = "graph_summary"
        g = self.graph
        try:
            items = [
                {**vertex_ref(v), "neighbors": [vertex_ref(n) for n in g.neighbors(v)]}
                for v in g.vertices
            ]
            counts = {
                "vertices": g.number_of_vertices,
                "edges": g.number_of_edges,
                "components": g.number_of_components(),
                "frequencies": g.frequencies(),
            }
        except AntGraphError as exc:
            return failure_from_exception(op, exc)

        data = dump_validated(
            GraphSummaryData,
            {
                "source": str(self._map.source) if self._map.source else None,
                "rows": self._map.rows,
                "cols": self._map.cols,
                **counts,
                "items": items,
            },
        )
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def interference(self) -> ServiceResult:
        """Grid cells implied by aligned same-frequency antenna pairs."""
        try:
            with trace_span("map_interference") as span:
                report = map_interference(self.graph, self._map.rows, self._map.cols)
                if span:
                    span.annotate("points", report.count)
                    span.tally("aligned_pairs", report.aligned_pairs)
        except AntGraphError as exc:
            return failure_from_exception("interference", exc)

        items: list[dict[str, Any]] = [
            {"x": p.x, "y": p.y, "frequency": p.frequency, "sources": len(p.sources)}
            for p in report.points
        ]
        data = dump_validated(
            InterferenceResultData,
            {"rows": report.rows, "cols": report.cols, "count": report.count, "items": items},
        )
        return ServiceResult(ok=True, op="interference", data=data)

    @traced
    def render(
        self,
        *,
        blank: str = ".",
        marker: str = "#",
        show_interference: bool = True,
    ) -> ServiceResult:
        """Draw the map: antenna glyphs, interference markers, blanks.

        Antennas always win over interference markers; when two antennas
        share a cell the first inserted one is drawn.
        """
        rows, cols = self._map.rows, self._map.cols
        cells = [[blank] * cols for _ in range(rows)]

        interference_count = 0
        try:
            if show_interference:
                report = map_interference(self.graph, rows, cols)
                interference_count = report.count
                for point in report.points:
                    cells[point.y][point.x] = marker

            drawn: set[tuple[int, int]] = set()
            for v in self.graph.vertices:
                if v.position in drawn or not in_bounds(v.position, rows, cols):
                    continue
                cells[v.y][v.x] = v.frequency
                drawn.add(v.position)
            antennas = self.graph.number_of_vertices
        except AntGraphError as exc:
            return failure_from_exception("render_map", exc)

        data = dump_validated(
            RenderMapData,
            {
                "rows": rows,
                "cols": cols,
                "grid": ["".join(row) for row in cells],
                "blank": blank,
                "marker": marker,
                "antennas": antennas,
                "interference_count": interference_count,
            },
        )
        return ServiceResult(ok=True, op="render_map", data=data)

    @staticmethod
    def init_map(path: Path, *, fmt: MapFormat | None = None, force: bool = False) -> ServiceResult:
        """Write the reference map to *path*.

        Refuses to overwrite an existing file unless *force* is set.
        """
        op = "init_map"
        if path.exists() and not force:
            return error_result(
                op,
                ErrorCode.FILE_EXISTS,
                f"Map file already exists: {path} (use --force to overwrite)",
                path=str(path),
            )
        fmt = fmt or map_format_for(path)
        try:
            written = write_default_map(path, fmt=fmt)
        except MapError as exc:
            return failure_from_exception(op, exc)
        except OSError as exc:
            return error_result(
                op, ErrorCode.IO_ERROR, f"Cannot write {path}: {exc}", path=str(path)
            )

        data = dump_validated(
            InitMapData,
            {
                "path": str(written),
                "format": fmt.value,
                "rows": len(DEFAULT_MAP),
                "cols": len(DEFAULT_MAP[0]),
            },
        )
        return ServiceResult(ok=True, op=op, data=data)
