"""Typed payload contracts for service results.

Each service validates its payload against one of these models before
returning, so a renamed key fails in tests instead of in a renderer.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class VertexRef(BaseModel):
    """One antenna as seen by a caller."""

    frequency: str
    x: int
    y: int


class TraversalResultData(BaseModel):
    """Payload contract for ``GraphService.dfs`` / ``GraphService.bfs``."""

    kind: str
    start: VertexRef
    count: int
    visits: list[VertexRef]
    unreached: int


class PathsResultData(BaseModel):
    """Payload contract for ``GraphService.paths``."""

    origin: VertexRef | None = None
    destination: VertexRef | None = None
    count: int
    paths: list[list[VertexRef]]
    reason: str | None = None
    truncated: bool = False


class SegmentPair(BaseModel):
    a: list[VertexRef]
    b: list[VertexRef]


class IntersectionItem(BaseModel):
    x: int
    y: int
    exact_x: str
    exact_y: str
    segments: list[SegmentPair]


class IntersectionsResultData(BaseModel):
    """Payload contract for ``GraphService.intersections``."""

    freq_a: str
    freq_b: str
    narrowing: str
    count: int
    items: list[IntersectionItem]


class InterferenceItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    x: int
    y: int
    frequency: str
    sources: int


class InterferenceResultData(BaseModel):
    """Payload contract for ``MapService.interference``."""

    rows: int
    cols: int
    count: int
    items: list[InterferenceItem]


class SummaryItem(VertexRef):
    neighbors: list[VertexRef]


class GraphSummaryData(BaseModel):
    """Payload contract for ``MapService.summary``."""

    source: str | None = None
    rows: int
    cols: int
    vertices: int
    edges: int
    components: int
    frequencies: list[str]
    items: list[SummaryItem]


class RenderMapData(BaseModel):
    """Payload contract for ``MapService.render``."""

    rows: int
    cols: int
    grid: list[str]
    blank: str
    marker: str
    antennas: int
    interference_count: int


class InitMapData(BaseModel):
    """Payload contract for ``MapService.init_map``."""

    path: str
    format: str
    rows: int
    cols: int
