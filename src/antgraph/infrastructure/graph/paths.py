"""Exhaustive simple-path enumeration between two antennas.

Backtracking DFS: the current path grows on descent and shrinks on return,
and each vertex on it is held visited through :meth:`GraphStore.visiting`
so sibling branches can reuse it afterwards. No bound is imposed; a
same-frequency clique of n antennas has a factorial number of paths between
two fixed endpoints, so callers that need bounded cost pass ``limit`` or
slice :func:`iter_simple_paths` themselves.
"""

from __future__ import annotations

import itertools
from collections.abc import Generator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from antgraph.domain.errors import InvalidArgumentError
from antgraph.domain.types import PathFailure

if TYPE_CHECKING:
    from antgraph.infrastructure.graph.engine import GraphStore, Vertex

type VertexPath = tuple[Vertex, ...]


@dataclass(frozen=True)
class PathEnumeration:
    """Outcome of one path query.

    Attributes:
        origin: Requested origin (None when absent).
        destination: Requested destination (None when absent).
        paths: Every path found, origin first, in discovery order.
        failure: Why the query was not run, or None.
        truncated: True when ``limit`` stopped the enumeration early.
    """

    origin: Vertex | None
    destination: Vertex | None
    paths: tuple[VertexPath, ...] = field(default_factory=tuple)
    failure: PathFailure | None = None
    truncated: bool = False

    @property
    def count(self) -> int:
        return len(self.paths)


def check_endpoints(origin: Vertex | None, destination: Vertex | None) -> PathFailure | None:
    """Return the reason a path query cannot run, or None if it can."""
    if origin is None and destination is None:
        return PathFailure.BOTH_NOT_FOUND
    if origin is None:
        return PathFailure.ORIGIN_NOT_FOUND
    if destination is None:
        return PathFailure.DESTINATION_NOT_FOUND
    if origin.frequency != destination.frequency:
        return PathFailure.INCOMPATIBLE_FREQUENCY
    return None


def _descend(
    graph: GraphStore,
    current: Vertex,
    destination: Vertex,
    trail: list[Vertex],
) -> Generator[VertexPath]:
    trail.append(current)
    try:
        if current is destination:
            yield tuple(trail)
            return
        with graph.visiting(current):
            for neighbor in graph.neighbors(current):
                if not neighbor.visited:
                    yield from _descend(graph, neighbor, destination, trail)
    finally:
        trail.pop()


def iter_simple_paths(
    graph: GraphStore | None,
    origin: Vertex,
    destination: Vertex,
) -> Generator[VertexPath]:
    """Lazily yield every simple path from *origin* to *destination*.

    Validation and the visited reset happen before the iterator is returned.
    Both endpoints must exist and share a frequency (see :func:`check_endpoints`).
    """
    if graph is None:
        raise InvalidArgumentError("Path enumeration requires a graph")
    failure = check_endpoints(origin, destination)
    if failure is not None:
        raise InvalidArgumentError(f"Cannot enumerate paths: {failure.value}")
    for vertex, role in ((origin, "Origin"), (destination, "Destination")):
        if not graph.owns(vertex):
            msg = f"{role} vertex {vertex.label} does not belong to this graph"
            raise InvalidArgumentError(msg)

    graph.reset_visited()
    return _descend(graph, origin, destination, [])


def enumerate_paths(
    graph: GraphStore | None,
    origin: Vertex | None,
    destination: Vertex | None,
    *,
    limit: int | None = None,
) -> PathEnumeration:
    """Collect every simple path between two antennas.

    Absent endpoints and mismatched frequencies are reported through
    ``PathEnumeration.failure`` with zero paths rather than raised.

    Args:
        graph: Graph owning both endpoints.
        origin: First vertex of every path.
        destination: Last vertex of every path.
        limit: Stop after this many paths (``truncated`` is then set).
    """
    if graph is None:
        raise InvalidArgumentError("Path enumeration requires a graph")
    if limit is not None and limit < 1:
        raise InvalidArgumentError(f"Path limit must be positive: {limit}")

    failure = check_endpoints(origin, destination)
    if failure is not None:
        return PathEnumeration(origin=origin, destination=destination, failure=failure)
    assert origin is not None and destination is not None

    found = iter_simple_paths(graph, origin, destination)
    if limit is None:
        return PathEnumeration(origin=origin, destination=destination, paths=tuple(found))

    paths = tuple(itertools.islice(found, limit))
    truncated = len(paths) == limit and next(found, None) is not None
    found.close()
    return PathEnumeration(
        origin=origin,
        destination=destination,
        paths=paths,
        truncated=truncated,
    )
