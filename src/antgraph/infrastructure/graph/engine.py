"""GraphStore — arena of antenna vertices over an undirected NetworkX graph.

Vertices live in an insertion-ordered arena and are addressed by their
stable integer index. Adjacency is an ``nx.Graph`` keyed by those indices;
NetworkX keeps each node's neighbour dict in edge-insertion order, which is
the adjacency order every traversal follows.

The store is the sole owner of its vertices: :meth:`GraphStore.destroy`
releases everything at once and any later call fails with
:class:`InvalidArgumentError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import networkx as nx

from antgraph.domain.errors import (
    AllocationError,
    FrequencyMismatchError,
    InvalidArgumentError,
    InvalidVertexError,
)

logger = logging.getLogger(__name__)

type _Graph = nx.Graph


@dataclass(eq=False)
class Vertex:
    """One antenna. Identity-compared; ``visited`` is transient traversal state."""

    index: int
    frequency: str
    x: int
    y: int
    visited: bool = field(default=False, repr=False)

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def label(self) -> str:
        return f"{self.frequency}({self.x},{self.y})"


class GraphStore:
    """Owns antenna vertices and their same-frequency adjacency."""

    def __init__(self) -> None:
        self._graph: _Graph | None = nx.Graph()
        self._vertices: list[Vertex] = []

    @classmethod
    def create(cls) -> GraphStore:
        """Return a new empty graph."""
        try:
            return cls()
        except MemoryError as exc:
            raise AllocationError("Out of memory creating graph") from exc

    # ------------------------------------------------------------------
    # Internal guards
    # ------------------------------------------------------------------

    def _check_alive(self) -> None:
        if self._graph is None:
            raise InvalidArgumentError("Graph has been destroyed")

    @property
    def graph(self) -> _Graph:
        """The underlying NetworkX graph (nodes are vertex indices)."""
        if self._graph is None:
            raise InvalidArgumentError("Graph has been destroyed")
        return self._graph

    def owns(self, vertex: Vertex | None) -> bool:
        """Whether *vertex* is a live vertex of this graph."""
        if vertex is None or self._graph is None:
            return False
        return 0 <= vertex.index < len(self._vertices) and self._vertices[vertex.index] is vertex

    def _require(self, vertex: Vertex | None, role: str) -> Vertex:
        if vertex is None:
            raise InvalidVertexError(f"{role} vertex is absent")
        if not self.owns(vertex):
            raise InvalidVertexError(f"{role} vertex {vertex.label} does not belong to this graph")
        return vertex

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_vertex(self, frequency: str, x: int, y: int) -> Vertex:
        """Insert an antenna and return its vertex.

        Duplicate coordinates are allowed; see :meth:`find_vertices`.
        """
        g = self.graph
        if not isinstance(frequency, str) or len(frequency) != 1 or frequency.isspace():
            msg = f"Frequency must be a single visible character: {frequency!r}"
            raise InvalidArgumentError(msg)
        if not all(isinstance(c, int) and not isinstance(c, bool) for c in (x, y)):
            raise InvalidArgumentError(f"Coordinates must be integers: ({x!r}, {y!r})")

        try:
            vertex = Vertex(index=len(self._vertices), frequency=frequency, x=x, y=y)
            g.add_node(vertex.index, frequency=frequency, x=x, y=y)
            self._vertices.append(vertex)
        except MemoryError as exc:
            raise AllocationError(f"Out of memory adding vertex {frequency}({x},{y})") from exc
        return vertex

    def add_edge(self, origin: Vertex | None, destination: Vertex | None) -> bool:
        """Connect two same-frequency vertices in both directions.

        Returns True if a new edge was inserted, False if it already existed.
        Nothing is mutated when the request is rejected.
        """
        g = self.graph
        u = self._require(origin, "Origin")
        v = self._require(destination, "Destination")
        if u.frequency != v.frequency:
            raise FrequencyMismatchError(u, v)
        if u is v:
            raise InvalidArgumentError(f"Self-loop requested on {u.label}")
        if g.has_edge(u.index, v.index):
            return False
        try:
            g.add_edge(u.index, v.index)
        except MemoryError as exc:
            raise AllocationError(f"Out of memory connecting {u.label} and {v.label}") from exc
        return True

    def destroy(self) -> None:
        """Release every vertex and edge. Safe to call more than once."""
        if self._graph is None:
            return
        logger.debug(
            "Destroying graph: %d vertices, %d edges",
            len(self._vertices),
            self._graph.number_of_edges(),
        )
        self._graph.clear()
        self._graph = None
        self._vertices.clear()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        """All vertices in insertion order."""
        self._check_alive()
        return tuple(self._vertices)

    def vertex(self, index: int) -> Vertex:
        """Return the vertex at arena *index*."""
        self._check_alive()
        if not 0 <= index < len(self._vertices):
            raise InvalidVertexError(f"No vertex with index {index}")
        return self._vertices[index]

    def find_vertex(self, x: int, y: int) -> Vertex | None:
        """First vertex at ``(x, y)`` in insertion order, or None."""
        for vertex in self.vertices:
            if vertex.x == x and vertex.y == y:
                return vertex
        return None

    def find_vertices(self, x: int, y: int) -> list[Vertex]:
        """Every vertex at ``(x, y)`` in insertion order."""
        return [v for v in self.vertices if v.x == x and v.y == y]

    def neighbors(self, vertex: Vertex) -> list[Vertex]:
        """Neighbours of *vertex* in adjacency order."""
        g = self.graph
        v = self._require(vertex, "Query")
        return [self._vertices[i] for i in g.adj[v.index]]

    def edges(self) -> Iterator[tuple[Vertex, Vertex]]:
        """Each undirected edge once, lower index first."""
        g = self.graph
        for u, v in g.edges():
            a, b = (u, v) if u < v else (v, u)
            yield self._vertices[a], self._vertices[b]

    def frequencies(self) -> list[str]:
        """Distinct frequency classes in first-seen order."""
        return list(dict.fromkeys(v.frequency for v in self.vertices))

    def vertices_with_frequency(self, frequency: str) -> list[Vertex]:
        return [v for v in self.vertices if v.frequency == frequency]

    def reachable(self, vertex: Vertex) -> set[Vertex]:
        """Vertices in the connected component of *vertex* (itself included)."""
        v = self._require(vertex, "Query")
        return {self._vertices[i] for i in nx.node_connected_component(self.graph, v.index)}

    def number_of_components(self) -> int:
        return nx.number_connected_components(self.graph)

    @property
    def number_of_vertices(self) -> int:
        return self.graph.number_of_nodes()

    @property
    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return isinstance(vertex, Vertex) and self.owns(vertex)

    # ------------------------------------------------------------------
    # Traversal state
    # ------------------------------------------------------------------

    def reset_visited(self) -> None:
        """Clear the visited marker on every vertex."""
        for vertex in self.vertices:
            vertex.visited = False

    @contextmanager
    def visiting(self, vertex: Vertex) -> Iterator[Vertex]:
        """Mark *vertex* visited for the duration of the block.

        The marker is cleared on every exit path, including exceptions and
        abandoned generators.
        """
        v = self._require(vertex, "Visited")
        v.visited = True
        try:
            yield v
        finally:
            v.visited = False
