"""Depth-first and breadth-first traversal over a GraphStore.

Both searches reset every visited marker on entry, visit only the component
reachable from the start vertex, and report each vertex exactly once, in
order, through the optional ``on_visit`` observer and the returned list.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from antgraph.domain.errors import InvalidArgumentError

if TYPE_CHECKING:
    from antgraph.infrastructure.graph.engine import GraphStore, Vertex

type VisitObserver = Callable[[Vertex], None]


def _check_start(graph: GraphStore | None, start: Vertex | None) -> GraphStore:
    if graph is None:
        raise InvalidArgumentError("Traversal requires a graph")
    if start is None:
        raise InvalidArgumentError("Traversal requires a start vertex")
    if not graph.owns(start):
        msg = f"Start vertex {start.label} does not belong to this graph"
        raise InvalidArgumentError(msg)
    return graph


def depth_first_search(
    graph: GraphStore | None,
    start: Vertex | None,
    *,
    on_visit: VisitObserver | None = None,
) -> list[Vertex]:
    """Visit the component of *start* depth-first, in adjacency order.

    Uses an explicit stack of neighbour iterators, so the visit order is the
    one the recursive formulation produces without touching the interpreter
    recursion limit.
    """
    g = _check_start(graph, start)
    assert start is not None
    g.reset_visited()

    order: list[Vertex] = []

    def visit(vertex: Vertex) -> Iterator[Vertex]:
        vertex.visited = True
        order.append(vertex)
        if on_visit is not None:
            on_visit(vertex)
        return iter(g.neighbors(vertex))

    stack: list[Iterator[Vertex]] = [visit(start)]
    while stack:
        for neighbor in stack[-1]:
            if not neighbor.visited:
                stack.append(visit(neighbor))
                break
        else:
            stack.pop()
    return order


def breadth_first_search(
    graph: GraphStore | None,
    start: Vertex | None,
    *,
    on_visit: VisitObserver | None = None,
) -> list[Vertex]:
    """Visit the component of *start* breadth-first.

    Vertices are marked when enqueued, not when dequeued, so none is ever
    queued twice.
    """
    g = _check_start(graph, start)
    assert start is not None
    g.reset_visited()

    order: list[Vertex] = []
    queue: deque[Vertex] = deque([start])
    start.visited = True

    while queue:
        current = queue.popleft()
        order.append(current)
        if on_visit is not None:
            on_visit(current)
        for neighbor in g.neighbors(current):
            if not neighbor.visited:
                neighbor.visited = True
                queue.append(neighbor)
    return order
