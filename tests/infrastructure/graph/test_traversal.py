"""Tests for depth-first and breadth-first traversal."""

from __future__ import annotations

import pytest

from antgraph.domain.errors import InvalidArgumentError
from antgraph.infrastructure.graph.engine import GraphStore, Vertex
from antgraph.infrastructure.graph.traversal import breadth_first_search, depth_first_search


def _tree(graph: GraphStore) -> dict[str, Vertex]:
    """a-b, a-c, b-d plus an unrelated e (all frequency A)."""
    vs = {name: graph.add_vertex("A", i, 0) for i, name in enumerate("abcde")}
    graph.add_edge(vs["a"], vs["b"])
    graph.add_edge(vs["a"], vs["c"])
    graph.add_edge(vs["b"], vs["d"])
    return vs


class TestDepthFirst:
    def test_goes_deep_first(self, graph: GraphStore) -> None:
        vs = _tree(graph)
        order = depth_first_search(graph, vs["a"])
        assert order == [vs["a"], vs["b"], vs["d"], vs["c"]]

    def test_observer_sees_every_visit(self, graph: GraphStore) -> None:
        vs = _tree(graph)
        seen: list[Vertex] = []
        order = depth_first_search(graph, vs["a"], on_visit=seen.append)
        assert seen == order

    def test_isolated_start_visits_itself(self, graph: GraphStore) -> None:
        vs = _tree(graph)
        assert depth_first_search(graph, vs["e"]) == [vs["e"]]

    def test_cycle_visits_each_once(self, graph: GraphStore) -> None:
        ring = [graph.add_vertex("0", i, i) for i in range(4)]
        for u, v in zip(ring, ring[1:] + ring[:1], strict=True):
            graph.add_edge(u, v)
        order = depth_first_search(graph, ring[0])
        assert len(order) == 4
        assert set(order) == set(ring)

    def test_long_chain_does_not_recurse(self, graph: GraphStore) -> None:
        chain = [graph.add_vertex("A", i, 0) for i in range(3000)]
        for u, v in zip(chain, chain[1:], strict=False):
            graph.add_edge(u, v)
        assert depth_first_search(graph, chain[0]) == chain


class TestBreadthFirst:
    def test_goes_wide_first(self, graph: GraphStore) -> None:
        vs = _tree(graph)
        order = breadth_first_search(graph, vs["a"])
        assert order == [vs["a"], vs["b"], vs["c"], vs["d"]]

    def test_same_visited_set_as_dfs(self, graph: GraphStore) -> None:
        vs = _tree(graph)
        for start in vs.values():
            dfs = depth_first_search(graph, start)
            bfs = breadth_first_search(graph, start)
            assert set(dfs) == set(bfs) == graph.reachable(start)
            assert len(bfs) == len(set(bfs))

    def test_repeated_runs_reset_state(self, graph: GraphStore) -> None:
        vs = _tree(graph)
        first = breadth_first_search(graph, vs["a"])
        second = breadth_first_search(graph, vs["a"])
        assert first == second


class TestStartValidation:
    def test_missing_graph(self, graph: GraphStore) -> None:
        v = graph.add_vertex("A", 0, 0)
        with pytest.raises(InvalidArgumentError):
            depth_first_search(None, v)

    def test_missing_start(self, graph: GraphStore) -> None:
        with pytest.raises(InvalidArgumentError):
            breadth_first_search(graph, None)

    def test_foreign_start(self, graph: GraphStore) -> None:
        other = GraphStore.create()
        try:
            foreign = other.add_vertex("A", 0, 0)
            with pytest.raises(InvalidArgumentError):
                depth_first_search(graph, foreign)
        finally:
            other.destroy()
