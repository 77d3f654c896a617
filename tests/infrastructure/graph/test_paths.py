"""Tests for exhaustive simple-path enumeration."""

from __future__ import annotations

import itertools

import pytest

from antgraph.domain.errors import InvalidArgumentError
from antgraph.domain.types import PathFailure
from antgraph.infrastructure.graph.engine import GraphStore, Vertex
from antgraph.infrastructure.graph.paths import (
    check_endpoints,
    enumerate_paths,
    iter_simple_paths,
)


def _clique(graph: GraphStore, size: int, frequency: str = "A") -> list[Vertex]:
    vs = [graph.add_vertex(frequency, i, 0) for i in range(size)]
    for u, v in itertools.combinations(vs, 2):
        graph.add_edge(u, v)
    return vs


def _names(paths: tuple[tuple[Vertex, ...], ...], vs: list[Vertex]) -> list[str]:
    names = {v.index: "ABCDEFGH"[i] for i, v in enumerate(vs)}
    return ["".join(names[v.index] for v in path) for path in paths]


class TestEnumeratePaths:
    def test_four_clique_has_five_paths(self, graph: GraphStore) -> None:
        a, b, c, d = vs = _clique(graph, 4)
        result = enumerate_paths(graph, a, d)
        assert result.count == 5
        assert sorted(_names(result.paths, vs)) == sorted(["AD", "ABD", "ACD", "ABCD", "ACBD"])

    def test_discovery_follows_adjacency_order(self, graph: GraphStore) -> None:
        vs = _clique(graph, 4)
        result = enumerate_paths(graph, vs[0], vs[3])
        assert _names(result.paths, vs) == ["ABCD", "ABD", "ACBD", "ACD", "AD"]

    def test_every_path_is_simple(self, graph: GraphStore) -> None:
        vs = _clique(graph, 5)
        result = enumerate_paths(graph, vs[0], vs[4])
        # 1 + 3 + 3*2 + 3*2*1 simple paths in K5 between two fixed vertices
        assert result.count == 16
        for path in result.paths:
            assert path[0] is vs[0] and path[-1] is vs[4]
            assert len(set(path)) == len(path)

    def test_visited_cleared_afterwards(self, graph: GraphStore) -> None:
        vs = _clique(graph, 4)
        enumerate_paths(graph, vs[0], vs[3])
        assert not any(v.visited for v in vs)

    def test_unreachable_destination(self, graph: GraphStore) -> None:
        a = graph.add_vertex("A", 0, 0)
        b = graph.add_vertex("A", 1, 0)
        result = enumerate_paths(graph, a, b)
        assert result.count == 0
        assert result.failure is None

    def test_origin_is_destination(self, graph: GraphStore) -> None:
        vs = _clique(graph, 3)
        result = enumerate_paths(graph, vs[0], vs[0])
        assert result.paths == ((vs[0],),)

    def test_counter_is_local_to_each_call(self, graph: GraphStore) -> None:
        vs = _clique(graph, 4)
        assert enumerate_paths(graph, vs[0], vs[3]).count == 5
        assert enumerate_paths(graph, vs[0], vs[3]).count == 5


class TestLimit:
    def test_limit_truncates(self, graph: GraphStore) -> None:
        vs = _clique(graph, 4)
        result = enumerate_paths(graph, vs[0], vs[3], limit=2)
        assert result.count == 2
        assert result.truncated is True
        assert not any(v.visited for v in vs)

    def test_limit_equal_to_total_is_not_truncated(self, graph: GraphStore) -> None:
        vs = _clique(graph, 4)
        result = enumerate_paths(graph, vs[0], vs[3], limit=5)
        assert result.count == 5
        assert result.truncated is False

    def test_non_positive_limit(self, graph: GraphStore) -> None:
        vs = _clique(graph, 2)
        with pytest.raises(InvalidArgumentError):
            enumerate_paths(graph, vs[0], vs[1], limit=0)


class TestPreconditions:
    def test_missing_origin(self, graph: GraphStore) -> None:
        d = graph.add_vertex("A", 0, 0)
        result = enumerate_paths(graph, None, d)
        assert result.failure is PathFailure.ORIGIN_NOT_FOUND
        assert result.count == 0

    def test_missing_destination(self, graph: GraphStore) -> None:
        o = graph.add_vertex("A", 0, 0)
        assert enumerate_paths(graph, o, None).failure is PathFailure.DESTINATION_NOT_FOUND

    def test_both_missing(self, graph: GraphStore) -> None:
        assert enumerate_paths(graph, None, None).failure is PathFailure.BOTH_NOT_FOUND

    def test_incompatible_frequency(self, graph: GraphStore) -> None:
        o = graph.add_vertex("A", 0, 0)
        d = graph.add_vertex("0", 1, 1)
        result = enumerate_paths(graph, o, d)
        assert result.failure is PathFailure.INCOMPATIBLE_FREQUENCY
        assert result.paths == ()

    def test_check_endpoints_ok(self, graph: GraphStore) -> None:
        o = graph.add_vertex("A", 0, 0)
        d = graph.add_vertex("A", 1, 1)
        assert check_endpoints(o, d) is None

    def test_missing_graph(self) -> None:
        with pytest.raises(InvalidArgumentError):
            enumerate_paths(None, None, None)


class TestIterSimplePaths:
    def test_is_lazy(self, graph: GraphStore) -> None:
        vs = _clique(graph, 6)
        found = iter_simple_paths(graph, vs[0], vs[5])
        first = next(found)
        assert first[0] is vs[0] and first[-1] is vs[5]
        found.close()
        assert not any(v.visited for v in vs)

    def test_validates_eagerly(self, graph: GraphStore) -> None:
        o = graph.add_vertex("A", 0, 0)
        d = graph.add_vertex("0", 1, 1)
        with pytest.raises(InvalidArgumentError):
            iter_simple_paths(graph, o, d)
