"""Tests for operation-specific Rich renderers."""

from antgraph.output.renderers import label, render_quiet, render_result
from antgraph.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _ref(freq: str, x: int, y: int) -> dict[str, object]:
    return {"frequency": freq, "x": x, "y": y}


A65, A88, A77 = _ref("A", 6, 5), _ref("A", 8, 8), _ref("A", 7, 7)
Z44, Z73 = _ref("0", 4, 4), _ref("0", 7, 3)


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("dfs", "NOT_FOUND", "No antenna at (0,0)"))
        assert "ERROR" in output
        assert "dfs" in output
        assert "No antenna at (0,0)" in output
        assert "code: NOT_FOUND" in output

    def test_verbose_shows_detail(self) -> None:
        output = render_result(_err("dfs", "NOT_FOUND", "Bad", x=0, y=0), verbose=True)
        assert "detail" in output
        assert "x: 0" in output

    def test_detail_hidden_without_verbose(self) -> None:
        output = render_result(_err("dfs", "NOT_FOUND", "Bad", x=0, y=0))
        assert "detail" not in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Graph renderers ──────────────────────────────────────────────────


class TestSummaryRenderer:
    def test_lists_neighbors(self) -> None:
        result = _ok(
            "graph_summary",
            source="data/mapa.bin",
            rows=12,
            cols=12,
            vertices=2,
            edges=1,
            components=2,
            frequencies=["0", "A"],
            items=[
                {**A65, "neighbors": [A88]},
                {**Z44, "neighbors": []},
            ],
        )
        output = render_result(result)
        assert "graph_summary" in output
        assert "size: 12x12" in output
        assert "source: data/mapa.bin" in output
        assert "A(6,5): A(8,8)" in output
        assert "0(4,4): no connections" in output


class TestTraversalRenderer:
    def test_numbered_visits(self) -> None:
        result = _ok("bfs", kind="bfs", start=A65, count=3, visits=[A65, A88, A77])
        output = render_result(result)
        assert "start: A(6,5)" in output
        assert "visited: 3" in output
        lines = [line.strip() for line in output.splitlines()]
        assert lines[-3:] == ["1. A(6,5)", "2. A(8,8)", "3. A(7,7)"]

    def test_unreached_shown_when_nonzero(self) -> None:
        result = _ok("bfs", kind="bfs", start=A65, count=1, visits=[A65], unreached=2)
        assert "unreached: 2" in render_result(result)
        full = _ok("bfs", kind="bfs", start=A65, count=1, visits=[A65], unreached=0)
        assert "unreached" not in render_result(full)


class TestPathsRenderer:
    def test_chains(self) -> None:
        result = _ok(
            "paths",
            origin=A65,
            destination=A77,
            count=2,
            paths=[[A65, A77], [A65, A88, A77]],
            reason=None,
            truncated=False,
        )
        output = render_result(result)
        assert "1. A(6,5) -> A(7,7)" in output
        assert "2. A(6,5) -> A(8,8) -> A(7,7)" in output
        assert "limit reached" not in output

    def test_truncated_notice(self) -> None:
        result = _ok(
            "paths", origin=A65, destination=A77, count=1, paths=[[A65, A77]], truncated=True
        )
        assert "limit reached, more paths exist" in render_result(result)

    def test_reason_shown(self) -> None:
        result = _ok(
            "paths",
            origin=A65,
            destination=Z44,
            count=0,
            paths=[],
            reason="incompatible_frequency",
            truncated=False,
        )
        output = render_result(result)
        assert "reason: incompatible_frequency" in output
        assert "No path found." not in output

    def test_empty_without_reason(self) -> None:
        result = _ok("paths", origin=Z44, destination=Z73, count=0, paths=[], truncated=False)
        assert "No path found." in render_result(result)


class TestIntersectionsRenderer:
    def _result(self) -> ServiceResult:
        return _ok(
            "intersections",
            freq_a="A",
            freq_b="0",
            narrowing="truncate",
            count=1,
            items=[
                {
                    "x": 1,
                    "y": 0,
                    "exact_x": "3/2",
                    "exact_y": "1/2",
                    "segments": [{"a": [A65, A88], "b": [Z44, Z73]}],
                }
            ],
        )

    def test_table(self) -> None:
        output = render_result(self._result())
        assert "A x 0" in output
        assert "(3/2, 1/2)" in output
        assert "Pairs" not in output

    def test_verbose_shows_pairs(self) -> None:
        output = render_result(self._result(), verbose=True)
        assert "Pairs" in output
        assert "A(6,5)-A(8,8) / 0(4,4)-0(7,3)" in output


# ── Map renderers ─────────────────────────────────────────────────────


class TestInterferenceRenderer:
    def test_table(self) -> None:
        result = _ok(
            "interference",
            rows=12,
            cols=12,
            count=1,
            items=[{"x": 3, "y": 1, "frequency": "0", "sources": 1}],
        )
        output = render_result(result)
        assert "count: 1" in output
        assert "Frequency" in output
        assert "Sources" in output


class TestMapRenderer:
    def test_grid_lines(self) -> None:
        result = _ok(
            "render_map",
            rows=2,
            cols=3,
            grid=["A.#", "..."],
            blank=".",
            marker="#",
            antennas=1,
            interference_count=1,
        )
        assert render_result(result).splitlines() == ["A.#", "..."]

    def test_verbose_counts(self) -> None:
        result = _ok(
            "render_map",
            rows=1,
            cols=1,
            grid=["A"],
            blank=".",
            marker="#",
            antennas=1,
            interference_count=0,
        )
        output = render_result(result, verbose=True)
        assert "antennas: 1" in output
        assert "interference: 0" in output


class TestInitRenderer:
    def test_fields(self) -> None:
        result = _ok("init_map", path="data/mapa.bin", format="bin", rows=12, cols=12)
        output = render_result(result)
        assert "init_map" in output
        assert "path: data/mapa.bin" in output
        assert "format: bin" in output


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("custom_op", key="val", nested={"a": 1}))
        assert "custom_op" in output
        assert "key: val" in output
        assert '{"a":1}' in output


# ── Quiet mode ────────────────────────────────────────────────────────


class TestQuiet:
    def test_label(self) -> None:
        assert label(A65) == "A(6,5)"

    def test_paths(self) -> None:
        result = _ok("paths", paths=[[A65, A77], [A65, A88, A77]])
        assert render_quiet(result) == "A(6,5) A(7,7)\nA(6,5) A(8,8) A(7,7)"

    def test_points(self) -> None:
        result = _ok("interference", items=[{"x": 3, "y": 1}, {"x": 10, "y": 2}])
        assert render_quiet(result) == "3,1\n10,2"

    def test_grid(self) -> None:
        assert render_quiet(_ok("render_map", grid=["A.", ".#"])) == "A.\n.#"

    def test_init(self) -> None:
        assert render_quiet(_ok("init_map", path="m.bin")) == "m.bin"

    def test_unknown(self) -> None:
        assert render_quiet(_ok("custom_op")) == "OK: custom_op"

    def test_error(self) -> None:
        assert render_quiet(_err("dfs", "NOT_FOUND", "No antenna")) == "ERROR: dfs: No antenna"
