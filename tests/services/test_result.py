"""Tests for ServiceResult, ServiceError and error translation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from antgraph.domain.errors import (
    FrequencyMismatchError,
    InvalidVertexError,
    MapFormatError,
    MapNotFoundError,
)
from antgraph.infrastructure.graph.engine import GraphStore
from antgraph.services.base import failure_from_exception, vertex_ref
from antgraph.services.contracts import PathsResultData, dump_validated
from antgraph.services.result import ErrorCode, ServiceError, ServiceResult, error_result


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="dfs", data={"count": 3})
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="bfs", data={"count": 1}, warnings=["w"])
        parsed = json.loads(result.model_dump_json())
        assert parsed["op"] == "bfs"
        assert parsed["data"]["count"] == 1
        assert parsed["warnings"] == ["w"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_error_result(self) -> None:
        result = error_result("dfs", "NOT_FOUND", "No antenna at (1,2)", x=1, y=2)
        assert result.ok is False
        assert result.error == ServiceError(
            code="NOT_FOUND", message="No antenna at (1,2)", detail={"x": 1, "y": 2}
        )
        assert result.error.code is ErrorCode.NOT_FOUND

    def test_exit_code(self) -> None:
        assert ServiceResult(ok=True, op="bfs").exit_code == 0
        assert error_result("bfs", ErrorCode.NOT_FOUND, "missing").exit_code == 1

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValueError):
            error_result("dfs", "TEAPOT", "no")

    def test_code_serializes_as_string(self) -> None:
        result = error_result("init_map", ErrorCode.FILE_EXISTS, "exists")
        assert json.loads(result.model_dump_json())["error"]["code"] == "FILE_EXISTS"


class TestFailureFromException:
    def test_frequency_mismatch(self, graph: GraphStore) -> None:
        exc = FrequencyMismatchError(graph.add_vertex("A", 0, 0), graph.add_vertex("0", 1, 1))
        result = failure_from_exception("add_edge", exc)
        assert result.error is not None
        assert result.error.code == "FREQUENCY_MISMATCH"
        assert result.error.detail == {"exception": "FrequencyMismatchError"}

    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (InvalidVertexError("absent"), "INVALID_ARGUMENT"),
            (MapNotFoundError(Path("x.bin")), "MAP_NOT_FOUND"),
            (MapFormatError("ragged"), "MAP_FORMAT"),
        ],
    )
    def test_codes(self, exc: Exception, code: str) -> None:
        result = failure_from_exception("op", exc)  # type: ignore[arg-type]
        assert result.error is not None
        assert result.error.code == code
        assert result.error.message == str(exc)


class TestContracts:
    def test_vertex_ref(self, graph: GraphStore) -> None:
        assert vertex_ref(graph.add_vertex("A", 3, 4)) == {"frequency": "A", "x": 3, "y": 4}

    def test_dump_validated_fills_defaults(self) -> None:
        data = dump_validated(PathsResultData, {"count": 0, "paths": []})
        assert data == {
            "origin": None,
            "destination": None,
            "count": 0,
            "paths": [],
            "reason": None,
            "truncated": False,
        }

    def test_dump_validated_rejects_bad_payload(self) -> None:
        with pytest.raises(ValidationError):
            dump_validated(PathsResultData, {"count": "many", "paths": []})
