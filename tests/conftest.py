"""Shared pytest fixtures and test helpers for antgraph tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from antgraph.infrastructure.graph.engine import GraphStore
from antgraph.infrastructure.maps import DEFAULT_MAP, AntennaMap, build_graph
from antgraph.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo telemetry and logging changes made by CLI invocations."""
    root = logging.getLogger()
    root_level = root.level
    ant_level = logging.getLogger("antgraph").level
    yield
    disable_telemetry()
    _current_span.set(None)
    structlog.contextvars.clear_contextvars()
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(root_level)
    logging.getLogger("antgraph").setLevel(ant_level)


@pytest.fixture
def graph() -> Generator[GraphStore]:
    """Empty graph, destroyed after the test."""
    g = GraphStore.create()
    yield g
    g.destroy()


@pytest.fixture
def default_map() -> Generator[AntennaMap]:
    """The reference 12x12 map, built in memory."""
    m = make_map(DEFAULT_MAP)
    yield m
    m.close()


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty project directory with no ANTGRAPH_* env.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes; ``tmp_path`` is the same directory.
    """
    for var in ("ANTGRAPH_CONFIG", "ANTGRAPH_MAP__PATH", "ANTGRAPH_MAP_FILE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_map(grid: list[str] | tuple[str, ...], *, blank: str = ".") -> AntennaMap:
    """Build an AntennaMap for an in-memory grid."""
    return AntennaMap(
        graph=build_graph(grid, blank=blank),
        rows=len(grid),
        cols=len(grid[0]),
    )


def labels(refs: list[dict[str, object]]) -> list[str]:
    """``F(x,y)`` labels for serialized vertex refs."""
    return [f"{r['frequency']}({r['x']},{r['y']})" for r in refs]
