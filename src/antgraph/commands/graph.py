"""Command group: graph listing, traversal, paths and intersections."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from antgraph.commands._base import AntGroup
from antgraph.domain.types import Narrowing
from antgraph.services.graph import GraphService
from antgraph.services.map import MapService

if TYPE_CHECKING:
    from antgraph.commands._context import AppContext

_GRAPH_EXAMPLES = (
    "graph show",
    "graph dfs 6 5",
    "graph bfs 6 5",
    "graph paths 7 3 4 4",
    "graph paths 7 3 4 4 --limit 3",
    "graph intersect A 0",
    "graph intersect A 0 --narrowing round",
)


@click.group(cls=AntGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Inspect and traverse the antenna graph."""


@graph.command(
    examples=(
        "graph show",
        "--map data/other.txt graph show",
        "--json graph show",
    )
)
@click.pass_obj
def show(app: AppContext) -> None:
    """List every antenna with its neighbours."""
    app.emit(MapService(app.antenna_map).summary())


@graph.command(
    examples=(
        "graph dfs 6 5",
        "-q graph dfs 6 5",
        "--json graph dfs 4 4",
    )
)
@click.argument("x", type=int)
@click.argument("y", type=int)
@click.pass_obj
def dfs(app: AppContext, x: int, y: int) -> None:
    """Depth-first traversal from the antenna at X Y."""
    app.emit(GraphService(app.antenna_map).dfs(x, y))


@graph.command(
    examples=(
        "graph bfs 6 5",
        "-q graph bfs 6 5",
        "--json graph bfs 4 4",
    )
)
@click.argument("x", type=int)
@click.argument("y", type=int)
@click.pass_obj
def bfs(app: AppContext, x: int, y: int) -> None:
    """Breadth-first traversal from the antenna at X Y."""
    app.emit(GraphService(app.antenna_map).bfs(x, y))


@graph.command(
    examples=(
        "graph paths 7 3 4 4",
        "graph paths 7 3 4 4 --limit 2",
        "--json graph paths 6 5 7 10",
    )
)
@click.argument("x1", type=int)
@click.argument("y1", type=int)
@click.argument("x2", type=int)
@click.argument("y2", type=int)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after N paths (default: [paths] max_paths, else unbounded).",
)
@click.pass_obj
def paths(app: AppContext, x1: int, y1: int, x2: int, y2: int, limit: int | None) -> None:
    """Every simple path between the antennas at X1 Y1 and X2 Y2."""
    if limit is None:
        limit = app.settings.paths.max_paths
    app.emit(GraphService(app.antenna_map).paths((x1, y1), (x2, y2), limit=limit))


@graph.command(
    examples=(
        "graph intersect A 0",
        "graph intersect A A",
        "graph intersect A 0 --narrowing round",
    )
)
@click.argument("freq_a")
@click.argument("freq_b")
@click.option(
    "--narrowing",
    type=click.Choice([n.value for n in Narrowing]),
    default=None,
    help="How fractional crossings map to grid points (default: [intersections] narrowing).",
)
@click.pass_obj
def intersect(app: AppContext, freq_a: str, freq_b: str, narrowing: str | None) -> None:
    """Grid points where a FREQ_A segment crosses a FREQ_B segment."""
    policy = Narrowing(narrowing) if narrowing else app.settings.intersections.narrowing
    app.emit(GraphService(app.antenna_map).intersections(freq_a, freq_b, narrowing=policy))
