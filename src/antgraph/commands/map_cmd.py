"""Command group: map rendering, interference and initialization.

Named map_cmd to avoid shadowing the builtin.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from antgraph.commands._base import AntGroup
from antgraph.domain.types import MapFormat
from antgraph.services.map import MapService

if TYPE_CHECKING:
    from antgraph.commands._context import AppContext

_MAP_EXAMPLES = (
    "map show",
    "map show --no-interference",
    "map interference",
    "map init",
    "map init grids/demo.txt --format text",
)


@click.group("map", cls=AntGroup, examples=_MAP_EXAMPLES)
@click.pass_obj
def map_cmd(app: AppContext) -> None:
    """Render and manage antenna map files."""


@map_cmd.command(
    examples=(
        "map show",
        "map show --no-interference",
        "map show --marker '*'",
    )
)
@click.option("--no-interference", is_flag=True, help="Do not mark interference cells.")
@click.option(
    "--marker",
    default=None,
    help="Interference cell glyph (default: [render] interference_marker).",
)
@click.pass_obj
def show(app: AppContext, no_interference: bool, marker: str | None) -> None:
    """Draw the map grid."""
    render = app.settings.render
    if marker is not None and len(marker) != 1:
        raise click.BadParameter("must be a single character", param_hint="--marker")
    app.emit(
        MapService(app.antenna_map).render(
            blank=app.settings.map.blank,
            marker=marker or render.interference_marker,
            show_interference=render.show_interference and not no_interference,
        )
    )


@map_cmd.command(
    examples=(
        "map interference",
        "-q map interference",
        "--json map interference",
    )
)
@click.pass_obj
def interference(app: AppContext) -> None:
    """List grid cells hit by aligned same-frequency antenna pairs."""
    app.emit(MapService(app.antenna_map).interference())


@map_cmd.command(
    "init",
    examples=(
        "map init",
        "map init data/mapa.bin --force",
        "map init grids/demo.txt --format text",
    ),
)
@click.argument("path", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in MapFormat]),
    default=None,
    help="File encoding (default: from the suffix, .bin is binary).",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_obj
def init_map(app: AppContext, path: Path | None, fmt: str | None, force: bool) -> None:
    """Write the reference 12x12 map to PATH (default: the configured map)."""
    target = path if path is not None else app.settings.resolved_map_path
    app.emit(MapService.init_map(target, fmt=MapFormat(fmt) if fmt else None, force=force))
