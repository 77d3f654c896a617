"""Root CLI group for antgraph with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from antgraph import __version__
from antgraph.commands import register_commands
from antgraph.commands._context import AppContext
from antgraph.config.settings import AntSettings


@click.group("antgraph", invoke_without_command=True)
@click.version_option(version=__version__, prog_name="antgraph")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-m",
    "--map",
    "map_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Map file to load (overrides [map] path).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    map_file: Path | None,
) -> None:
    """antgraph — antenna graph explorer."""
    settings = AntSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        map_file=map_file,
    )
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
