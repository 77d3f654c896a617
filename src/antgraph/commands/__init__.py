"""Subcommand modules for antgraph.

Provides register_commands(), which imports command modules on demand so
``antgraph --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``graph`` and ``map`` groups on the root CLI group."""
    from antgraph.commands.graph import graph
    from antgraph.commands.map_cmd import map_cmd

    cli.add_command(graph)
    cli.add_command(map_cmd)
