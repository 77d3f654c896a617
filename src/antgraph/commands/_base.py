"""Click base classes with ``--examples`` support.

Commands and groups take ``examples``: argument lines written without the
program name. ``--examples`` prints them under the root command's name and
exits, so ``--help`` stays short.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click


def format_examples(prog: str, examples: Sequence[str]) -> str:
    return "\n".join(f"  {prog} {line}" for line in examples)


def _examples_option(examples: Sequence[str]) -> click.Option:
    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        prog = ctx.find_root().command.name or ctx.find_root().info_name or "antgraph"
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(prog, examples))
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show_examples,
        help="Show usage examples.",
    )


class AntCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(_examples_option(self.examples))


class AntGroup(click.Group):
    """Group with an optional ``--examples`` flag.

    Subcommands default to :class:`AntCommand`, so ``@group.command`` accepts
    ``examples=`` directly.
    """

    command_class = AntCommand

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(_examples_option(self.examples))
