"""Themed in-memory consoles for antgraph output.

Renderers draw onto a :class:`Canvas` and hand back its text, keeping a
plain ``-> str`` contract for the CLI layer. Rich drops color codes when
no terminal is attached (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

DEFAULT_WIDTH = 120

ANT_THEME = Theme(
    {
        "ant.ok": "bold green",
        "ant.error": "bold red",
        "ant.warning": "bold yellow",
        "ant.op": "bold cyan",
        "ant.key": "dim",
        "ant.path": "dim",
        "ant.antenna": "bold blue",
        "ant.blank": "dim",
        "ant.marker": "bold magenta",
        "ant.exact": "magenta",
    }
)


class Canvas:
    """A Rich console whose output is kept in memory.

    Grid rows can run wider than a terminal, so the width is fixed rather
    than detected.
    """

    def __init__(self, *, no_color: bool = False, width: int | None = None) -> None:
        self._buffer = StringIO()
        self.console = Console(
            file=self._buffer,
            theme=ANT_THEME,
            no_color=no_color,
            highlight=False,
            width=width or DEFAULT_WIDTH,
        )

    def text(self) -> str:
        """Everything drawn so far, without the trailing newline."""
        return self._buffer.getvalue().rstrip("\n")
