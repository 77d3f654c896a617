"""Allow ``python -m antgraph``."""

from antgraph.cli import cli

cli()
