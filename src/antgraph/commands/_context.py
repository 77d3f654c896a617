"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Loads the antenna map lazily and owns result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from antgraph.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from antgraph.config.settings import AntSettings
    from antgraph.infrastructure.maps import AntennaMap
    from antgraph.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The map is read on first access, so ``--help``, ``--version`` and
    ``map init`` never touch the map file.
    """

    def __init__(self, settings: AntSettings) -> None:
        self.settings = settings
        self._map: AntennaMap | None = None

        from antgraph.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from antgraph.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def antenna_map(self) -> AntennaMap:
        """The loaded map. A load failure is emitted as a ``load_map`` error."""
        if self._map is None:
            from antgraph.config.logging import bind_map_context
            from antgraph.domain.errors import MapError
            from antgraph.infrastructure.maps import load_map
            from antgraph.services.base import failure_from_exception

            cfg = self.settings.map
            try:
                self._map = load_map(
                    self.settings.resolved_map_path,
                    blank=cfg.blank,
                    create_default=cfg.create_default,
                )
            except MapError as exc:
                self.emit(failure_from_exception("load_map", exc))
            else:
                bind_map_context(self._map.source, self._map.rows, self._map.cols)
        assert self._map is not None
        return self._map

    def close(self) -> None:
        """Release the map's graph, if one was loaded."""
        if self._map is not None:
            self._map.close()
            self._map = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they stay out
          of piped output.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # JSON payloads already carry their warnings.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(result.exit_code)
