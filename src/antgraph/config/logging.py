"""structlog configuration for antgraph.

Everything logs to stderr so stdout carries only command output. Records
from plain ``logging.getLogger(__name__)`` loggers (the engine, the map
loader, the services) run through the same processor chain as structlog
loggers, so ``--log-json`` gives one JSON object per line for both.

Once a map is loaded, :func:`bind_map_context` tags every later record with
the map file and its size.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

_HANDLER_NAME = "antgraph-stderr"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib records to stderr.

    Args:
        verbose: ``antgraph.*`` loggers emit DEBUG (visit order, paths,
            crossings, span timings). Otherwise WARNING and above only.
        log_json: One JSON object per record instead of console lines.
    """
    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    # Third-party libraries (networkx, rich) stay at WARNING.
    root.setLevel(logging.WARNING)
    logging.getLogger("antgraph").setLevel(logging.DEBUG if verbose else logging.WARNING)


def bind_map_context(path: Path | None, rows: int, cols: int) -> None:
    """Attach the active map to every subsequent log record."""
    structlog.contextvars.bind_contextvars(
        map=str(path) if path else None,
        grid=f"{rows}x{cols}",
    )
