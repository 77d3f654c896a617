"""Error hierarchy for graph and map operations.

Engine operations raise these; the service layer converts them into
structured ``ServiceError`` payloads. Path-query preconditions are not
errors (see :class:`~antgraph.domain.types.PathFailure`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from antgraph.infrastructure.graph.engine import Vertex


class AntGraphError(Exception):
    """Base error for antgraph operations."""


class AllocationError(AntGraphError):
    """The host ran out of memory while growing the graph."""


class InvalidArgumentError(AntGraphError):
    """An absent or unusable graph, vertex, or parameter was supplied."""


class InvalidVertexError(InvalidArgumentError):
    """A vertex reference is absent or not owned by the graph."""


class FrequencyMismatchError(AntGraphError):
    """An edge was requested between two frequency classes.

    Attributes:
        origin: First endpoint of the rejected edge.
        destination: Second endpoint of the rejected edge.
    """

    def __init__(self, origin: Vertex, destination: Vertex) -> None:
        self.origin = origin
        self.destination = destination
        super().__init__(
            f"Cannot connect {origin.label} and {destination.label}: "
            f"frequencies differ ({origin.frequency!r} != {destination.frequency!r})"
        )


# ---------------------------------------------------------------------------
# Map file errors
# ---------------------------------------------------------------------------
class MapError(AntGraphError):
    """Base error for map loading and writing."""


class MapNotFoundError(MapError):
    """The map file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Map file not found: {path}")


class MapFormatError(MapError):
    """The map file is truncated, ragged, or otherwise malformed."""


class MapIOError(MapError):
    """The map file could not be read or written."""

    def __init__(self, path: Path, reason: OSError) -> None:
        self.path = path
        super().__init__(f"Cannot access map file {path}: {reason.strerror or reason}")
