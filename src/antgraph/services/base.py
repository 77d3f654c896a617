"""BaseService — shared foundation for antgraph services.

Every service receives an :class:`AntennaMap` at construction time and
works on its graph. Coordinate lookups and engine-error translation live
here so each operation reports failures the same way.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from antgraph.domain.errors import (
    AllocationError,
    AntGraphError,
    FrequencyMismatchError,
    InvalidArgumentError,
    MapFormatError,
    MapIOError,
    MapNotFoundError,
)
from antgraph.services.result import ErrorCode, ServiceResult, error_result

if TYPE_CHECKING:
    from antgraph.infrastructure.graph.engine import GraphStore, Vertex
    from antgraph.infrastructure.maps import AntennaMap

logger = logging.getLogger(__name__)

_ERROR_CODES: tuple[tuple[type[AntGraphError], ErrorCode], ...] = (
    (FrequencyMismatchError, ErrorCode.FREQUENCY_MISMATCH),
    (InvalidArgumentError, ErrorCode.INVALID_ARGUMENT),
    (AllocationError, ErrorCode.ALLOCATION),
    (MapNotFoundError, ErrorCode.MAP_NOT_FOUND),
    (MapFormatError, ErrorCode.MAP_FORMAT),
    (MapIOError, ErrorCode.IO_ERROR),
)


def vertex_ref(vertex: Vertex) -> dict[str, Any]:
    """Serializable reference to one antenna."""
    return {"frequency": vertex.frequency, "x": vertex.x, "y": vertex.y}


def failure_from_exception(op: str, exc: AntGraphError) -> ServiceResult:
    """Translate an engine exception into a failed ServiceResult."""
    code = next((c for cls, c in _ERROR_CODES if isinstance(exc, cls)), ErrorCode.ERROR)
    return error_result(op, code, str(exc), exception=type(exc).__name__)


class BaseService:
    """Base for service-layer classes operating on a loaded map.

    Usage::

        class GraphService(BaseService):
            def dfs(self, x: int, y: int) -> ServiceResult:
                start = self._locate(x, y, warnings)
                ...
    """

    def __init__(self, antenna_map: AntennaMap) -> None:
        self._map = antenna_map

    @property
    def graph(self) -> GraphStore:
        return self._map.graph

    def _locate(self, x: int, y: int, warnings: list[str]) -> Vertex | None:
        """Return the antenna at ``(x, y)``.

        When several antennas share the cell, the first inserted one is used
        and a warning names how many were found.
        """
        matches = self.graph.find_vertices(x, y)
        if len(matches) > 1:
            logger.debug("Ambiguous lookup at (%d,%d): %d antennas", x, y, len(matches))
            warnings.append(f"{len(matches)} antennas at ({x},{y}); using {matches[0].label}")
        return matches[0] if matches else None
