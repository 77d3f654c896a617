"""Classification enums shared across layers."""

from __future__ import annotations

from enum import StrEnum


class SearchKind(StrEnum):
    """Graph traversal strategies."""

    DFS = "dfs"
    BFS = "bfs"


class Narrowing(StrEnum):
    """How a fractional crossing point is snapped onto the integer grid.

    ``TRUNCATE`` drops the fractional part (toward zero).
    ``ROUND`` picks the nearest integer, halves away from zero.
    """

    TRUNCATE = "truncate"
    ROUND = "round"


class MapFormat(StrEnum):
    """On-disk map encodings."""

    BINARY = "bin"
    TEXT = "text"


class PathFailure(StrEnum):
    """Why a path query produced no paths without running."""

    ORIGIN_NOT_FOUND = "origin_not_found"
    DESTINATION_NOT_FOUND = "destination_not_found"
    BOTH_NOT_FOUND = "both_not_found"
    INCOMPATIBLE_FREQUENCY = "incompatible_frequency"
