"""Exact grid geometry: segment crossings and harmonic alignment.

All arithmetic is done on integers and :class:`fractions.Fraction`, so the
``[0, 1]`` segment-parameter test never suffers from float rounding. The
only lossy step is :func:`narrow`, which snaps an exact crossing onto the
integer grid under an explicit :class:`Narrowing` policy.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import NamedTuple

from antgraph.domain.types import Narrowing

type GridPoint = tuple[int, int]


class Crossing(NamedTuple):
    """Exact crossing point of two finite segments."""

    x: Fraction
    y: Fraction
    ua: Fraction
    ub: Fraction


def segment_intersection(
    p1: GridPoint,
    p2: GridPoint,
    p3: GridPoint,
    p4: GridPoint,
) -> Crossing | None:
    """Intersect segment ``p1-p2`` with segment ``p3-p4``.

    Returns None when the segments are parallel (including coincident
    overlap, which is not resolved) or when the crossing of the infinite
    lines falls outside either finite segment.
    """
    (x1, y1), (x2, y2), (x3, y3), (x4, y4) = p1, p2, p3, p4

    denom = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    if denom == 0:
        return None

    ua = Fraction((x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3), denom)
    ub = Fraction((x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3), denom)
    if not (0 <= ua <= 1 and 0 <= ub <= 1):
        return None

    return Crossing(x=x1 + ua * (x2 - x1), y=y1 + ua * (y2 - y1), ua=ua, ub=ub)


def narrow(value: Fraction, policy: Narrowing = Narrowing.TRUNCATE) -> int:
    """Snap an exact coordinate onto the integer grid."""
    if policy is Narrowing.ROUND:
        magnitude = math.floor(abs(value) + Fraction(1, 2))
        return magnitude if value >= 0 else -magnitude
    return math.trunc(value)


def is_forced_alignment(dx: int, dy: int) -> bool:
    """Whether offset ``(dx, dy)`` is axis-aligned, diagonal, or a 2:1 / 3:1 ratio."""
    adx, ady = abs(dx), abs(dy)
    return (
        dx == 0
        or dy == 0
        or adx == ady
        or adx == 2 * ady
        or 2 * adx == ady
        or adx == 3 * ady
        or 3 * adx == ady
    )


def in_bounds(point: GridPoint, rows: int, cols: int) -> bool:
    """Whether ``(x, y)`` lies on a ``rows x cols`` grid."""
    x, y = point
    return 0 <= x < cols and 0 <= y < rows
