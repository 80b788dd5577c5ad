"""
Set algebra over offset lists.

Offset lists are ordered sets: every combinator returns each coordinate at
most once and keeps a deterministic order (first-seen for union, the order of
the first/base list otherwise).
"""

from __future__ import annotations

from typing import Sequence

from chessplayground.position import Position
from chessplayground.shapes.nodes import Axis


def union(*lists: Sequence[Position]) -> list[Position]:
    seen: dict[Position, None] = {}
    for offsets in lists:
        for o in offsets:
            seen.setdefault(Position(*o), None)
    return list(seen)


def intersect(*lists: Sequence[Position]) -> list[Position]:
    if not lists:
        return []
    first, *rest = lists
    others = [set(offsets) for offsets in rest]
    return union([o for o in first if all(o in other for other in others)])


def subtract(base: Sequence[Position], *cutters: Sequence[Position]) -> list[Position]:
    cut = set(union(*cutters))
    return union([o for o in base if o not in cut])


def reflect(offsets: Sequence[Position], axis: Axis = "both") -> list[Position]:
    """
    The offsets plus their mirror images.

    horizontal flips the x sign, vertical flips the y sign, and both adds all
    three mirrored variants.
    """
    result: dict[Position, None] = dict.fromkeys(Position(*o) for o in offsets)
    for o in offsets:
        if axis in ("horizontal", "both"):
            result.setdefault(Position(-o[0], o[1]), None)
        if axis in ("vertical", "both"):
            result.setdefault(Position(o[0], -o[1]), None)
        if axis == "both":
            result.setdefault(Position(-o[0], -o[1]), None)
    return list(result)
