"""
Geometric primitives of the shape DSL.

Each function returns a list of offsets relative to the piece's square. All
of them except point() exclude the origin, and none of them emit the same
coordinate twice.
"""

from __future__ import annotations

import math
from typing import Iterable

from chessplayground.position import (
    CARDINAL_DIRECTIONS,
    DIRECTION_VECTORS,
    Direction,
    Position,
)


def circle(radius: int) -> list[Position]:
    """Manhattan disk: every (dx, dy) with |dx| + |dy| <= radius, origin excluded."""
    result: list[Position] = []
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if dx == 0 and dy == 0:
                continue
            if abs(dx) + abs(dy) <= radius:
                result.append(Position(dx, dy))
    return result


def square(size: int) -> list[Position]:
    """Chebyshev square: every (dx, dy) with |dx|, |dy| <= size, origin excluded."""
    return [
        Position(dx, dy)
        for dx in range(-size, size + 1)
        for dy in range(-size, size + 1)
        if dx != 0 or dy != 0
    ]


def ray(dirs: Iterable[Direction], min_dist: int = 1, max_dist: int = 8) -> list[Position]:
    """Straight-line steps min_dist..max_dist (inclusive) along each distinct direction."""
    result: list[Position] = []
    for d in dict.fromkeys(dirs):
        vec = DIRECTION_VECTORS[d]
        for dist in range(min_dist, max_dist + 1):
            result.append(Position(vec.x * dist, vec.y * dist))
    return result


def point(delta: Position) -> list[Position]:
    """A single literal offset. The origin is allowed here."""
    return [Position(delta.x, delta.y)]


def cone(direction: Direction, length: int) -> list[Position]:
    """
    Sector expanding from the origin toward direction.

    Layer k (1..length) along the primary axis holds every cell whose
    perpendicular distance j satisfies j < k, so a cardinal layer is 2k - 1
    cells wide and a cardinal cone holds length**2 cells.

    Diagonal cones are measured on a 45°-rotated lattice: with (u, v) the
    coordinates folded into the direction's quadrant, k = (u + v + 1) // 2 and
    j = |v - u| // 2. Their reach is round(length / sqrt(2)) so that diagonal
    and cardinal cones of the same length cover a similar Euclidean extent.
    The approximation is deliberate; it is not exactly symmetric for every
    length.
    """
    vec = DIRECTION_VECTORS[direction]
    cardinal = direction in CARDINAL_DIRECTIONS
    reach = length if cardinal else max(0, round(length / math.sqrt(2)))

    result: list[Position] = []
    bound = 2 * length
    for x in range(-bound, bound + 1):
        for y in range(-bound, bound + 1):
            if x == 0 and y == 0:
                continue
            if cardinal:
                k = x * vec.x + y * vec.y
                j = abs(x * vec.y - y * vec.x)
            else:
                u, v = x * vec.x, y * vec.y
                if u <= 0 or v <= 0:
                    continue
                k = (u + v + 1) // 2
                j = abs(v - u) // 2
            if 1 <= k <= reach and j < k:
                result.append(Position(x, y))
    return result
