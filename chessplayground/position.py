"""
Grid coordinates, compass directions and the small geometric helpers the
rest of the engine shares.

A Position is used both for absolute board squares and for offsets relative
to a piece (the shape DSL produces offsets; pieces translate them). +y is
north, so a white piece at (0, 0) moving "N" goes to (0, 1).
"""

from __future__ import annotations

from typing import Iterable, Literal, NamedTuple


class Position(NamedTuple):
    x: int
    y: int

    def __add__(self, other: object) -> Position:  # type: ignore[override]
        if not isinstance(other, tuple) or len(other) != 2:
            return NotImplemented
        return Position(self.x + other[0], self.y + other[1])

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


Direction = Literal["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

ALL_DIRECTIONS: tuple[Direction, ...] = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
CARDINAL_DIRECTIONS: tuple[Direction, ...] = ("N", "E", "S", "W")

DIRECTION_VECTORS: dict[Direction, Position] = {
    "N": Position(0, 1),
    "NE": Position(1, 1),
    "E": Position(1, 0),
    "SE": Position(1, -1),
    "S": Position(0, -1),
    "SW": Position(-1, -1),
    "W": Position(-1, 0),
    "NW": Position(-1, 1),
}


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def path_between(start: Position, end: Position) -> list[Position]:
    """
    Squares strictly between start and end along a straight line.

    Only horizontal, vertical and diagonal displacements have a path. Anything
    else (knight hops, arbitrary point offsets) returns an empty list, as do
    adjacent squares.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    if not (dx == 0 or dy == 0 or abs(dx) == abs(dy)):
        return []

    step_x, step_y = _sign(dx), _sign(dy)
    path: list[Position] = []
    x, y = start.x + step_x, start.y + step_y
    while (x, y) != (end.x, end.y):
        path.append(Position(x, y))
        x += step_x
        y += step_y
    return path


def flip_vertical(offsets: Iterable[Position]) -> list[Position]:
    """Mirror offsets across the x axis: (x, y) -> (x, -y)."""
    return [Position(o.x, -o.y) for o in offsets]
