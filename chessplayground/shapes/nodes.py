"""
Shape AST — one frozen dataclass per DSL node kind.

The parser produces these from blueprint JSON; the compiler consumes them.
ShapeNode is a closed union so the compiler's match statement can be checked
for exhaustiveness.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from chessplayground.position import Direction, Position

Axis = Literal["horizontal", "vertical", "both"]
ALL_AXES: tuple[Axis, ...] = ("horizontal", "vertical", "both")


class ShapeDefinitionError(ValueError):
    """Raised when shape JSON is malformed or a field is out of range."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


@dataclass(frozen=True)
class CircleNode:
    radius: int
    kind: Literal["circle"] = "circle"


@dataclass(frozen=True)
class SquareNode:
    size: int
    kind: Literal["square"] = "square"


@dataclass(frozen=True)
class RayNode:
    dirs: tuple[Direction, ...]
    min: int
    max: int
    kind: Literal["ray"] = "ray"


@dataclass(frozen=True)
class PointNode:
    delta: Position
    kind: Literal["point"] = "point"


@dataclass(frozen=True)
class ConeNode:
    dir: Direction
    length: int
    kind: Literal["cone"] = "cone"


@dataclass(frozen=True)
class UnionNode:
    shapes: tuple[ShapeNode, ...]
    kind: Literal["union"] = "union"


@dataclass(frozen=True)
class IntersectNode:
    shapes: tuple[ShapeNode, ...]
    kind: Literal["intersect"] = "intersect"


@dataclass(frozen=True)
class SubtractNode:
    base: ShapeNode
    cutters: tuple[ShapeNode, ...]
    kind: Literal["subtract"] = "subtract"


@dataclass(frozen=True)
class ReflectNode:
    axis: Axis
    shapes: tuple[ShapeNode, ...]
    kind: Literal["reflect"] = "reflect"


ShapeNode = (
    CircleNode
    | SquareNode
    | RayNode
    | PointNode
    | ConeNode
    | UnionNode
    | IntersectNode
    | SubtractNode
    | ReflectNode
)
