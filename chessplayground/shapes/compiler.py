"""
ShapeNode → flat list of offsets.

compile_shape() walks the tree bottom-up, delegating leaves to the primitives
and composites to the combinators. The match over ShapeNode is exhaustive;
assert_never makes a forgotten variant a type error rather than a silently
empty shape.
"""

from __future__ import annotations

from typing import assert_never

from chessplayground.position import Position
from chessplayground.shapes import combinators, primitives
from chessplayground.shapes.nodes import (
    CircleNode,
    ConeNode,
    IntersectNode,
    PointNode,
    RayNode,
    ReflectNode,
    ShapeNode,
    SquareNode,
    SubtractNode,
    UnionNode,
)


def compile_shape(node: ShapeNode) -> list[Position]:
    match node:
        case CircleNode(radius=radius):
            return primitives.circle(radius)
        case SquareNode(size=size):
            return primitives.square(size)
        case RayNode(dirs=dirs, min=lo, max=hi):
            return primitives.ray(dirs, lo, hi)
        case PointNode(delta=delta):
            return primitives.point(delta)
        case ConeNode(dir=direction, length=length):
            return primitives.cone(direction, length)
        case UnionNode(shapes=shapes):
            return combinators.union(*map(compile_shape, shapes))
        case IntersectNode(shapes=shapes):
            return combinators.intersect(*map(compile_shape, shapes))
        case SubtractNode(base=base, cutters=cutters):
            return combinators.subtract(compile_shape(base), *map(compile_shape, cutters))
        case ReflectNode(axis=axis, shapes=shapes):
            # Both the mirrored and the original members end up in the result.
            children = [compile_shape(s) for s in shapes]
            reflected = combinators.reflect(combinators.union(*children), axis)
            return combinators.union(reflected, *children)
        case _:
            assert_never(node)
