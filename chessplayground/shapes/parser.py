"""
Shape JSON → ShapeNode.

parse_shape() validates untyped data (the result of json.loads, or a dict
literal in a test) and returns a fully-typed ShapeNode tree. Validation is
fail-fast: the first bad field raises ShapeDefinitionError naming its path,
e.g. "shape.shapes[1].radius", and no partial tree is ever returned.

Example:
    node = parse_shape_json('{"kind": "ray", "dirs": ["N"], "min": 1, "max": 3}')
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from chessplayground.position import ALL_DIRECTIONS, Direction, Position
from chessplayground.shapes.nodes import (
    ALL_AXES,
    CircleNode,
    ConeNode,
    IntersectNode,
    PointNode,
    RayNode,
    ReflectNode,
    ShapeDefinitionError,
    ShapeNode,
    SquareNode,
    SubtractNode,
    UnionNode,
)


def parse_shape_json(raw: str | bytes | Mapping[str, Any]) -> ShapeNode:
    """Parse shape JSON text (or already-decoded data) into a ShapeNode."""
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ShapeDefinitionError("shape", f"invalid JSON ({exc.msg})") from exc
        except UnicodeDecodeError as exc:
            raise ShapeDefinitionError("shape", f"undecodable JSON bytes ({exc.reason})") from exc
    return parse_shape(raw)


def parse_shape(raw: Any, path: str = "shape") -> ShapeNode:
    if not isinstance(raw, Mapping):
        raise ShapeDefinitionError(path, f"shape node must be an object, got {type(raw).__name__}")
    kind = raw.get("kind")
    if not isinstance(kind, str):
        raise ShapeDefinitionError(f"{path}.kind", 'missing "kind" string')

    match kind:
        case "circle":
            return CircleNode(radius=_int_field(raw, "radius", path, minimum=0))
        case "square":
            return SquareNode(size=_int_field(raw, "size", path, minimum=0))
        case "ray":
            dirs = _directions(raw.get("dirs"), f"{path}.dirs")
            lo = _int_field(raw, "min", path, minimum=1)
            hi = _int_field(raw, "max", path, minimum=1)
            if hi < lo:
                raise ShapeDefinitionError(f"{path}.max", f"must be >= min ({lo}), got {hi}")
            return RayNode(dirs=dirs, min=lo, max=hi)
        case "point":
            delta = raw.get("delta")
            if not isinstance(delta, Mapping):
                raise ShapeDefinitionError(f"{path}.delta", "must be an object {x, y}")
            return PointNode(
                delta=Position(
                    _int_field(delta, "x", f"{path}.delta"),
                    _int_field(delta, "y", f"{path}.delta"),
                )
            )
        case "cone":
            direction = raw.get("dir")
            if direction not in ALL_DIRECTIONS:
                raise ShapeDefinitionError(
                    f"{path}.dir", f"must be one of {','.join(ALL_DIRECTIONS)}, got {direction!r}"
                )
            return ConeNode(dir=direction, length=_int_field(raw, "length", path, minimum=1))
        case "union":
            return UnionNode(shapes=_children(raw, path, minimum=1))
        case "intersect":
            return IntersectNode(shapes=_children(raw, path, minimum=1))
        case "subtract":
            base, *cutters = _children(raw, path, minimum=2)
            return SubtractNode(base=base, cutters=tuple(cutters))
        case "reflect":
            axis = raw.get("axis")
            if axis not in ALL_AXES:
                raise ShapeDefinitionError(
                    f"{path}.axis", f"must be one of {','.join(ALL_AXES)}, got {axis!r}"
                )
            return ReflectNode(axis=axis, shapes=_children(raw, path, minimum=1))
        case _:
            raise ShapeDefinitionError(f"{path}.kind", f'unknown shape kind "{kind}"')


# --------------------------------------------------------------------------- #
# Field helpers                                                                #
# --------------------------------------------------------------------------- #

def _int_field(raw: Mapping[str, Any], name: str, path: str, minimum: int | None = None) -> int:
    value = raw.get(name)
    field_path = f"{path}.{name}"
    # bool is an int subclass; true/false is never a valid distance.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ShapeDefinitionError(field_path, f"must be a number, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ShapeDefinitionError(field_path, f"must be a whole number, got {value!r}")
        value = int(value)
    if minimum is not None and value < minimum:
        raise ShapeDefinitionError(field_path, f"must be >= {minimum}, got {value}")
    return value


def _directions(value: Any, path: str) -> tuple[Direction, ...]:
    if not isinstance(value, list) or not value:
        raise ShapeDefinitionError(path, "must be a non-empty array of directions")
    dirs: dict[Direction, None] = {}
    for i, d in enumerate(value):
        if d not in ALL_DIRECTIONS:
            raise ShapeDefinitionError(
                f"{path}[{i}]", f"must be one of {','.join(ALL_DIRECTIONS)}, got {d!r}"
            )
        dirs.setdefault(d, None)
    return tuple(dirs)


def _children(raw: Mapping[str, Any], path: str, minimum: int) -> tuple[ShapeNode, ...]:
    shapes = raw.get("shapes")
    kind = raw["kind"]
    if not isinstance(shapes, list) or len(shapes) < minimum:
        noun = "node" if minimum == 1 else "nodes"
        raise ShapeDefinitionError(
            f"{path}.shapes", f"{kind} needs an array of at least {minimum} {noun}"
        )
    return tuple(parse_shape(child, f"{path}.shapes[{i}]") for i, child in enumerate(shapes))
