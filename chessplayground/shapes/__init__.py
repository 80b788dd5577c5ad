"""
Shape DSL: JSON movement/attack patterns compiled to relative offsets.

    offsets = compile_shape(parse_shape_json(blueprint["movement"]))
"""

from __future__ import annotations

from chessplayground.shapes.compiler import compile_shape
from chessplayground.shapes.nodes import ShapeDefinitionError, ShapeNode
from chessplayground.shapes.parser import parse_shape, parse_shape_json

__all__ = [
    "ShapeDefinitionError",
    "ShapeNode",
    "compile_shape",
    "parse_shape",
    "parse_shape_json",
]
