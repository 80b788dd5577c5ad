import unittest

from chessplayground.position import Position
from chessplayground.shapes import compile_shape, parse_shape


def compile_raw(raw: dict) -> set[tuple[int, int]]:
    return {tuple(o) for o in compile_shape(parse_shape(raw))}


class CompileShapeTests(unittest.TestCase):
    def test_ray_north_one_step(self) -> None:
        self.assertEqual(compile_raw({"kind": "ray", "dirs": ["N"], "min": 1, "max": 1}), {(0, 1)})

    def test_knight_from_reflected_points(self) -> None:
        offsets = compile_raw({
            "kind": "reflect",
            "axis": "both",
            "shapes": [
                {"kind": "point", "delta": {"x": 1, "y": 2}},
                {"kind": "point", "delta": {"x": 2, "y": 1}},
            ],
        })
        self.assertEqual(
            offsets,
            {(1, 2), (-1, 2), (1, -2), (-1, -2), (2, 1), (-2, 1), (2, -1), (-2, -1)},
        )

    def test_reflect_keeps_originals(self) -> None:
        offsets = compile_raw({
            "kind": "reflect",
            "axis": "horizontal",
            "shapes": [{"kind": "point", "delta": {"x": 3, "y": 1}}],
        })
        self.assertEqual(offsets, {(3, 1), (-3, 1)})

    def test_subtract_ring(self) -> None:
        offsets = compile_raw({
            "kind": "subtract",
            "shapes": [{"kind": "square", "size": 2}, {"kind": "square", "size": 1}],
        })
        self.assertEqual(len(offsets), 16)
        self.assertNotIn((1, 1), offsets)

    def test_intersect_of_disjoint_shapes_is_empty(self) -> None:
        offsets = compile_raw({
            "kind": "intersect",
            "shapes": [
                {"kind": "ray", "dirs": ["N"], "min": 1, "max": 3},
                {"kind": "ray", "dirs": ["S"], "min": 1, "max": 3},
            ],
        })
        self.assertEqual(offsets, set())

    def test_union_of_cones_has_no_duplicates(self) -> None:
        compiled = compile_shape(parse_shape({
            "kind": "union",
            "shapes": [
                {"kind": "cone", "dir": "N", "length": 3},
                {"kind": "cone", "dir": "NE", "length": 3},
            ],
        }))
        self.assertEqual(len(compiled), len(set(compiled)))
        self.assertIn(Position(0, 3), compiled)
        self.assertIn(Position(3, 1), compiled)
