import itertools
import unittest

from chessplayground.position import ALL_DIRECTIONS, DIRECTION_VECTORS, Position
from chessplayground.shapes.primitives import circle, cone, point, ray, square


def as_set(offsets: list[Position]) -> set[tuple[int, int]]:
    return {tuple(o) for o in offsets}


class CircleTests(unittest.TestCase):
    def test_radius_one_is_orthogonal_neighbours(self) -> None:
        self.assertEqual(as_set(circle(1)), {(1, 0), (-1, 0), (0, 1), (0, -1)})

    def test_radius_two_counts_manhattan_disk_without_origin(self) -> None:
        self.assertEqual(len(circle(2)), 12)
        self.assertNotIn(Position(0, 0), circle(2))

    def test_radius_zero_is_empty(self) -> None:
        self.assertEqual(circle(0), [])

    def test_size_and_membership_for_every_radius(self) -> None:
        for r in range(0, 10):
            with self.subTest(radius=r):
                offsets = circle(r)
                self.assertEqual(len(offsets), 2 * r * r + 2 * r)
                self.assertEqual(len(set(offsets)), len(offsets))
                for dx, dy in offsets:
                    self.assertLessEqual(abs(dx) + abs(dy), r)
                    self.assertNotEqual((dx, dy), (0, 0))


class SquareTests(unittest.TestCase):
    def test_size_one_is_all_eight_neighbours(self) -> None:
        offsets = square(1)
        self.assertEqual(len(offsets), 8)
        self.assertEqual(len(set(offsets)), 8)
        self.assertNotIn(Position(0, 0), offsets)

    def test_size_two(self) -> None:
        self.assertEqual(len(square(2)), 24)

    def test_size_and_membership_for_every_size(self) -> None:
        for s in range(0, 10):
            with self.subTest(size=s):
                offsets = square(s)
                self.assertEqual(len(offsets), (2 * s + 1) ** 2 - 1)
                self.assertEqual(len(set(offsets)), len(offsets))
                for dx, dy in offsets:
                    self.assertLessEqual(max(abs(dx), abs(dy)), s)


class RayTests(unittest.TestCase):
    def test_single_step_north(self) -> None:
        self.assertEqual(ray(["N"], 1, 1), [Position(0, 1)])

    def test_min_distance_skips_near_squares(self) -> None:
        self.assertEqual(ray(["E"], 2, 4), [Position(2, 0), Position(3, 0), Position(4, 0)])

    def test_diagonals_step_both_axes(self) -> None:
        self.assertEqual(as_set(ray(["NE", "SW"], 1, 2)), {(1, 1), (2, 2), (-1, -1), (-2, -2)})

    def test_size_and_members_for_direction_subsets(self) -> None:
        bounds = [(1, 1), (1, 4), (2, 5), (3, 3), (1, 8)]
        for size in (1, 2, 3):
            for dirs in itertools.combinations(ALL_DIRECTIONS, size):
                for lo, hi in bounds:
                    with self.subTest(dirs=dirs, min=lo, max=hi):
                        offsets = ray(dirs, lo, hi)
                        self.assertEqual(len(offsets), len(dirs) * (hi - lo + 1))
                        expected = {
                            (DIRECTION_VECTORS[d].x * k, DIRECTION_VECTORS[d].y * k)
                            for d in dirs
                            for k in range(lo, hi + 1)
                        }
                        self.assertEqual(as_set(offsets), expected)

    def test_repeated_directions_are_counted_once(self) -> None:
        offsets = ray(["N", "E", "N"], 2, 5)
        self.assertEqual(len(offsets), 8)
        self.assertEqual(len(set(offsets)), 8)


class PointTests(unittest.TestCase):
    def test_point_returns_exactly_its_delta(self) -> None:
        self.assertEqual(point(Position(1, 2)), [Position(1, 2)])

    def test_origin_is_allowed(self) -> None:
        self.assertEqual(point(Position(0, 0)), [Position(0, 0)])


class ConeTests(unittest.TestCase):
    def test_north_cone_of_three_has_nine_cells(self) -> None:
        self.assertEqual(
            as_set(cone("N", 3)),
            {
                (0, 1),
                (-1, 2), (0, 2), (1, 2),
                (-2, 3), (-1, 3), (0, 3), (1, 3), (2, 3),
            },
        )

    def test_cardinal_cone_size_is_length_squared(self) -> None:
        for direction in ("N", "E", "S", "W"):
            self.assertEqual(len(cone(direction, 4)), 16, direction)

    def test_south_cone_mirrors_north(self) -> None:
        self.assertEqual(as_set(cone("S", 3)), {(x, -y) for x, y in as_set(cone("N", 3))})

    def test_northeast_cone_of_three(self) -> None:
        self.assertEqual(
            as_set(cone("NE", 3)),
            {(1, 1), (1, 2), (2, 1), (2, 2), (1, 3), (3, 1)},
        )

    def test_southeast_cone_of_three(self) -> None:
        self.assertEqual(
            as_set(cone("SE", 3)),
            {(1, -1), (1, -2), (2, -1), (2, -2), (1, -3), (3, -1)},
        )

    def test_northwest_cone_of_three(self) -> None:
        self.assertEqual(
            as_set(cone("NW", 3)),
            {(-1, 1), (-1, 2), (-2, 1), (-2, 2), (-1, 3), (-3, 1)},
        )

    def test_southwest_cone_of_three(self) -> None:
        self.assertEqual(
            as_set(cone("SW", 3)),
            {(-1, -1), (-1, -2), (-2, -1), (-2, -2), (-1, -3), (-3, -1)},
        )

    def test_diagonal_cone_stays_in_its_quadrant(self) -> None:
        for x, y in cone("SW", 5):
            self.assertLess(x, 0)
            self.assertLess(y, 0)

    def test_cone_never_contains_origin(self) -> None:
        for direction in ("N", "NE", "E", "SE", "S", "SW", "W", "NW"):
            self.assertNotIn(Position(0, 0), cone(direction, 3))
