import unittest

from chessplayground.position import Position, flip_vertical, path_between


class PositionTests(unittest.TestCase):
    def test_add_translates_by_offset(self) -> None:
        self.assertEqual(Position(2, 3) + Position(1, -1), Position(3, 2))
        self.assertIsInstance(Position(0, 0) + (1, 1), Position)

    def test_str_is_compact(self) -> None:
        self.assertEqual(str(Position(-1, 4)), "(-1,4)")

    def test_position_hashes_like_a_tuple(self) -> None:
        self.assertIn((1, 2), {Position(1, 2)})


class PathBetweenTests(unittest.TestCase):
    def test_vertical_path_excludes_endpoints(self) -> None:
        self.assertEqual(
            path_between(Position(0, 0), Position(0, 3)),
            [Position(0, 1), Position(0, 2)],
        )

    def test_diagonal_path(self) -> None:
        self.assertEqual(
            path_between(Position(3, 3), Position(0, 0)),
            [Position(2, 2), Position(1, 1)],
        )

    def test_adjacent_squares_have_no_path(self) -> None:
        self.assertEqual(path_between(Position(0, 0), Position(1, 1)), [])

    def test_knight_hop_has_no_path(self) -> None:
        self.assertEqual(path_between(Position(0, 0), Position(1, 2)), [])


class FlipVerticalTests(unittest.TestCase):
    def test_negates_y_only(self) -> None:
        self.assertEqual(
            flip_vertical([Position(1, 2), Position(-1, 0)]),
            [Position(1, -2), Position(-1, 0)],
        )
