import io
import unittest
from unittest.mock import DEFAULT, patch

from rich.console import Console

from chessplayground.abilities import create_default_registry
from chessplayground.board import Board
from chessplayground.cli import commands, display
from chessplayground.engine import GameEngine
from chessplayground.outcomes import MoveApplied, Rejected
from chessplayground.pieces import PieceBlueprint
from chessplayground.position import Position

PAWN = PieceBlueprint.from_dict({
    "name": "Pawn",
    "emoji": "♟",
    "movement": {"kind": "ray", "dirs": ["N"], "min": 1, "max": 1},
    "attack": {"kind": "ray", "dirs": ["NE", "NW"], "min": 1, "max": 1},
})


class HandleCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = GameEngine(Board(8, 8), create_default_registry())
        self.pawn = self.engine.add_piece(PAWN, "white", Position(0, 1))
        self.engine.start_game("white")
        patcher = patch.multiple(
            commands,
            display_board=DEFAULT,
            display_error=DEFAULT,
            display_help=DEFAULT,
            display_offsets=DEFAULT,
            display_outcome=DEFAULT,
            display_pattern=DEFAULT,
        )
        self.display = patcher.start()
        self.addCleanup(patcher.stop)

    def test_exit_stops_the_loop(self) -> None:
        self.assertFalse(commands.handle_command(self.engine, "exit"))

    def test_blank_line_is_ignored(self) -> None:
        self.assertTrue(commands.handle_command(self.engine, "   "))
        self.display["display_help"].assert_not_called()

    def test_move_reports_outcome_and_redraws(self) -> None:
        self.assertTrue(commands.handle_command(self.engine, "move 0 1 0 2"))
        [outcome] = self.display["display_outcome"].call_args.args
        self.assertIsInstance(outcome, MoveApplied)
        self.display["display_board"].assert_called_once()

    def test_illegal_attack_is_reported_as_rejection(self) -> None:
        commands.handle_command(self.engine, "attack 0 1 1 2")
        [outcome] = self.display["display_outcome"].call_args.args
        self.assertIsInstance(outcome, Rejected)
        self.assertEqual(outcome.reason, "empty_target")

    def test_move_from_empty_square(self) -> None:
        commands.handle_command(self.engine, "move 5 5 5 6")
        self.display["display_error"].assert_called_once()

    def test_showmove_highlights_movement_targets(self) -> None:
        commands.handle_command(self.engine, "showmove 0 1")
        _, piece, targets, marker = self.display["display_pattern"].call_args.args
        self.assertIs(piece, self.pawn)
        self.assertEqual(targets, [Position(0, 2)])
        self.assertEqual(marker, "M")

    def test_showattack_uses_action_marker(self) -> None:
        commands.handle_command(self.engine, "showattack 0 1")
        self.assertEqual(self.display["display_pattern"].call_args.args[3], "A")

    def test_malformed_coordinates_show_help(self) -> None:
        commands.handle_command(self.engine, "move 0 one 0 2")
        self.display["display_help"].assert_called_once()

    def test_unknown_command_shows_help(self) -> None:
        commands.handle_command(self.engine, "castle")
        self.display["display_help"].assert_called_once()

    def test_legal_shows_validated_moves_and_targets(self) -> None:
        self.engine.add_piece(PAWN, "white", Position(0, 2))
        commands.handle_command(self.engine, "legal 0 1")
        move_call, attack_call = self.display["display_pattern"].call_args_list
        self.assertEqual(move_call.args[2:], ([], "M"))
        self.assertEqual(attack_call.args[2:], ([], "A"))

    def test_legal_lists_capturable_enemies(self) -> None:
        enemy = self.engine.add_piece(PAWN, "black", Position(1, 2))
        commands.handle_command(self.engine, "legal 0 1")
        move_call, attack_call = self.display["display_pattern"].call_args_list
        self.assertEqual(move_call.args[2], [Position(0, 2)])
        self.assertEqual(attack_call.args[2], [enemy.position])

    def test_pattern_shows_raw_offsets(self) -> None:
        commands.handle_command(self.engine, "pattern 0 1")
        self.display["display_offsets"].assert_called_once_with(self.pawn)


class DisplayOffsetsTests(unittest.TestCase):
    def test_renders_both_offset_grids(self) -> None:
        buffer = io.StringIO()
        piece = GameEngine(Board(8, 8), create_default_registry()).add_piece(PAWN, "white", Position(0, 1))
        with patch.object(display, "console", Console(file=buffer, width=120, legacy_windows=False)):
            display.display_offsets(piece)
        output = buffer.getvalue()
        self.assertIn("Pawn movement offsets", output)
        self.assertIn("Pawn attack offsets", output)
        self.assertIn("■", output)
