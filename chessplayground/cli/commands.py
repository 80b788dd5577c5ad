"""
Text command handling for the interactive loop.

handle_command() parses one line, drives the engine and hands whatever comes
back to cli/display.py. It returns False when the user asked to exit.
"""

from __future__ import annotations

import logging

from chessplayground.cli.display import (
    display_board,
    display_error,
    display_help,
    display_offsets,
    display_outcome,
    display_pattern,
)
from chessplayground.dispatcher import AbilityError
from chessplayground.engine import GameEngine
from chessplayground.position import Position

logger = logging.getLogger(__name__)


def _parse_ints(parts: list[str], count: int) -> list[int] | None:
    if len(parts) != count:
        return None
    try:
        return [int(p) for p in parts]
    except ValueError:
        return None


def handle_command(engine: GameEngine, line: str) -> bool:
    parts = line.strip().split()
    if not parts:
        return True
    action, args = parts[0].lower(), parts[1:]

    match action:
        case "exit" | "quit":
            return False
        case "move" | "attack":
            coords = _parse_ints(args, 4)
            if coords is None:
                display_help()
                return True
            source = Position(coords[0], coords[1])
            target = Position(coords[2], coords[3])
            piece = engine.board.get_piece_at(source)
            if piece is None:
                display_error(f"No piece at {source}.")
                return True
            try:
                if action == "move":
                    outcomes = engine.move_piece(piece.id, target)
                else:
                    outcomes = engine.perform_action(piece.id, target, "attack")
            except AbilityError as exc:
                logger.exception("Ability failure while handling %r", line)
                display_error(str(exc))
                return True
            for outcome in outcomes:
                display_outcome(outcome)
            display_board(engine.board, engine.current_team, engine.turn_number)
        case "showmove" | "showattack" | "legal" | "pattern":
            coords = _parse_ints(args, 2)
            if coords is None:
                display_help()
                return True
            pos = Position(coords[0], coords[1])
            piece = engine.board.get_piece_at(pos)
            if piece is None:
                display_error(f"No piece at {pos}.")
                return True
            match action:
                case "showmove":
                    display_pattern(engine.board, piece, piece.potential_movement_targets(), "M")
                case "showattack":
                    display_pattern(engine.board, piece, piece.potential_action_targets(), "A")
                case "legal":
                    try:
                        moves = engine.legal_moves(piece)
                        targets = engine.legal_action_targets(piece)
                    except AbilityError as exc:
                        logger.exception("Ability failure while handling %r", line)
                        display_error(str(exc))
                        return True
                    display_pattern(engine.board, piece, moves, "M")
                    display_pattern(engine.board, piece, targets, "A")
                case "pattern":
                    display_offsets(piece)
        case _:
            display_help()
    return True
