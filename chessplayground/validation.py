"""
Move and action legality.

Both checks are ordered gates; the first failing gate decides the outcome.

  Move:   bounds → not the source square → in movement shape →
          on_move_validate dispatch (not cancelled) → path clear unless an
          ability set ignore_path_blocking → destination empty

  Action: bounds → not an empty own square → in action shape →
          on_action_validate dispatch (not cancelled) → targeting rules
          (occupied target, self/ally/enemy flag) unless an ability set
          ignore_targeting_rules

check_move() / check_action_target() return a LegalityCheck naming the gate
that failed so callers can tell the user why. validate_move() and
validate_action_target() reduce that to a bool. A failed check is never an
exception; only a failing ability (AbilityError) propagates.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal, NamedTuple

from chessplayground.board import Board
from chessplayground.dispatcher import GameEventDispatcher
from chessplayground.events import (
    ALLOW_TARGET_ALLY,
    ALLOW_TARGET_ENEMY,
    ALLOW_TARGET_SELF,
    IGNORE_PATH_BLOCKING,
    IGNORE_TARGETING_RULES,
    EventContext,
    GameEventType,
)
from chessplayground.position import Position, path_between

if TYPE_CHECKING:
    from chessplayground.pieces import Piece

logger = logging.getLogger(__name__)

FailureReason = Literal[
    "off_board",
    "same_square",
    "not_in_shape",
    "cancelled",
    "path_blocked",
    "occupied",
    "empty_target",
    "self_target",
    "ally_target",
    "enemy_target",
]


class LegalityCheck(NamedTuple):
    legal: bool
    reason: FailureReason | Literal["ok"] = "ok"
    detail: str = ""

    def __bool__(self) -> bool:
        return self.legal


OK = LegalityCheck(True)


def _fail(reason: FailureReason, detail: str) -> LegalityCheck:
    return LegalityCheck(False, reason, detail)


class MoveValidator:
    def __init__(self, board: Board, dispatcher: GameEventDispatcher) -> None:
        self.board = board
        self.dispatcher = dispatcher

    # ------------------------------------------------------------------ #
    # Moves                                                                #
    # ------------------------------------------------------------------ #

    def validate_move(self, piece: Piece, to: Position) -> bool:
        return self.check_move(piece, to).legal

    def check_move(self, piece: Piece, to: Position) -> LegalityCheck:
        to = Position(*to)
        result = self._check_move(piece, to)
        if result.legal:
            logger.debug("Move valid: %s %s -> %s", piece.id, piece.position, to)
        else:
            logger.debug("Move invalid (%s): %s", result.reason, result.detail)
        return result

    def _check_move(self, piece: Piece, to: Position) -> LegalityCheck:
        origin = piece.position

        if not self.board.is_valid_position(to):
            return _fail("off_board", f"target {to} is off the board")
        if to == origin:
            return _fail("same_square", f"target {to} is the piece's own square")
        if to not in piece.potential_movement_targets():
            return _fail("not_in_shape", f"target {to} is not in {piece.name}'s movement shape")

        ctx = EventContext(
            GameEventType.ON_MOVE_VALIDATE,
            self.board,
            source_piece=piece,
            move_from=origin,
            move_to=to,
        )
        self.dispatcher.dispatch(GameEventType.ON_MOVE_VALIDATE, ctx)
        if ctx.cancelled:
            return _fail("cancelled", f"move of {piece.id} cancelled by an ability")

        if not ctx.flag_is_set(IGNORE_PATH_BLOCKING):
            for square in path_between(origin, to):
                if self.board.is_occupied(square):
                    return _fail("path_blocked", f"path blocked at {square}")

        # Moves never capture; attacks go through check_action_target.
        if self.board.is_occupied(to):
            return _fail("occupied", f"target {to} is occupied")

        return OK

    # ------------------------------------------------------------------ #
    # Actions                                                              #
    # ------------------------------------------------------------------ #

    def validate_action_target(self, piece: Piece, target: Position, action_name: str) -> bool:
        return self.check_action_target(piece, target, action_name).legal

    def check_action_target(self, piece: Piece, target: Position, action_name: str) -> LegalityCheck:
        target = Position(*target)
        result = self._check_action_target(piece, target, action_name)
        if result.legal:
            logger.debug("Action valid: %s %s -> %s", piece.id, action_name, target)
        else:
            logger.debug("Action invalid (%s): %s", result.reason, result.detail)
        return result

    def _check_action_target(self, piece: Piece, target: Position, action_name: str) -> LegalityCheck:
        origin = piece.position
        target_piece = self.board.get_piece_at(target)

        if not self.board.is_valid_position(target):
            return _fail("off_board", f"target {target} is off the board")
        if target == origin and target_piece is None:
            return _fail("empty_target", f"{piece.id} targets its own square but it is empty")
        if target not in piece.potential_action_targets():
            return _fail("not_in_shape", f"target {target} is not in {piece.name}'s {action_name} shape")

        ctx = EventContext(
            GameEventType.ON_ACTION_VALIDATE,
            self.board,
            source_piece=piece,
            target_piece=target_piece,
            move_from=origin,
            move_to=target,
            action_name=action_name,
        )
        self.dispatcher.dispatch(GameEventType.ON_ACTION_VALIDATE, ctx)
        if ctx.cancelled:
            return _fail("cancelled", f"{action_name} by {piece.id} cancelled by an ability")

        if ctx.flag_is_set(IGNORE_TARGETING_RULES):
            return OK

        if target_piece is None:
            return _fail("empty_target", f"target square {target} is empty")
        if target_piece is piece:
            if not ctx.flag_is_set(ALLOW_TARGET_SELF):
                return _fail("self_target", f"{piece.id} cannot {action_name} itself")
        elif target_piece.team == piece.team:
            if not ctx.flag_is_set(ALLOW_TARGET_ALLY):
                return _fail("ally_target", f"{piece.id} cannot {action_name} ally {target_piece.id}")
        elif not ctx.flag_is_set(ALLOW_TARGET_ENEMY):
            return _fail("enemy_target", f"{piece.id} cannot {action_name} enemy {target_piece.id}")

        return OK
