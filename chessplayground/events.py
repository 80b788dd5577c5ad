"""
Game event kinds and the per-dispatch EventContext.

An EventContext is built fresh for every dispatch, handed by reference to each
listener in priority order, and thrown away once the caller has read it back.
Listeners communicate through it:

  cancel()          — one-way; stops the remaining listeners and fails the check
  validation flags  — named values the validator reads after dispatch
  payload           — free-form scratchpad shared by listeners and the caller

The identity fields (event type, pieces, board, squares, action) are fixed at
construction and exposed read-only.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

from chessplayground.position import Position

if TYPE_CHECKING:
    from chessplayground.board import Board
    from chessplayground.pieces import Piece


class GameEventType(str, Enum):
    ON_MOVE_START = "on_move_start"
    ON_MOVE_END = "on_move_end"
    ON_MOVE_VALIDATE = "on_move_validate"
    ON_CAPTURE = "on_capture"
    ON_ACTION_START = "on_action_start"
    ON_ACTION_END = "on_action_end"
    ON_ACTION_VALIDATE = "on_action_validate"
    ON_GAME_START = "on_game_start"
    ON_GAME_OVER = "on_game_over"
    ON_TURN_START = "on_turn_start"


# Validation flag names
IGNORE_PATH_BLOCKING = "ignore_path_blocking"
ALLOW_TARGET_SELF = "allow_target_self"
ALLOW_TARGET_ALLY = "allow_target_ally"
ALLOW_TARGET_ENEMY = "allow_target_enemy"
IGNORE_TARGETING_RULES = "ignore_targeting_rules"

_DEFAULT_FLAGS: dict[GameEventType, dict[str, Any]] = {
    GameEventType.ON_MOVE_VALIDATE: {
        IGNORE_PATH_BLOCKING: False,
    },
    GameEventType.ON_ACTION_VALIDATE: {
        ALLOW_TARGET_SELF: False,
        ALLOW_TARGET_ALLY: False,
        ALLOW_TARGET_ENEMY: True,
        IGNORE_TARGETING_RULES: False,
    },
}


def default_flags(event_type: GameEventType) -> dict[str, Any]:
    """A fresh copy of the flags a context of this kind starts with."""
    return dict(_DEFAULT_FLAGS.get(event_type, {}))


class EventContext:
    """Mutable record shared by every listener of one dispatch."""

    def __init__(
        self,
        event_type: GameEventType,
        board: Board,
        source_piece: Piece | None = None,
        target_piece: Piece | None = None,
        move_from: Position | None = None,
        move_to: Position | None = None,
        action_name: str | None = None,
        action_params: Mapping[str, Any] | None = None,
    ) -> None:
        self._event_type = event_type
        self._board = board
        self._source_piece = source_piece
        self._target_piece = target_piece
        self._move_from = move_from
        self._move_to = move_to
        self._action_name = action_name
        self._action_params = dict(action_params or {})
        self._cancelled = False
        self.validation_flags: dict[str, Any] = default_flags(event_type)
        self.payload: dict[str, Any] = {}

    # ------------------------------------------------------------------ #
    # Identity (read-only)                                                #
    # ------------------------------------------------------------------ #

    @property
    def event_type(self) -> GameEventType:
        return self._event_type

    @property
    def board(self) -> Board:
        return self._board

    @property
    def source_piece(self) -> Piece | None:
        return self._source_piece

    @property
    def target_piece(self) -> Piece | None:
        return self._target_piece

    @property
    def move_from(self) -> Position | None:
        return self._move_from

    @property
    def move_to(self) -> Position | None:
        return self._move_to

    @property
    def action_name(self) -> str | None:
        return self._action_name

    @property
    def action_params(self) -> Mapping[str, Any]:
        return self._action_params

    # ------------------------------------------------------------------ #
    # Cancellation and flags                                              #
    # ------------------------------------------------------------------ #

    def cancel(self) -> None:
        """Mark the event cancelled. There is no way back."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def get_validation_flag(self, name: str, default: Any = None) -> Any:
        return self.validation_flags.get(name, default)

    def set_validation_flag(self, name: str, value: Any) -> None:
        self.validation_flags[name] = value

    def flag_is_set(self, name: str) -> bool:
        """True only when the flag holds exactly True."""
        return self.validation_flags.get(name) is True

    def __repr__(self) -> str:
        return (
            f"EventContext({self._event_type.value}, from={self._move_from}, "
            f"to={self._move_to}, cancelled={self._cancelled})"
        )
