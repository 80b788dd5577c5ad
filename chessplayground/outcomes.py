"""
Typed outcome records — the shared language between the engine and any consumer.

GameEngine operations return these instead of printing. The CLI (cli/display.py)
or a test consumes them. All records are frozen and can be serialised with
dataclasses.asdict().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from chessplayground.pieces import Team
from chessplayground.position import Position

RejectionReason = Literal[
    # Engine-level gates
    "unknown_piece",
    "not_your_turn",
    "not_started",
    "game_over",
    # Validator gates (see validation.FailureReason)
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


@dataclass(frozen=True)
class GameStarted:
    first_team: Team
    piece_count: int
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class MoveApplied:
    piece_id: str
    piece_name: str
    team: Team
    from_pos: Position
    to_pos: Position
    turn_number: int


@dataclass(frozen=True)
class ActionApplied:
    piece_id: str
    action_name: str
    target: Position
    target_piece_id: str | None
    captured: bool
    turn_number: int


@dataclass(frozen=True)
class Rejected:
    command: Literal["move", "action"]
    piece_id: str
    target: Position
    reason: RejectionReason
    detail: str = ""


@dataclass(frozen=True)
class GameOver:
    winning_team: Team
    losing_team: Team
    turn_number: int
    timestamp: datetime = field(default_factory=datetime.now)


# Union type for type-safe pattern matching in consumers
Outcome = GameStarted | MoveApplied | ActionApplied | Rejected | GameOver
