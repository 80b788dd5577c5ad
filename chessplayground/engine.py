"""
Game engine — the orchestrator around the board, the dispatcher and the validator.

This module is UI-agnostic. Operations return lists of typed Outcome records
and never print; cli/display.py renders them.

Usage:
    engine = GameEngine(Board(8, 8), create_default_registry())
    engine.add_piece(blueprints["rook"], "white", Position(0, 0))
    engine.start_game("white")
    for outcome in engine.move_piece(rook.id, Position(0, 5)):
        display_outcome(outcome)

An exception raised by an ability during any dispatch (AbilityError) is not
caught here. It aborts the whole operation; stages already completed (for
example a dispatched on_move_start) are not rolled back, but the board is only
mutated after validation succeeds.
"""

from __future__ import annotations

import logging
from typing import Iterable, Literal

from chessplayground.abilities import AbilityRegistry
from chessplayground.board import Board
from chessplayground.dispatcher import GameEventDispatcher
from chessplayground.events import EventContext, GameEventType
from chessplayground.outcomes import (
    ActionApplied,
    GameOver,
    GameStarted,
    MoveApplied,
    Outcome,
    Rejected,
)
from chessplayground.pieces import TEAMS, Piece, PieceBlueprint, PieceFactory, Team
from chessplayground.position import Position
from chessplayground.status_effects import (
    StatusEffectDefinition,
    StatusEffectFactory,
    StatusEffectInstance,
)
from chessplayground.validation import MoveValidator

logger = logging.getLogger(__name__)


def other_team(team: Team) -> Team:
    return "black" if team == "white" else "white"


class GameEngine:
    def __init__(
        self,
        board: Board,
        registry: AbilityRegistry,
        dispatcher: GameEventDispatcher | None = None,
    ) -> None:
        self.board = board
        self.registry = registry
        self.dispatcher = dispatcher or GameEventDispatcher()
        self.validator = MoveValidator(board, self.dispatcher)
        self._piece_factory = PieceFactory(registry)
        self._status_factory = StatusEffectFactory(registry, self.dispatcher)
        self._pieces: dict[str, Piece] = {}
        self.current_team: Team | None = None
        self.turn_number = 0
        self.winner: Team | None = None

    # ------------------------------------------------------------------ #
    # Setup                                                                #
    # ------------------------------------------------------------------ #

    def add_piece(self, blueprint: PieceBlueprint, team: Team, position: Position) -> Piece:
        """
        Create a piece, place it and subscribe its abilities.

        Raises:
            ShapeDefinitionError, AbilityNotRegisteredError: the blueprint is
                unusable; nothing is placed or subscribed.
            ValueError: position is off the board.
        """
        piece = self._piece_factory.create_piece(blueprint, team, position)
        self.board.place_piece(piece, piece.position)
        for ability in piece.abilities:
            self.dispatcher.subscribe_ability(ability)
        self._pieces[piece.id] = piece
        logger.debug("Added %s at %s", piece.id, piece.position)
        return piece

    def setup(self, blueprints: dict[str, PieceBlueprint], layout: Iterable[tuple[str, Team, Position]]) -> None:
        """Place every (blueprint name, team, square) entry; unknown names raise KeyError."""
        for name, team, position in layout:
            if name not in blueprints:
                raise KeyError(f"Layout references unknown blueprint '{name}'")
            self.add_piece(blueprints[name], team, position)

    def remove_piece(self, piece_id: str) -> Piece:
        piece = self._pieces.pop(piece_id)
        for ability in piece.abilities:
            self.dispatcher.unsubscribe_ability(ability)
        piece.clear_status_effects()
        self.board.remove_piece(piece.position)
        return piece

    def start_game(self, first_team: Team = "white") -> GameStarted:
        if first_team not in TEAMS:
            raise ValueError(f"first_team must be one of {TEAMS}, got {first_team!r}")
        self.current_team = first_team
        self.turn_number = 1
        self.winner = None
        self.dispatcher.dispatch(GameEventType.ON_GAME_START, EventContext(GameEventType.ON_GAME_START, self.board))
        self.dispatcher.dispatch(GameEventType.ON_TURN_START, EventContext(GameEventType.ON_TURN_START, self.board))
        logger.info("Game started with %d pieces, %s to move", len(self._pieces), first_team)
        return GameStarted(first_team=first_team, piece_count=len(self._pieces))

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    def get_piece(self, piece_id: str) -> Piece | None:
        return self._pieces.get(piece_id)

    def pieces(self) -> list[Piece]:
        return list(self._pieces.values())

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def legal_moves(self, piece: Piece) -> list[Position]:
        """Every square the piece could legally move to right now."""
        return [p for p in piece.potential_movement_targets() if self.validator.validate_move(piece, p)]

    def legal_action_targets(self, piece: Piece, action_name: str = "attack") -> list[Position]:
        return [
            p for p in piece.potential_action_targets()
            if self.validator.validate_action_target(piece, p, action_name)
        ]

    # ------------------------------------------------------------------ #
    # Commands                                                             #
    # ------------------------------------------------------------------ #

    def move_piece(self, piece_id: str, to: Position) -> list[Outcome]:
        to = Position(*to)
        piece_or_rejection = self._command_piece("move", piece_id, to)
        if isinstance(piece_or_rejection, Rejected):
            return [piece_or_rejection]
        piece = piece_or_rejection
        origin = piece.position

        start = EventContext(GameEventType.ON_MOVE_START, self.board, source_piece=piece, move_from=origin, move_to=to)
        self.dispatcher.dispatch(GameEventType.ON_MOVE_START, start)
        if start.cancelled:
            return [Rejected("move", piece_id, to, "cancelled", f"move of {piece_id} cancelled by an ability")]

        check = self.validator.check_move(piece, to)
        if not check.legal:
            return [Rejected("move", piece_id, to, check.reason, check.detail)]

        self.board.move_piece(origin, to)
        self.dispatcher.dispatch(
            GameEventType.ON_MOVE_END,
            EventContext(GameEventType.ON_MOVE_END, self.board, source_piece=piece, move_from=origin, move_to=to),
        )
        logger.info("%s moved %s -> %s", piece.id, origin, to)
        applied = MoveApplied(
            piece_id=piece.id,
            piece_name=piece.name,
            team=piece.team,
            from_pos=origin,
            to_pos=to,
            turn_number=self.turn_number,
        )
        self.end_turn()
        return [applied]

    def perform_action(self, piece_id: str, target: Position, action_name: str = "attack") -> list[Outcome]:
        target = Position(*target)
        piece_or_rejection = self._command_piece("action", piece_id, target)
        if isinstance(piece_or_rejection, Rejected):
            return [piece_or_rejection]
        piece = piece_or_rejection
        origin = piece.position
        target_piece = self.board.get_piece_at(target)

        start = EventContext(
            GameEventType.ON_ACTION_START, self.board, source_piece=piece, target_piece=target_piece,
            move_from=origin, move_to=target, action_name=action_name,
        )
        self.dispatcher.dispatch(GameEventType.ON_ACTION_START, start)
        if start.cancelled:
            return [Rejected("action", piece_id, target, "cancelled", f"{action_name} by {piece_id} cancelled by an ability")]

        check = self.validator.check_action_target(piece, target, action_name)
        if not check.legal:
            return [Rejected("action", piece_id, target, check.reason, check.detail)]

        outcomes: list[Outcome] = []
        captured = target_piece is not None and target_piece.team != piece.team
        game_over: GameOver | None = None
        if captured:
            game_over = self._capture(piece, target_piece)

        self.dispatcher.dispatch(
            GameEventType.ON_ACTION_END,
            EventContext(
                GameEventType.ON_ACTION_END, self.board, source_piece=piece, target_piece=target_piece,
                move_from=origin, move_to=target, action_name=action_name,
            ),
        )
        logger.info("%s performed %s on %s%s", piece.id, action_name, target, " (capture)" if captured else "")
        outcomes.append(
            ActionApplied(
                piece_id=piece.id,
                action_name=action_name,
                target=target,
                target_piece_id=target_piece.id if target_piece else None,
                captured=captured,
                turn_number=self.turn_number,
            )
        )
        if game_over is not None:
            outcomes.append(game_over)
        else:
            self.end_turn()
        return outcomes

    def apply_status(self, piece_id: str, definition: StatusEffectDefinition) -> StatusEffectInstance:
        piece = self._pieces[piece_id]
        effect = self._status_factory.create_status_effect(definition, piece)
        return piece.apply_status(effect)

    def end_turn(self) -> None:
        """Tick status effects, hand the move to the other team and announce the new turn."""
        for piece in self.pieces():
            for effect in piece.tick_status_effects():
                logger.info("%s wore off %s", effect.name, piece.id)
        if self.current_team is not None:
            self.current_team = other_team(self.current_team)
        self.turn_number += 1
        self.dispatcher.dispatch(GameEventType.ON_TURN_START, EventContext(GameEventType.ON_TURN_START, self.board))

    # ------------------------------------------------------------------ #
    # Internal                                                             #
    # ------------------------------------------------------------------ #

    def _command_piece(self, command: Literal["move", "action"], piece_id: str, target: Position) -> Piece | Rejected:
        piece = self._pieces.get(piece_id)
        if piece is None:
            return Rejected(command, piece_id, target, "unknown_piece", f"no piece with id {piece_id}")
        if self.is_over:
            return Rejected(command, piece_id, target, "game_over", f"{self.winner} has already won")
        if self.current_team is None:
            return Rejected(command, piece_id, target, "not_started", "call start_game() first")
        if piece.team != self.current_team:
            return Rejected(command, piece_id, target, "not_your_turn", f"it is {self.current_team}'s turn")
        return piece

    def _capture(self, attacker: Piece, captured: Piece) -> GameOver | None:
        # The captured piece is the source of an on_capture event.
        ctx = EventContext(
            GameEventType.ON_CAPTURE, self.board, source_piece=captured, target_piece=attacker,
            move_from=attacker.position, move_to=captured.position,
        )
        self.dispatcher.dispatch(GameEventType.ON_CAPTURE, ctx)
        self.remove_piece(captured.id)
        logger.info("%s captured %s", attacker.id, captured.id)

        if not ctx.payload.get("game_over_triggered"):
            return None
        losing: Team = ctx.payload.get("losing_team", captured.team)
        self.winner = other_team(losing)
        self.dispatcher.dispatch(
            GameEventType.ON_GAME_OVER,
            EventContext(GameEventType.ON_GAME_OVER, self.board, source_piece=captured, target_piece=attacker),
        )
        logger.info("Game over: %s wins on turn %d", self.winner, self.turn_number)
        return GameOver(winning_team=self.winner, losing_team=losing, turn_number=self.turn_number)
