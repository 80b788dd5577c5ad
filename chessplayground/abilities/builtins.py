"""
Built-in abilities referenced by the bundled blueprints.

  Immobile          — the host cannot move
  Jumping           — the host ignores pieces standing in its path
  TargetAlliesOnly  — the host's actions may hit allies but not enemies
  King              — losing the host ends the game
"""

from __future__ import annotations

import logging

from chessplayground.abilities.base import Ability
from chessplayground.events import (
    ALLOW_TARGET_ALLY,
    ALLOW_TARGET_ENEMY,
    IGNORE_PATH_BLOCKING,
    EventContext,
    GameEventType,
)

logger = logging.getLogger(__name__)


class Immobile(Ability):
    kind = "Immobile"
    triggers = (GameEventType.ON_MOVE_START, GameEventType.ON_MOVE_VALIDATE)
    # Runs ahead of movement-enabling abilities so its cancel short-circuits them.
    priority = 10

    def on_trigger(self, ctx: EventContext) -> None:
        if self.applies_to(ctx.source_piece):
            ctx.cancel()


class Jumping(Ability):
    kind = "Jumping"
    triggers = (GameEventType.ON_MOVE_VALIDATE,)
    priority = 50

    def on_trigger(self, ctx: EventContext) -> None:
        if self.applies_to(ctx.source_piece):
            ctx.set_validation_flag(IGNORE_PATH_BLOCKING, True)


class TargetAlliesOnly(Ability):
    kind = "TargetAlliesOnly"
    triggers = (GameEventType.ON_ACTION_VALIDATE,)
    priority = 50

    def on_trigger(self, ctx: EventContext) -> None:
        if self.applies_to(ctx.source_piece):
            ctx.set_validation_flag(ALLOW_TARGET_ALLY, True)
            ctx.set_validation_flag(ALLOW_TARGET_ENEMY, False)


class King(Ability):
    kind = "King"
    triggers = (GameEventType.ON_CAPTURE,)
    priority = 100

    def on_trigger(self, ctx: EventContext) -> None:
        # On capture events the source piece is the one being captured.
        captured = ctx.source_piece
        if self.applies_to(captured):
            logger.info("King %s captured, game over", captured.id)
            ctx.payload["game_over_triggered"] = True
            ctx.payload["losing_team"] = captured.team
