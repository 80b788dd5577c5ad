"""
Abstract Ability interface.

An ability is a listener that a piece (or a status effect on a piece) brings
into the event system. Each concrete class declares:

  kind      — immutable tag used by Piece.has_ability(); compared by value
  triggers  — the event kinds it subscribes to
  priority  — dispatch order (lower runs first)

The dispatcher is global to a game, so every subscribed ability sees every
piece's events. Built-ins therefore check applies_to() against their host.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Mapping

from chessplayground.events import EventContext, GameEventType

if TYPE_CHECKING:
    from chessplayground.pieces import Piece


class Ability(ABC):
    kind: ClassVar[str]
    triggers: ClassVar[tuple[GameEventType, ...]] = ()
    priority: ClassVar[int] = 50

    def __init__(self, params: Mapping[str, Any] | None = None) -> None:
        self.params: dict[str, Any] = dict(params or {})
        self.host: Piece | None = None

    def attach(self, host: Piece) -> None:
        self.host = host

    def applies_to(self, piece: Piece | None) -> bool:
        """True when piece is this ability's host (identity, not equality)."""
        return piece is not None and piece is self.host

    @abstractmethod
    def on_trigger(self, ctx: EventContext) -> None:
        """React to one of the subscribed events by mutating ctx."""
        ...

    def __repr__(self) -> str:
        host = self.host.id if self.host is not None else None
        return f"{self.__class__.__name__}(kind={self.kind!r}, host={host!r})"
