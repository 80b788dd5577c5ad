"""
Priority-ordered event dispatch.

Listeners subscribe per event kind with an integer priority; lower numbers run
first and equal priorities keep subscription order (list.sort is stable, and
the list is re-sorted on every subscribe). dispatch() hands the same
EventContext to each listener in turn and stops as soon as one of them has
cancelled it.

A listener that raises aborts the whole dispatch: the remaining listeners are
skipped and the failure is re-raised as AbilityError, so the game operation
that triggered the dispatch is abandoned too.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from chessplayground.events import EventContext, GameEventType

if TYPE_CHECKING:
    from chessplayground.abilities.base import Ability

logger = logging.getLogger(__name__)


class ListenerEntry(NamedTuple):
    priority: int
    ability: Ability


class AbilityError(Exception):
    """An ability's on_trigger raised while an event was being dispatched."""

    def __init__(self, ability_kind: str, event_type: GameEventType, cause: Exception) -> None:
        self.ability_kind = ability_kind
        self.event_type = event_type
        self.cause = cause
        super().__init__(f"[{ability_kind}] failed during {event_type.value}: {cause}")


class GameEventDispatcher:
    def __init__(self) -> None:
        self._listeners: dict[GameEventType, list[ListenerEntry]] = {}

    def subscribe(self, event_type: GameEventType, ability: Ability, priority: int) -> None:
        entries = self._listeners.setdefault(event_type, [])
        entries.append(ListenerEntry(priority, ability))
        entries.sort(key=lambda e: e.priority)

    def unsubscribe(self, event_type: GameEventType, ability: Ability) -> None:
        """Remove every entry for this ability instance (compared by identity)."""
        entries = self._listeners.get(event_type)
        if entries is None:
            return
        self._listeners[event_type] = [e for e in entries if e.ability is not ability]

    def subscribe_ability(self, ability: Ability) -> None:
        """Subscribe an ability to each of its triggers at its own priority."""
        for event_type in ability.triggers:
            self.subscribe(event_type, ability, ability.priority)
        logger.debug(
            "Subscribed %s (priority %d) to %s",
            ability.kind, ability.priority, ", ".join(t.value for t in ability.triggers),
        )

    def unsubscribe_ability(self, ability: Ability) -> None:
        for event_type in ability.triggers:
            self.unsubscribe(event_type, ability)
        logger.debug("Unsubscribed %s", ability.kind)

    def listeners(self, event_type: GameEventType) -> list[ListenerEntry]:
        """Snapshot of the sorted listener entries for one event kind."""
        return list(self._listeners.get(event_type, ()))

    def dispatch(self, event_type: GameEventType, context: EventContext) -> None:
        # Iterate over a snapshot so listeners may (un)subscribe mid-dispatch
        # without disturbing this call's ordering.
        for entry in self.listeners(event_type):
            if context.cancelled:
                break
            try:
                entry.ability.on_trigger(context)
            except Exception as exc:
                raise AbilityError(entry.ability.kind, event_type, exc) from exc
            if context.cancelled:
                logger.debug("%s cancelled by %s", event_type.value, entry.ability.kind)
