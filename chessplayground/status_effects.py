"""
Timed status effects.

A StatusEffectDefinition is static data ("Frozen: 2 turns, grants Immobile").
StatusEffectFactory turns it into a StatusEffectInstance bound to one piece.
Activating the instance creates its child abilities from the registry,
attaches them to the host and subscribes them; expiring it unsubscribes them
again. The engine ticks every active instance once per turn.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, Mapping

from chessplayground.abilities import Ability, AbilityRegistry
from chessplayground.dispatcher import GameEventDispatcher

if TYPE_CHECKING:
    from chessplayground.pieces import Piece

logger = logging.getLogger(__name__)

StackBehavior = Literal["refresh", "stack_duration", "ignore"]
_STACK_BEHAVIORS = ("refresh", "stack_duration", "ignore")


@dataclass(frozen=True)
class AbilitySpec:
    name: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StatusEffectDefinition:
    name: str
    base_duration: int               # turns
    stack_behavior: StackBehavior = "refresh"
    abilities: tuple[AbilitySpec, ...] = ()

    def __post_init__(self) -> None:
        if self.base_duration < 1:
            raise ValueError(f"{self.name}: base_duration must be >= 1")
        if self.stack_behavior not in _STACK_BEHAVIORS:
            raise ValueError(
                f"{self.name}: stack_behavior must be one of {_STACK_BEHAVIORS}, "
                f"got {self.stack_behavior!r}"
            )


class StatusEffectInstance:
    def __init__(
        self,
        definition: StatusEffectDefinition,
        host: Piece,
        registry: AbilityRegistry,
        dispatcher: GameEventDispatcher,
    ) -> None:
        self.definition = definition
        self.host = host
        self.remaining_duration = definition.base_duration
        self._registry = registry
        self._dispatcher = dispatcher
        self._child_abilities: list[Ability] = []
        self._active = False

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def active(self) -> bool:
        return self._active

    @property
    def child_abilities(self) -> tuple[Ability, ...]:
        return tuple(self._child_abilities)

    def activate(self) -> None:
        """
        Create, attach and subscribe the child abilities.

        All abilities are created before any is subscribed, so an unregistered
        name leaves the dispatcher untouched.
        """
        if self._active:
            return
        children = [self._registry.create(spec.name, spec.params) for spec in self.definition.abilities]
        for ability in children:
            ability.attach(self.host)
            self._dispatcher.subscribe_ability(ability)
        self._child_abilities = children
        self._active = True
        logger.debug("%s applied to %s for %d turn(s)", self.name, self.host.id, self.remaining_duration)

    def tick(self) -> None:
        """Count down one turn; expire when the duration runs out."""
        if not self._active:
            return
        self.remaining_duration -= 1
        if self.remaining_duration <= 0:
            self.expire()

    def expire(self) -> None:
        if not self._active:
            return
        for ability in self._child_abilities:
            self._dispatcher.unsubscribe_ability(ability)
        self._child_abilities = []
        self._active = False
        logger.debug("%s expired on %s", self.name, self.host.id)

    def __repr__(self) -> str:
        return (
            f"StatusEffectInstance({self.name!r}, host={self.host.id!r}, "
            f"remaining={self.remaining_duration})"
        )


class StatusEffectFactory:
    def __init__(self, registry: AbilityRegistry, dispatcher: GameEventDispatcher) -> None:
        self._registry = registry
        self._dispatcher = dispatcher

    def create_status_effect(self, definition: StatusEffectDefinition, host: Piece) -> StatusEffectInstance:
        return StatusEffectInstance(definition, host, self._registry, self._dispatcher)
