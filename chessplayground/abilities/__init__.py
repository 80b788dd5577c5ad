"""
Ability package.

create_default_registry() is the single place the built-in abilities are
registered. Build it once at start-up and hand it to PieceFactory and
StatusEffectFactory.

To add a new ability:
  1. Subclass Ability in chessplayground/abilities/builtins.py (or a new module)
  2. Register it here
  3. Reference its name from a blueprint's "abilities" list
"""

from __future__ import annotations

from chessplayground.abilities.base import Ability
from chessplayground.abilities.builtins import Immobile, Jumping, King, TargetAlliesOnly
from chessplayground.abilities.registry import (
    AbilityFactory,
    AbilityNotRegisteredError,
    AbilityRegistry,
)

__all__ = [
    "Ability",
    "AbilityFactory",
    "AbilityNotRegisteredError",
    "AbilityRegistry",
    "Immobile",
    "Jumping",
    "King",
    "TargetAlliesOnly",
    "create_default_registry",
]


def create_default_registry() -> AbilityRegistry:
    registry = AbilityRegistry()
    for ability_cls in (Immobile, Jumping, TargetAlliesOnly, King):
        registry.register(ability_cls.kind, ability_cls)
    return registry
