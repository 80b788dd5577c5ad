"""
Ability name → factory table.

A registry is built once at start-up (see create_default_registry) and passed
explicitly to whatever instantiates abilities: the piece factory and the
status-effect factory. There is no module-level instance.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from chessplayground.abilities.base import Ability

AbilityFactory = Callable[[Mapping[str, Any]], Ability]


class AbilityNotRegisteredError(LookupError):
    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        super().__init__(
            f'Ability "{name}" is not registered. Known abilities: {", ".join(known) or "none"}'
        )


class AbilityRegistry:
    def __init__(self) -> None:
        self._factories: dict[str, AbilityFactory] = {}

    def register(self, name: str, factory: AbilityFactory) -> None:
        self._factories[name] = factory

    def create(self, name: str, params: Mapping[str, Any] | None = None) -> Ability:
        """
        Instantiate a registered ability.

        Raises:
            AbilityNotRegisteredError: no factory is registered under name.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise AbilityNotRegisteredError(name, self.names())
        return factory(dict(params or {}))

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories
