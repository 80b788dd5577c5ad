"""
Pieces and the blueprints they are built from.

A blueprint is declarative JSON:

    {
      "name": "Rook",
      "emoji": "♜",
      "movement": {"kind": "ray", "dirs": ["N", "E", "S", "W"], "min": 1, "max": 7},
      "attack":   "{\"kind\": \"ray\", \"dirs\": [\"N\", \"E\", \"S\", \"W\"], \"min\": 1, \"max\": 7}",
      "abilities": ["Jumping", {"name": "SomeAbility", "params": {"x": 1}}]
    }

Shapes may be embedded objects or JSON strings. PieceFactory parses and
compiles both shapes exactly once, mirrors them for black (which faces south)
and hands the piece immutable offset tuples.
"""

from __future__ import annotations

import itertools
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping

from chessplayground.abilities import Ability, AbilityRegistry
from chessplayground.position import Position, flip_vertical
from chessplayground.shapes import compile_shape, parse_shape_json
from chessplayground.status_effects import AbilitySpec, StatusEffectInstance

logger = logging.getLogger(__name__)

Team = Literal["white", "black"]
TEAMS: tuple[Team, ...] = ("white", "black")


class BlueprintError(ValueError):
    """Raised when a blueprint record is missing fields or has the wrong types."""


@dataclass(frozen=True)
class PieceBlueprint:
    name: str
    emoji: str
    movement: str | Mapping[str, Any]
    attack: str | Mapping[str, Any]
    abilities: tuple[AbilitySpec, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> PieceBlueprint:
        if not isinstance(raw, Mapping):
            raise BlueprintError(f"Blueprint must be an object, got {type(raw).__name__}")
        for key in ("name", "emoji"):
            if not isinstance(raw.get(key), str) or not raw[key]:
                raise BlueprintError(f"Blueprint field '{key}' must be a non-empty string")
        for key in ("movement", "attack"):
            if not isinstance(raw.get(key), (str, Mapping)):
                raise BlueprintError(
                    f"Blueprint '{raw['name']}': '{key}' must be shape JSON (string or object)"
                )
        abilities_raw = raw.get("abilities", [])
        if not isinstance(abilities_raw, list):
            raise BlueprintError(f"Blueprint '{raw['name']}': 'abilities' must be a list")
        return cls(
            name=raw["name"],
            emoji=raw["emoji"],
            movement=raw["movement"],
            attack=raw["attack"],
            abilities=tuple(_ability_spec(raw["name"], a) for a in abilities_raw),
        )

    @classmethod
    def from_json(cls, text: str) -> PieceBlueprint:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BlueprintError(f"Blueprint is not valid JSON: {exc.msg}") from exc
        return cls.from_dict(raw)


def _ability_spec(blueprint_name: str, entry: Any) -> AbilitySpec:
    if isinstance(entry, str):
        return AbilitySpec(name=entry)
    if isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
        params = entry.get("params") or {}
        if not isinstance(params, Mapping):
            raise BlueprintError(f"Blueprint '{blueprint_name}': ability params must be an object")
        return AbilitySpec(name=entry["name"], params=dict(params))
    raise BlueprintError(
        f"Blueprint '{blueprint_name}': ability entries must be names or {{name, params}} objects"
    )


def load_blueprints(directory: str | Path) -> dict[str, PieceBlueprint]:
    """Load every *.json blueprint in directory, keyed by file stem."""
    blueprint_dir = Path(directory)
    if not blueprint_dir.is_dir():
        raise FileNotFoundError(f"Blueprint directory not found: {blueprint_dir.resolve()}")
    blueprints: dict[str, PieceBlueprint] = {}
    for path in sorted(blueprint_dir.glob("*.json")):
        try:
            blueprints[path.stem] = PieceBlueprint.from_json(path.read_text(encoding="utf-8"))
        except BlueprintError as exc:
            raise BlueprintError(f"{path.name}: {exc}") from exc
        logger.debug("Loaded blueprint %s", path.stem)
    return blueprints


class Piece:
    def __init__(
        self,
        id: str,
        name: str,
        emoji: str,
        team: Team,
        position: Position,
        movement_offsets: tuple[Position, ...],
        action_offsets: tuple[Position, ...],
        abilities: tuple[Ability, ...] = (),
    ) -> None:
        self.id = id
        self.name = name
        self.emoji = emoji
        self.team = team
        self.position = position
        self.movement_offsets = movement_offsets
        self.action_offsets = action_offsets
        self.abilities = abilities
        self.status_effects: list[StatusEffectInstance] = []
        for ability in abilities:
            ability.attach(self)

    def potential_movement_targets(self) -> list[Position]:
        return [self.position + o for o in self.movement_offsets]

    def potential_action_targets(self) -> list[Position]:
        return [self.position + o for o in self.action_offsets]

    def all_abilities(self) -> list[Ability]:
        """Innate abilities plus those granted by active status effects."""
        granted = [a for effect in self.status_effects if effect.active for a in effect.child_abilities]
        return [*self.abilities, *granted]

    def has_ability(self, kind: str) -> bool:
        return any(a.kind == kind for a in self.all_abilities())

    # ------------------------------------------------------------------ #
    # Status effects                                                      #
    # ------------------------------------------------------------------ #

    def apply_status(self, effect: StatusEffectInstance) -> StatusEffectInstance:
        """
        Attach effect, honouring the definition's stacking rule against an
        active effect of the same name. Returns the instance now in force.
        """
        existing = next(
            (e for e in self.status_effects if e.active and e.name == effect.name), None
        )
        if existing is None:
            effect.activate()
            self.status_effects.append(effect)
            return effect

        match effect.definition.stack_behavior:
            case "refresh":
                existing.remaining_duration = effect.definition.base_duration
            case "stack_duration":
                existing.remaining_duration += effect.definition.base_duration
            case "ignore":
                pass
        return existing

    def tick_status_effects(self) -> list[StatusEffectInstance]:
        """Tick every active effect; drop and return the ones that expired."""
        for effect in self.status_effects:
            effect.tick()
        expired = [e for e in self.status_effects if not e.active]
        self.status_effects = [e for e in self.status_effects if e.active]
        return expired

    def clear_status_effects(self) -> None:
        for effect in self.status_effects:
            effect.expire()
        self.status_effects = []

    def __repr__(self) -> str:
        return f"Piece({self.id!r}, {self.name!r}, team={self.team!r}, at={self.position})"


class PieceFactory:
    def __init__(self, registry: AbilityRegistry) -> None:
        self._registry = registry
        self._ids = itertools.count(1)

    def create_piece(self, blueprint: PieceBlueprint, team: Team, position: Position) -> Piece:
        """
        Build a piece from its blueprint.

        Raises:
            ShapeDefinitionError: a movement/attack shape is malformed.
            AbilityNotRegisteredError: the blueprint names an unknown ability.
        """
        if team not in TEAMS:
            raise ValueError(f"team must be one of {TEAMS}, got {team!r}")
        movement = compile_shape(parse_shape_json(blueprint.movement))
        attack = compile_shape(parse_shape_json(blueprint.attack))
        if team == "black":
            movement = flip_vertical(movement)
            attack = flip_vertical(attack)
        abilities = tuple(self._registry.create(spec.name, spec.params) for spec in blueprint.abilities)

        piece_id = f"{team}-{blueprint.name.lower().replace(' ', '_')}-{next(self._ids)}"
        return Piece(
            id=piece_id,
            name=blueprint.name,
            emoji=blueprint.emoji,
            team=team,
            position=Position(*position),
            movement_offsets=tuple(movement),
            action_offsets=tuple(attack),
            abilities=abilities,
        )
