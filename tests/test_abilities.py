import unittest

from chessplayground.abilities import (
    Ability,
    AbilityNotRegisteredError,
    AbilityRegistry,
    Immobile,
    Jumping,
    King,
    TargetAlliesOnly,
    create_default_registry,
)
from chessplayground.board import Board
from chessplayground.events import (
    ALLOW_TARGET_ALLY,
    ALLOW_TARGET_ENEMY,
    IGNORE_PATH_BLOCKING,
    EventContext,
    GameEventType,
)
from chessplayground.pieces import Piece
from chessplayground.position import Position


def make_piece(piece_id: str, team: str = "white", abilities: tuple[Ability, ...] = ()) -> Piece:
    return Piece(piece_id, piece_id, "?", team, Position(0, 0), (), (), abilities)  # type: ignore[arg-type]


class RegistryTests(unittest.TestCase):
    def test_default_registry_knows_the_builtins(self) -> None:
        registry = create_default_registry()
        self.assertEqual(registry.names(), ["Immobile", "Jumping", "King", "TargetAlliesOnly"])
        self.assertIn("Jumping", registry)

    def test_create_returns_fresh_instances_with_params(self) -> None:
        registry = create_default_registry()
        a = registry.create("Jumping", {"note": 1})
        b = registry.create("Jumping")
        self.assertIsInstance(a, Jumping)
        self.assertIsNot(a, b)
        self.assertEqual(a.params, {"note": 1})
        self.assertEqual(b.params, {})

    def test_unknown_name_lists_known_abilities(self) -> None:
        registry = AbilityRegistry()
        registry.register("Jumping", Jumping)
        with self.assertRaises(AbilityNotRegisteredError) as cm:
            registry.create("Teleport")
        self.assertEqual(cm.exception.name, "Teleport")
        self.assertIn("Jumping", str(cm.exception))

    def test_register_replaces_existing_factory(self) -> None:
        registry = AbilityRegistry()
        registry.register("Mover", Jumping)
        registry.register("Mover", Immobile)
        self.assertIsInstance(registry.create("Mover"), Immobile)


class BuiltinAbilityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.board = Board()

    def test_piece_attaches_its_abilities(self) -> None:
        ability = Jumping()
        piece = make_piece("p", abilities=(ability,))
        self.assertIs(ability.host, piece)
        self.assertTrue(piece.has_ability("Jumping"))
        self.assertFalse(piece.has_ability("Immobile"))

    def test_immobile_cancels_only_for_its_host(self) -> None:
        ability = Immobile()
        host = make_piece("host", abilities=(ability,))
        other = make_piece("other")

        ctx = EventContext(GameEventType.ON_MOVE_START, self.board, source_piece=other)
        ability.on_trigger(ctx)
        self.assertFalse(ctx.cancelled)

        ctx = EventContext(GameEventType.ON_MOVE_START, self.board, source_piece=host)
        ability.on_trigger(ctx)
        self.assertTrue(ctx.cancelled)

    def test_immobile_outranks_default_priority(self) -> None:
        self.assertLess(Immobile.priority, Jumping.priority)

    def test_jumping_sets_path_flag(self) -> None:
        ability = Jumping()
        host = make_piece("host", abilities=(ability,))
        ctx = EventContext(GameEventType.ON_MOVE_VALIDATE, self.board, source_piece=host)
        ability.on_trigger(ctx)
        self.assertTrue(ctx.flag_is_set(IGNORE_PATH_BLOCKING))

    def test_target_allies_only_flips_targeting_flags(self) -> None:
        ability = TargetAlliesOnly()
        host = make_piece("host", abilities=(ability,))
        ctx = EventContext(GameEventType.ON_ACTION_VALIDATE, self.board, source_piece=host)
        ability.on_trigger(ctx)
        self.assertTrue(ctx.flag_is_set(ALLOW_TARGET_ALLY))
        self.assertFalse(ctx.flag_is_set(ALLOW_TARGET_ENEMY))

    def test_king_marks_game_over_when_host_is_captured(self) -> None:
        ability = King()
        king = make_piece("king", team="black", abilities=(ability,))
        ctx = EventContext(GameEventType.ON_CAPTURE, self.board, source_piece=king)
        ability.on_trigger(ctx)
        self.assertTrue(ctx.payload["game_over_triggered"])
        self.assertEqual(ctx.payload["losing_team"], "black")

    def test_king_ignores_other_captures(self) -> None:
        ability = King()
        make_piece("king", abilities=(ability,))
        ctx = EventContext(GameEventType.ON_CAPTURE, self.board, source_piece=make_piece("pawn"))
        ability.on_trigger(ctx)
        self.assertEqual(ctx.payload, {})
