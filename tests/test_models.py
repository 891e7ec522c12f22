"""Entity Model Tests.

Tests for entity kinds, position validation and liveness.
"""

import unittest

from pydantic import ValidationError

from dungeon_core import (
    GRID_MAX,
    GRID_MIN,
    Entity,
    EntityKind,
    EntityValidationError,
    check_position,
    create_entity,
)


class CheckPositionTest(unittest.TestCase):
    """The single grid bounds check."""

    def test_corners_are_on_the_grid(self) -> None:
        for x, y in [(0, 0), (0, 500), (500, 0), (500, 500), (250, 17)]:
            self.assertIsNone(check_position(x, y), (x, y))

    def test_off_grid_positions_are_rejected(self) -> None:
        for x, y in [(-1, 0), (501, 0), (0, -1), (0, 501)]:
            reason = check_position(x, y)
            self.assertIsNotNone(reason, (x, y))
            self.assertIn("outside the grid", reason)

    def test_bounds_constants(self) -> None:
        self.assertEqual((GRID_MIN, GRID_MAX), (0, 500))


class EntityKindTest(unittest.TestCase):
    """Kind tokens for commands and files."""

    def test_command_tokens_are_case_insensitive(self) -> None:
        self.assertIs(EntityKind.from_token("dragon"), EntityKind.DRAGON)
        self.assertIs(EntityKind.from_token("Knight"), EntityKind.KNIGHT)
        self.assertIs(EntityKind.from_token("PRINCESS"), EntityKind.PRINCESS)

    def test_file_tokens_are_exact(self) -> None:
        self.assertIs(EntityKind.from_file_token("DRAGON"), EntityKind.DRAGON)
        with self.assertRaises(EntityValidationError):
            EntityKind.from_file_token("dragon")

    def test_unknown_kind(self) -> None:
        with self.assertRaises(EntityValidationError):
            EntityKind.from_token("goblin")

    def test_labels_and_file_tokens(self) -> None:
        self.assertEqual(EntityKind.PRINCESS.label, "Princess")
        self.assertEqual(EntityKind.KNIGHT.file_token, "KNIGHT")


class EntityTest(unittest.TestCase):
    """Entity construction and liveness."""

    def test_create_entity(self) -> None:
        entity = create_entity("dragon", "Fafnir", 10, 20)
        self.assertEqual(entity.kind, EntityKind.DRAGON)
        self.assertEqual(entity.position, (10, 20))
        self.assertTrue(entity.alive)
        self.assertEqual(str(entity), "Dragon Fafnir at (10, 20)")
        self.assertEqual(entity.as_record(), (EntityKind.DRAGON, "Fafnir", 10, 20))

    def test_off_grid_construction_fails(self) -> None:
        for x, y in [(-1, 0), (501, 0), (0, -1), (0, 501)]:
            with self.assertRaises(EntityValidationError):
                create_entity(EntityKind.KNIGHT, "K", x, y)
            with self.assertRaises(ValidationError):
                Entity(kind=EntityKind.KNIGHT, name="K", x=x, y=y)

    def test_names_must_be_single_tokens(self) -> None:
        with self.assertRaises(EntityValidationError):
            create_entity("knight", "", 1, 1)
        with self.assertRaises(EntityValidationError):
            create_entity("knight", "Sir Lancelot", 1, 1)

    def test_identity_fields_are_frozen(self) -> None:
        entity = create_entity("princess", "Zelda", 1, 1)
        with self.assertRaises(ValidationError):
            entity.x = 2

    def test_mark_dead_is_monotonic(self) -> None:
        entity = create_entity("princess", "Zelda", 1, 1)
        entity.mark_dead()
        self.assertFalse(entity.alive)
        entity.mark_dead()
        self.assertFalse(entity.alive)

    def test_distance(self) -> None:
        a = create_entity("dragon", "A", 0, 0)
        b = create_entity("princess", "B", 3, 4)
        self.assertEqual(a.distance_to(b), 5.0)
        self.assertEqual(b.distance_to(a), 5.0)
        self.assertEqual(a.distance_to(a), 0.0)

    def test_same_name_entities_are_distinct(self) -> None:
        a = create_entity("dragon", "D", 0, 0)
        b = create_entity("dragon", "D", 0, 0)
        self.assertNotEqual(a.id, b.id)


if __name__ == "__main__":
    unittest.main()
