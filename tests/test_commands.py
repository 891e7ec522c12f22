"""Command Interpreter Tests.

Tests for the text command surface and the Dungeon facade behind it.
"""

import os
import shutil
import tempfile
import unittest

from dungeon_engine.commands import CommandInterpreter
from dungeon_engine.config import DungeonConfig
from dungeon_engine.engine import Dungeon, build_sinks
from dungeon_engine.sinks import CollectingSink, ConsoleSink, FileSink


class CommandInterpreterTest(unittest.TestCase):
    """add / print / save / load / battle / exit."""

    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()
        self.sink = CollectingSink()
        self.dungeon = Dungeon(sink=self.sink)
        self.interpreter = CommandInterpreter(self.dungeon)

    def tearDown(self) -> None:
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def run_command(self, line: str):
        return self.interpreter.execute(line)

    def test_add_and_print(self) -> None:
        result = self.run_command("add dragon Fafnir 10 10")
        self.assertTrue(result.ok)
        self.assertEqual(result.lines, ["Added Dragon Fafnir at (10, 10)"])

        self.run_command("add Princess Zelda 12 10")
        result = self.run_command("print")
        self.assertEqual(result.lines, ["Dragon Fafnir at (10, 10)", "Princess Zelda at (12, 10)"])

    def test_print_empty(self) -> None:
        self.assertEqual(self.run_command("print").lines, ["The dungeon is empty."])

    def test_add_out_of_bounds_is_reported(self) -> None:
        for x, y in [(-1, 0), (501, 0), (0, -1), (0, 501)]:
            result = self.run_command(f"add knight K {x} {y}")
            self.assertFalse(result.ok)
            self.assertIn("outside the grid", result.lines[0])
        self.assertEqual(self.dungeon.entities(), [])

    def test_add_mistakes_are_reported(self) -> None:
        for line in ["add goblin G 1 1", "add dragon D one 1", "add dragon D 1", "add dragon D 1.5 2"]:
            result = self.run_command(line)
            self.assertFalse(result.ok, line)
        self.assertEqual(self.dungeon.entities(), [])

    def test_add_takes_names_as_plain_tokens(self) -> None:
        result = self.run_command("add dragon O'Neil 1 1")

        self.assertTrue(result.ok, result.lines)
        self.assertEqual(result.lines, ["Added Dragon O'Neil at (1, 1)"])

    def test_add_coordinates_follow_file_format(self) -> None:
        for line in ["add dragon D 1_0 2", "add dragon D 1 +2", "add dragon D 1 2.0"]:
            result = self.run_command(line)
            self.assertFalse(result.ok, line)
            self.assertIn("Coordinates must be integers", result.lines[0])
        self.assertEqual(self.dungeon.entities(), [])

        self.assertTrue(self.run_command("add dragon D 007 2").ok)
        self.assertEqual(self.run_command("print").lines, ["Dragon D at (7, 2)"])

    def test_unknown_command(self) -> None:
        result = self.run_command("dance")
        self.assertFalse(result.ok)
        self.assertEqual(result.lines, ["Unknown command: dance"])

    def test_blank_line_is_a_no_op(self) -> None:
        result = self.run_command("   ")
        self.assertTrue(result.ok)
        self.assertEqual(result.lines, [])

    def test_battle(self) -> None:
        self.run_command("add dragon D 0 0")
        self.run_command("add princess P 3 0")

        result = self.run_command("battle 5")

        self.assertTrue(result.ok)
        self.assertEqual(result.lines[0], "Round 1 (range 5)")
        self.assertIn("  - D killed P", result.lines)
        self.assertEqual(self.sink.messages(), ["D killed P"])
        self.assertEqual(self.run_command("print").lines, ["Dragon D at (0, 0)"])
        self.assertEqual(len(self.dungeon.history), 1)

    def test_battle_rejects_bad_range(self) -> None:
        for line in ["battle", "battle far", "battle -1", "battle nan"]:
            self.assertFalse(self.run_command(line).ok, line)
        self.assertEqual(self.dungeon.history, [])

    def test_save_and_load(self) -> None:
        path = os.path.join(self.temp_dir, "dungeon.txt")
        self.run_command("add knight K 0 0")
        self.run_command("add dragon D 0 4")

        self.assertEqual(self.run_command(f"save {path}").lines, [f"Saved 2 entities to {path}"])

        self.run_command("add princess P 0 8")
        result = self.run_command(f"load {path}")
        self.assertTrue(result.ok)
        self.assertEqual(
            self.run_command("print").lines,
            ["Knight K at (0, 0)", "Dragon D at (0, 4)"],
        )

    def test_load_partial_file_reports_stop(self) -> None:
        path = os.path.join(self.temp_dir, "bad.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write("DRAGON Fafnir 10 10\nPRINCESS Zelda 9999 10\n")

        result = self.run_command(f"load {path}")

        self.assertTrue(result.ok)
        self.assertEqual(result.lines[0], f"Loaded 1 entities from {path}")
        self.assertIn("line 2", result.lines[1])

    def test_load_missing_file_keeps_state(self) -> None:
        self.run_command("add knight K 0 0")

        result = self.run_command(f"load {os.path.join(self.temp_dir, 'missing.txt')}")

        self.assertFalse(result.ok)
        self.assertEqual(self.run_command("print").lines, ["Knight K at (0, 0)"])

    def test_exit_and_quit(self) -> None:
        self.assertTrue(self.run_command("exit").exit)
        self.assertTrue(self.run_command("QUIT").exit)
        self.assertFalse(self.run_command("print").exit)

    def test_help(self) -> None:
        lines = self.run_command("help").lines
        self.assertTrue(any(line.strip().startswith("battle <range>") for line in lines))


class DungeonTest(unittest.TestCase):
    """Facade defaults."""

    def test_battle_uses_default_range(self) -> None:
        dungeon = Dungeon(DungeonConfig(default_range=2), sink=CollectingSink())
        dungeon.add_entity("dragon", "D", 0, 0)
        dungeon.add_entity("princess", "Far", 0, 3)
        dungeon.add_entity("princess", "Near", 0, 2)

        result = dungeon.battle()

        self.assertEqual(result.range, 2)
        self.assertEqual([e.name for e in dungeon.entities()], ["D", "Far"])

    def test_build_sinks_follows_config(self) -> None:
        sinks = build_sinks(DungeonConfig(console_kills=True, file_kills=True, kill_log_path="kills.txt"))
        self.assertEqual([type(s) for s in sinks.sinks], [ConsoleSink, FileSink])
        self.assertEqual(build_sinks(DungeonConfig(console_kills=False, file_kills=False)).sinks, [])

    def test_add_entity_reports_bad_kind(self) -> None:
        dungeon = Dungeon(sink=CollectingSink())
        ok, reason = dungeon.add_entity("wizard", "W", 1, 1)
        self.assertFalse(ok)
        self.assertIn("Unknown entity kind", reason)


if __name__ == "__main__":
    unittest.main()
