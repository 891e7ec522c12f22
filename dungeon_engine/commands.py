"""Text command interpreter for PyDungeon.

One line in, one CommandResult out. Mistakes in a command (unknown verb,
unknown kind, bad number, off-grid position, unreadable file) become
messages; nothing here raises for user input.

Commands:
    add <kind> <name> <x> <y>
    print
    save <file>
    load <file>
    battle <range>
    help
    exit | quit
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from dungeon_core import PersistenceError, parse_coordinate
from dungeon_core.logging_config import get_logger

from .engine import Dungeon
from .narrator import describe_entities, summarize_round

logger = get_logger("commands")

HELP_TEXT = """Commands:
  add <kind> <name> <x> <y>   add a princess, dragon or knight
  print                       list living entities
  save <file>                 save living entities
  load <file>                 replace the dungeon with a saved file
  battle <range>              run one encounter round
  help                        show this help
  exit                        leave"""


@dataclass
class CommandResult:
    """Outcome of one command line."""

    ok: bool = True
    lines: List[str] = field(default_factory=list)
    exit: bool = False

    @classmethod
    def error(cls, message: str) -> "CommandResult":
        return cls(ok=False, lines=[message])


class CommandInterpreter:
    """Parses command lines and drives a Dungeon.

    Usage:
        interpreter = CommandInterpreter(Dungeon())
        result = interpreter.execute("add dragon Fafnir 10 10")
    """

    def __init__(self, dungeon: Dungeon):
        self.dungeon = dungeon
        self._handlers: Dict[str, Callable[[List[str]], CommandResult]] = {
            "add": self._add,
            "print": self._print,
            "save": self._save,
            "load": self._load,
            "battle": self._battle,
            "help": self._help,
            "exit": self._exit,
            "quit": self._exit,
        }

    def execute(self, line: str) -> CommandResult:
        """Run one command line."""
        tokens = line.split()
        if not tokens:
            return CommandResult()

        verb, args = tokens[0].lower(), tokens[1:]
        handler = self._handlers.get(verb)
        if handler is None:
            return CommandResult.error(f"Unknown command: {verb}")

        logger.debug(f"Executing {verb} {args}")
        return handler(args)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _add(self, args: List[str]) -> CommandResult:
        if len(args) != 4:
            return CommandResult.error("Usage: add <kind> <name> <x> <y>")
        kind, name, x_token, y_token = args
        x, y = parse_coordinate(x_token), parse_coordinate(y_token)
        if x is None or y is None:
            return CommandResult.error(f"Coordinates must be integers: {x_token} {y_token}")

        added, reason = self.dungeon.add_entity(kind, name, x, y)
        if not added:
            return CommandResult.error(f"Not added: {reason}")
        return CommandResult(lines=[f"Added {self.dungeon.entities()[-1]}"])

    def _print(self, args: List[str]) -> CommandResult:
        lines = describe_entities(self.dungeon.entities())
        return CommandResult(lines=lines or ["The dungeon is empty."])

    def _save(self, args: List[str]) -> CommandResult:
        if len(args) != 1:
            return CommandResult.error("Usage: save <file>")
        try:
            count = self.dungeon.save(args[0])
        except PersistenceError as e:
            return CommandResult.error(str(e))
        return CommandResult(lines=[f"Saved {count} entities to {args[0]}"])

    def _load(self, args: List[str]) -> CommandResult:
        if len(args) != 1:
            return CommandResult.error("Usage: load <file>")
        try:
            result = self.dungeon.load(args[0])
        except PersistenceError as e:
            return CommandResult.error(str(e))

        lines = [f"Loaded {len(result.entities)} entities from {args[0]}"]
        if result.error is not None:
            lines.append(f"Stopped early at {result.error}")
        return CommandResult(lines=lines)

    def _battle(self, args: List[str]) -> CommandResult:
        if len(args) != 1:
            return CommandResult.error("Usage: battle <range>")
        try:
            encounter_range = float(args[0])
        except ValueError:
            return CommandResult.error(f"Range must be a number: {args[0]}")
        if math.isnan(encounter_range) or encounter_range < 0:
            return CommandResult.error(f"Range must be a non-negative number: {args[0]}")

        result = self.dungeon.battle(encounter_range)
        return CommandResult(lines=summarize_round(result).splitlines())

    def _help(self, args: List[str]) -> CommandResult:
        return CommandResult(lines=HELP_TEXT.splitlines())

    def _exit(self, args: List[str]) -> CommandResult:
        return CommandResult(exit=True)
