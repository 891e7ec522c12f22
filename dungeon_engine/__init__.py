"""PyDungeon Engine - encounter resolution for PyDungeon populations.

Core Components:
- RuleTable: Directed "defeats" relation over entity kinds
- EncounterEngine: Pairwise round scan (mark phase, then compact phase)
- Population: Ordered entity collection with add/list/compact/load/save
- KillSink: Notification protocol (console, file, fan-out implementations)
- Dungeon: Facade used by the command loop and the CLI

Usage:
    from dungeon_engine import Dungeon

    dungeon = Dungeon()
    dungeon.add_entity("dragon", "Fafnir", 0, 0)
    dungeon.add_entity("princess", "Zelda", 3, 0)
    dungeon.battle(5)
"""

from .rules import DEFAULT_RULES, Outcome, RuleTable
from .sinks import (
    CallbackSink,
    CollectingSink,
    ConsoleSink,
    FanOutSink,
    FileSink,
    KillSink,
    NullSink,
    as_sink,
)
from .population import Population
from .encounter import EncounterEngine
from .engine import Dungeon
from .commands import CommandInterpreter, CommandResult

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_RULES",
    "Outcome",
    "RuleTable",
    "KillSink",
    "ConsoleSink",
    "FileSink",
    "CollectingSink",
    "CallbackSink",
    "FanOutSink",
    "NullSink",
    "as_sink",
    "Population",
    "EncounterEngine",
    "Dungeon",
    "CommandInterpreter",
    "CommandResult",
]
