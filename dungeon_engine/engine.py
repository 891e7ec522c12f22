"""PyDungeon Engine - the dungeon facade.

The Dungeon ties the pieces together:
1. Owns the Population
2. Validates and adds entities
3. Loads and saves population files
4. Runs encounter rounds through the EncounterEngine
5. Routes kills to the configured sinks and keeps round history

It is the surface the command interpreter and the CLI drive.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from dungeon_core import Entity, EntityKind, EntityValidationError, LoadResult, Round, create_entity
from dungeon_core.logging_config import get_logger

from .config import DungeonConfig
from .encounter import EncounterEngine
from .population import Population
from .rules import RuleTable
from .sinks import ConsoleSink, FanOutSink, FileSink, KillSink

logger = get_logger("engine")


def build_sinks(config: DungeonConfig) -> FanOutSink:
    """Create the kill sinks a configuration asks for."""
    sink = FanOutSink()
    if config.console_kills:
        sink.add(ConsoleSink())
    if config.file_kills:
        sink.add(FileSink(config.kill_log_path))
    return sink


class Dungeon:
    """A grid of entities and the rounds played on it.

    Usage:
        dungeon = Dungeon()
        dungeon.add_entity("dragon", "Fafnir", 10, 10)
        dungeon.add_entity("princess", "Zelda", 12, 10)
        round_ = dungeon.battle(5)
    """

    def __init__(
        self,
        config: Optional[DungeonConfig] = None,
        sink: Optional[KillSink] = None,
        rules: Optional[RuleTable] = None,
    ):
        """Initialize an empty dungeon.

        Args:
            config: Session configuration (defaults to DungeonConfig())
            sink: Kill sink to use instead of the configured console/file sinks
            rules: Rule table (defaults to the reference rules)
        """
        self.config = config or DungeonConfig()
        self.population = Population()
        self.encounters = EncounterEngine(rules)
        self.sink: KillSink = sink if sink is not None else build_sinks(self.config)
        self.history: List[Round] = []

    def add_entity(self, kind: EntityKind | str, name: str, x: int, y: int) -> Tuple[bool, str]:
        """Create an entity and add it to the population.

        Returns:
            Tuple of (added, reason); nothing changes when added is False
        """
        try:
            entity = create_entity(kind, name, x, y)
        except EntityValidationError as e:
            logger.warning(f"Rejected {kind} {name}: {e}")
            return False, str(e)
        return self.population.add(entity)

    def entities(self) -> List[Entity]:
        """Alive entities in insertion order."""
        return self.population.list()

    def save(self, path: str | Path) -> int:
        """Save alive entities. Raises PersistenceError on I/O failure."""
        return self.population.save_to(path)

    def load(self, path: str | Path) -> LoadResult:
        """Replace the population from a file. Raises PersistenceError on I/O failure."""
        return self.population.load_from(path)

    def battle(self, encounter_range: Optional[float] = None) -> Round:
        """Run one encounter round.

        Args:
            encounter_range: Inclusive distance (defaults to config.default_range)

        Returns:
            The resolved Round
        """
        if encounter_range is None:
            encounter_range = self.config.default_range
        result = self.encounters.run_round(self.population, encounter_range, self.sink)
        self.history.append(result)
        return result

    @property
    def rules(self) -> RuleTable:
        return self.encounters.rules
