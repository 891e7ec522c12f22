"""Population management for PyDungeon.

The Population owns the ordered entity sequence the encounter engine scans.
Dead entities stay in the sequence until `compact` runs at the end of a
round, so pair indices are stable for the whole scan.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, TextIO, Tuple

from dungeon_core import Entity, LoadResult, check_position
from dungeon_core.logging_config import get_logger
from dungeon_core.persistence import load_file, read_entities, save_file, write_entities

logger = get_logger("population")


class Population:
    """Ordered collection of entities.

    Usage:
        population = Population()
        ok, reason = population.add(create_entity("dragon", "Fafnir", 10, 10))
        population.save_to("dungeon.txt")
    """

    def __init__(self, entities: list[Entity] | None = None):
        self._entities: list[Entity] = []
        for entity in entities or []:
            self.add(entity)

    def add(self, entity: Entity) -> Tuple[bool, str]:
        """Append an entity if it may enter the grid.

        Args:
            entity: Entity to add

        Returns:
            Tuple of (added, reason). The population is unchanged when
            added is False.
        """
        reason = check_position(entity.x, entity.y)
        if reason is None and not entity.alive:
            reason = f"{entity.name} is dead"
        if reason:
            logger.warning(f"Rejected {entity.kind.label} {entity.name}: {reason}")
            return False, reason

        self._entities.append(entity)
        logger.debug(f"Added {entity}")
        return True, ""

    def list(self) -> list[Entity]:
        """Snapshot of alive entities in insertion order."""
        return [e for e in self._entities if e.alive]

    def compact(self) -> int:
        """Drop dead entities, keeping survivor order.

        Returns:
            Number of entities removed
        """
        before = len(self._entities)
        self._entities = [e for e in self._entities if e.alive]
        return before - len(self._entities)

    def clear(self) -> None:
        self._entities = []

    def load_from(self, source: str | Path | TextIO) -> LoadResult:
        """Replace the whole population with the contents of a file or stream.

        Decoding stops at the first bad line and what was read before it is
        kept.

        Raises:
            PersistenceError: If a file cannot be read; the population is
                left as it was
        """
        if isinstance(source, (str, Path)):
            result = load_file(source)
        else:
            result = read_entities(source)

        self._entities = list(result.entities)
        return result

    def save_to(self, target: str | Path | TextIO) -> int:
        """Write alive entities to a file or stream.

        Returns:
            Number of entities written

        Raises:
            PersistenceError: If a file cannot be written
        """
        if isinstance(target, (str, Path)):
            return save_file(target, self._entities)
        return write_entities(target, self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> Entity:
        return self._entities[index]
