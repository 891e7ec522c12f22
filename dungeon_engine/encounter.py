"""Encounter resolution for PyDungeon.

The EncounterEngine runs rounds. A round is one pass over every unordered
pair (i, j), i < j, of the population's stored sequence:

1. Skip the pair if either entity is already dead.
2. Skip the pair if the entities are farther apart than `range`.
3. If kind(i) defeats kind(j): mark j dead, notify (i kills j).
4. If kind(j) defeats kind(i) and both are still alive: mark i dead,
   notify (j kills i).

Mark phase, then compact phase: victims stay in the sequence (flagged dead)
until the whole scan is done, then the population drops them.

Order dependence: a kill in an earlier pair affects every later pair of the
same round. With Knight(0,0), Dragon(0,4), Princess(0,8) and range 5 the
Knight kills the Dragon in pair (0, 1), so pair (1, 2) is skipped and the
Princess survives. This is the documented evaluation order, not simultaneous
resolution.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Optional

from dungeon_core import Entity, KillEvent, Round
from dungeon_core.logging_config import get_logger

from .rules import DEFAULT_RULES, Outcome, RuleTable
from .sinks import KillSink, as_sink

if TYPE_CHECKING:
    from .population import Population

logger = get_logger("encounter")


class EncounterEngine:
    """Resolves encounter rounds over a population.

    Usage:
        engine = EncounterEngine()
        round_ = engine.run_round(population, 5, ConsoleSink())
    """

    def __init__(self, rules: Optional[RuleTable] = None):
        """Initialize the engine.

        Args:
            rules: Rule table to consult (defaults to DEFAULT_RULES)
        """
        self.rules = rules if rules is not None else DEFAULT_RULES
        self.rounds_played: int = 0

    def run_round(
        self,
        population: "Population",
        encounter_range: float,
        sink: KillSink | Callable[[Entity, Entity], None] | None = None,
    ) -> Round:
        """Run one encounter round and compact the population.

        Args:
            population: Population to scan (mutated: victims are removed)
            encounter_range: Inclusive encounter distance, must be >= 0
            sink: Receives one notify_kill call per kill, in scan order

        Returns:
            Resolved Round with the kill events in emission order

        Raises:
            ValueError: If encounter_range is negative or NaN
        """
        if math.isnan(encounter_range) or encounter_range < 0:
            raise ValueError(f"Encounter range must be a non-negative number, got {encounter_range}")

        sink = as_sink(sink)
        self.rounds_played += 1
        current = Round(number=self.rounds_played, range=encounter_range)
        entities = list(population)

        logger.info(f"Round {current.number}: {len(entities)} entities, range {encounter_range}")

        for i, first in enumerate(entities):
            for second in entities[i + 1:]:
                if not (first.alive and second.alive):
                    continue
                if first.distance_to(second) > encounter_range:
                    continue

                if self.rules.resolve(first.kind, second.kind) is Outcome.TARGET_DEFEATED:
                    self._kill(current, first, second, sink)

                if (
                    first.alive
                    and second.alive
                    and self.rules.resolve(second.kind, first.kind) is Outcome.TARGET_DEFEATED
                ):
                    self._kill(current, second, first, sink)

        removed = population.compact()
        current.resolve(survivors=len(population))

        logger.info(
            f"Round {current.number} complete: {len(current.kills)} kills, "
            f"{removed} removed, {current.survivors} survivors"
        )
        return current

    def _kill(self, current: Round, killer: Entity, victim: Entity, sink: KillSink) -> None:
        victim.mark_dead()
        event = KillEvent(round_number=current.number, killer=killer, victim=victim)
        current.add_event(event)
        logger.debug(f"Round {current.number}: {event.description}")
        try:
            sink.notify_kill(killer, victim)
        except Exception as exc:
            # the round still finishes and compacts
            logger.exception(f"Kill sink failed in round {current.number}", exc_info=exc)
