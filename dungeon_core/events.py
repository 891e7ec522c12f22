"""Event and round models for PyDungeon.

A KillEvent is an immutable fact: one entity defeated another during a round.
A Round collects the events of one encounter pass in emission order.
"""

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from .models import Entity


# ============================================================================
# Kill Event (Immutable)
# ============================================================================


class KillEvent(BaseModel):
    """One entity defeated another.

    The entities are held by reference so listeners see the same objects
    the population holds.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Unique event ID")
    round_number: int = Field(ge=1, description="Round the kill happened in")
    killer: Entity = Field(description="Entity that won the encounter")
    victim: Entity = Field(description="Entity that was defeated")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def description(self) -> str:
        return f"{self.killer.name} killed {self.victim.name}"


# ============================================================================
# Round
# ============================================================================


class Round(BaseModel):
    """Temporal container for one encounter pass."""
    number: int = Field(ge=1, description="Round number")
    range: float = Field(ge=0, description="Inclusive encounter distance")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    kills: list[KillEvent] = Field(default_factory=list)
    survivors: int = Field(default=0, ge=0, description="Population size after compaction")
    is_resolved: bool = Field(default=False)

    def add_event(self, event: KillEvent) -> None:
        if self.is_resolved:
            raise RuntimeError(f"Cannot add events to resolved Round {self.number}")
        self.kills.append(event)

    def resolve(self, survivors: int) -> None:
        self.survivors = survivors
        self.is_resolved = True
