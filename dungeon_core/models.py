"""Core entity model for PyDungeon.

Entities are the only inhabitants of the dungeon grid. Their kind, name and
position are fixed when they are created; the only thing that ever changes
is liveness, and it only ever goes from alive to dead.

GRID: coordinates are integers in [GRID_MIN, GRID_MAX] on both axes.
Every path that creates an entity (construction, file loading, adding to a
population) goes through `check_position`.
"""

import math
import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, field_validator, model_validator

from .errors import EntityValidationError

# ============================================================================
# Grid
# ============================================================================

GRID_MIN = 0
GRID_MAX = 500


def check_position(x: int, y: int) -> Optional[str]:
    """Return the reason a position is rejected, or None if it is on the grid."""
    for axis, value in (("x", x), ("y", y)):
        if not GRID_MIN <= value <= GRID_MAX:
            return f"{axis}={value} is outside the grid [{GRID_MIN}, {GRID_MAX}]"
    return None


# ============================================================================
# Kinds
# ============================================================================


class EntityKind(str, Enum):
    """Closed set of entity kinds."""
    PRINCESS = "princess"
    DRAGON = "dragon"
    KNIGHT = "knight"

    @property
    def file_token(self) -> str:
        """Token used in saved population files (PRINCESS, DRAGON, KNIGHT)."""
        return self.name

    @property
    def label(self) -> str:
        """Human-readable label."""
        return self.value.capitalize()

    @classmethod
    def from_token(cls, token: str) -> "EntityKind":
        """Parse a kind typed by a user (case-insensitive)."""
        try:
            return cls(token.lower())
        except ValueError:
            raise EntityValidationError(f"Unknown entity kind: {token!r}") from None

    @classmethod
    def from_file_token(cls, token: str) -> "EntityKind":
        """Parse a kind from a saved file (exact, case-sensitive)."""
        try:
            return cls[token]
        except KeyError:
            raise EntityValidationError(f"Unknown entity kind: {token!r}") from None


# ============================================================================
# Entity
# ============================================================================


class Entity(BaseModel):
    """An inhabitant of the grid.

    Kind, name and position are frozen. Liveness is kept outside the
    validated fields so it can flip exactly once through `mark_dead`.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8], description="Unique entity ID")
    kind: EntityKind = Field(description="Kind of entity")
    name: str = Field(description="Display name (single token)")
    x: int = Field(description="X coordinate")
    y: int = Field(description="Y coordinate")

    _alive: bool = PrivateAttr(default=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Names must survive a save/load round trip."""
        if not v:
            raise ValueError("name must not be empty")
        if any(ch.isspace() for ch in v):
            raise ValueError(f"name must not contain whitespace: {v!r}")
        return v

    @model_validator(mode="after")
    def validate_position(self) -> "Entity":
        reason = check_position(self.x, self.y)
        if reason:
            raise ValueError(reason)
        return self

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def mark_dead(self) -> None:
        """Flip liveness to dead. Dead entities never come back."""
        self._alive = False

    def distance_to(self, other: "Entity") -> float:
        """Euclidean distance between two entities."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_record(self) -> tuple[EntityKind, str, int, int]:
        """(kind, name, x, y) tuple, the persisted identity of an entity."""
        return (self.kind, self.name, self.x, self.y)

    def __str__(self) -> str:
        return f"{self.kind.label} {self.name} at ({self.x}, {self.y})"


def create_entity(kind: EntityKind | str, name: str, x: int, y: int) -> Entity:
    """Build an entity, turning model validation failures into EntityValidationError.

    Args:
        kind: EntityKind or a user-typed kind token
        name: Display name
        x: X coordinate
        y: Y coordinate

    Returns:
        A live entity

    Raises:
        EntityValidationError: If the kind, name or position is invalid
    """
    if not isinstance(kind, EntityKind):
        kind = EntityKind.from_token(kind)
    try:
        return Entity(kind=kind, name=name, x=x, y=y)
    except ValidationError as exc:
        reasons = "; ".join(err["msg"].removeprefix("Value error, ") for err in exc.errors())
        raise EntityValidationError(reasons) from exc
