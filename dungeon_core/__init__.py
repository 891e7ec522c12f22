"""PyDungeon Core - entity model, events and population file format.

Models:
- EntityKind, Entity, create_entity, check_position

Events (Immutable Facts):
- KillEvent, Round

Persistence:
- format_line, parse_line, read_entities, write_entities, load_file, save_file

Errors:
- DungeonError, EntityValidationError, ParseError, PersistenceError
"""

from .errors import (
    DungeonError,
    EntityValidationError,
    ParseError,
    PersistenceError,
)
from .models import (
    GRID_MAX,
    GRID_MIN,
    Entity,
    EntityKind,
    check_position,
    create_entity,
)
from .events import KillEvent, Round
from .persistence import (
    LoadResult,
    format_line,
    load_file,
    parse_coordinate,
    parse_line,
    read_entities,
    save_file,
    write_entities,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "DungeonError",
    "EntityValidationError",
    "ParseError",
    "PersistenceError",
    # Models
    "GRID_MIN",
    "GRID_MAX",
    "Entity",
    "EntityKind",
    "check_position",
    "create_entity",
    # Events
    "KillEvent",
    "Round",
    # Persistence
    "LoadResult",
    "format_line",
    "parse_coordinate",
    "parse_line",
    "read_entities",
    "write_entities",
    "load_file",
    "save_file",
]
