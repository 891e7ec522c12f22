"""Population file format for PyDungeon.

One entity per line:

    <KIND> <NAME> <X> <Y>

KIND is PRINCESS, DRAGON or KNIGHT (exact), NAME is a single token and X/Y
are decimal integers on the grid. Reading stops at the first line that does
not decode; everything read before it is kept. Blank lines are skipped.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .errors import EntityValidationError, ParseError, PersistenceError
from .logging_config import get_logger
from .models import Entity, EntityKind, create_entity

logger = get_logger("persistence")

_INT_PATTERN = re.compile(r"-?[0-9]+")


@dataclass
class LoadResult:
    """Entities decoded from a stream, plus the error that stopped decoding (if any)."""

    entities: list[Entity] = field(default_factory=list)
    error: Optional[ParseError] = None

    @property
    def complete(self) -> bool:
        return self.error is None


# ============================================================================
# Line Codec
# ============================================================================


def format_line(entity: Entity) -> str:
    """Encode an entity as one line (without the line break)."""
    return f"{entity.kind.file_token} {entity.name} {entity.x} {entity.y}"


def parse_coordinate(token: str) -> Optional[int]:
    """Decode a plain decimal integer token, or return None if it is not one."""
    if not _INT_PATTERN.fullmatch(token):
        return None
    return int(token)


def _parse_int(token: str, axis: str, line_number: Optional[int], line: str) -> int:
    value = parse_coordinate(token)
    if value is None:
        raise ParseError(f"malformed {axis} coordinate {token!r}", line_number, line)
    return value


def parse_line(line: str, line_number: Optional[int] = None) -> Entity:
    """Decode one line into a live entity.

    Raises:
        ParseError: If the line has the wrong shape, an unknown kind,
            a malformed integer or an off-grid position
    """
    tokens = line.split()
    if len(tokens) != 4:
        raise ParseError(f"expected 4 fields, got {len(tokens)}", line_number, line)

    kind_token, name, x_token, y_token = tokens
    x = _parse_int(x_token, "x", line_number, line)
    y = _parse_int(y_token, "y", line_number, line)

    try:
        kind = EntityKind.from_file_token(kind_token)
        return create_entity(kind, name, x, y)
    except EntityValidationError as exc:
        raise ParseError(str(exc), line_number, line) from exc


# ============================================================================
# Stream I/O
# ============================================================================


def read_entities(stream: Iterable[str]) -> LoadResult:
    """Decode entities from an iterable of lines until the first bad line."""
    result = LoadResult()
    for line_number, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        try:
            result.entities.append(parse_line(line, line_number))
        except ParseError as exc:
            logger.warning(f"Load stopped at {exc}; keeping {len(result.entities)} entities")
            result.error = exc
            break
    return result


def write_entities(stream: TextIO, entities: Iterable[Entity]) -> int:
    """Write alive entities, one per line. Returns the number written."""
    count = 0
    for entity in entities:
        if not entity.alive:
            continue
        stream.write(format_line(entity) + "\n")
        count += 1
    return count


# ============================================================================
# File I/O
# ============================================================================


def load_file(path: str | Path) -> LoadResult:
    """Read a population file.

    Raises:
        PersistenceError: If the file cannot be opened or decoded as text
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise PersistenceError(f"Cannot read {path}: {exc}", str(path)) from exc

    result = read_entities(lines)
    logger.info(f"Loaded {len(result.entities)} entities from {path}")
    return result


def save_file(path: str | Path, entities: Iterable[Entity]) -> int:
    """Write alive entities to a population file.

    Raises:
        PersistenceError: If the file cannot be written
    """
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            count = write_entities(f, entities)
    except OSError as exc:
        raise PersistenceError(f"Cannot write {path}: {exc}", str(path)) from exc

    logger.info(f"Saved {count} entities to {path}")
    return count
