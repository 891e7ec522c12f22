"""
Error types for PyDungeon.

Validation problems are reported to the caller and never abort the process.
Parse problems stop a load at the offending line. Persistence problems wrap
the underlying OSError.
"""

from __future__ import annotations


# ============================================================================
# Exceptions
# ============================================================================


class DungeonError(Exception):
    """Base exception for PyDungeon errors."""
    pass


class EntityValidationError(DungeonError, ValueError):
    """An entity could not be created (bad kind, name or position)."""
    pass


class ParseError(DungeonError):
    """A persisted line could not be decoded."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class PersistenceError(DungeonError):
    """Reading or writing a population file failed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
