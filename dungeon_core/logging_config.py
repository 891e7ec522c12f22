"""
Logging configuration for PyDungeon.

Everything logs under the "dungeon" logger tree. Log lines go to stderr
(and optionally to a file) so they never mix with command output on stdout.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

ROOT_LOGGER = "dungeon"


class DungeonFormatter(logging.Formatter):
    """`[time] LEVEL    [component] message`, in UTC.

    The component is the logger name without the "dungeon." prefix. On a
    terminal the level name is coloured.
    """

    LEVEL_COLORS = {"DEBUG": "36", "INFO": "32", "WARNING": "33", "ERROR": "31", "CRITICAL": "35"}

    converter = time.gmtime

    def __init__(self, use_colors: bool = False, include_timestamp: bool = True):
        fmt = "%(level_tag)s [%(component)s] %(message)s"
        if include_timestamp:
            fmt = "[%(asctime)s] " + fmt
        super().__init__(fmt, datefmt="%Y-%m-%d %H:%M:%S")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        record.component = record.name.removeprefix(f"{ROOT_LOGGER}.")
        tag = f"{record.levelname:8}"
        color = self.LEVEL_COLORS.get(record.levelname)
        if self.use_colors and color:
            tag = f"\033[{color}m{tag}\033[0m"
        record.level_tag = tag
        return super().format(record)


def _add_handler(logger: logging.Logger, handler: logging.Handler, level: int, use_colors: bool) -> None:
    handler.setLevel(level)
    handler.setFormatter(DungeonFormatter(use_colors=use_colors))
    logger.addHandler(handler)


def setup_logging(
    level: LogLevel = "WARNING",
    log_dir: str | Path | None = None,
    console_output: bool = True,
    file_output: bool = True,
    log_filename: str = "dungeon.log",
) -> None:
    """Configure the "dungeon" logger tree, replacing earlier handlers.

    Args:
        level: Minimum log level to capture
        log_dir: Directory for the log file (file output is skipped without it)
        console_output: Whether to log to stderr
        file_output: Whether to log to a file
        log_filename: Name of the log file

    Usage:
        setup_logging(level="DEBUG", log_dir="./logs")
    """
    numeric_level = getattr(logging, level)
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers = []

    if console_output:
        _add_handler(root_logger, logging.StreamHandler(sys.stderr), numeric_level, sys.stderr.isatty())

    if file_output and log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path / log_filename, encoding="utf-8")
        _add_handler(root_logger, file_handler, numeric_level, False)

    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger for one component, e.g. get_logger("encounter") -> "dungeon.encounter"."""
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


# Console-only setup for early imports; the CLI reconfigures from DungeonConfig
setup_logging(level="WARNING", console_output=True, file_output=False)
