"""
PyDungeon Configuration.

Central configuration for the command line and the Dungeon facade.
Values come from a JSON file, then environment variables (a local .env is
read first).
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv

ENV_CONFIG_PATH = "DUNGEON_CONFIG"
ENV_KILL_LOG = "DUNGEON_KILL_LOG"
ENV_LOG_LEVEL = "DUNGEON_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# ============================================================================
# Default Paths
# ============================================================================


def get_default_config_path() -> Path:
    """Config file location: $DUNGEON_CONFIG or ./dungeon_config.json."""
    if env_path := os.environ.get(ENV_CONFIG_PATH):
        return Path(env_path)
    return Path.cwd() / "dungeon_config.json"


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass
class DungeonConfig:
    """Configuration for a dungeon session."""

    # Kill notifications
    kill_log_path: Path = field(default_factory=lambda: Path("log.txt"))
    console_kills: bool = True
    file_kills: bool = True

    # Battles
    default_range: float = 10.0

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_dir: Path | None = None

    def __post_init__(self):
        if isinstance(self.kill_log_path, str):
            self.kill_log_path = Path(self.kill_log_path)
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")
        if self.default_range < 0:
            raise ValueError(f"default_range must be >= 0, got {self.default_range}")

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "DungeonConfig":
        """Load configuration from a JSON file and apply environment overrides.

        Args:
            config_path: Path to config file. If None, uses the default location.

        Returns:
            DungeonConfig instance (defaults when the file does not exist)
        """
        load_dotenv()

        if config_path is None:
            config_path = get_default_config_path()
        config_path = Path(config_path)

        data: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)

        if kill_log := os.environ.get(ENV_KILL_LOG):
            data["kill_log_path"] = kill_log
        if log_level := os.environ.get(ENV_LOG_LEVEL):
            data["log_level"] = log_level.upper()

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DungeonConfig":
        """Create config from dictionary."""
        log_dir = data.get("log_dir")
        return cls(
            kill_log_path=Path(data.get("kill_log_path", "log.txt")),
            console_kills=data.get("console_kills", True),
            file_kills=data.get("file_kills", True),
            default_range=float(data.get("default_range", 10.0)),
            log_level=str(data.get("log_level", "WARNING")).upper(),
            log_dir=Path(log_dir) if log_dir else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "kill_log_path": str(self.kill_log_path),
            "console_kills": self.console_kills,
            "file_kills": self.file_kills,
            "default_range": self.default_range,
            "log_level": self.log_level,
            "log_dir": str(self.log_dir) if self.log_dir else None,
        }

    def save(self, config_path: str | Path | None = None) -> Path:
        """Save configuration to a JSON file.

        Returns:
            Path to saved file
        """
        if config_path is None:
            config_path = get_default_config_path()

        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        return config_path


# ============================================================================
# Global Config Instance
# ============================================================================


_global_config: DungeonConfig | None = None


def get_config() -> DungeonConfig:
    """Get the process-wide configuration, loading it on first use."""
    global _global_config
    if _global_config is None:
        _global_config = DungeonConfig.load()
    return _global_config


def set_config(config: DungeonConfig) -> None:
    global _global_config
    _global_config = config


def reload_config(config_path: str | Path | None = None) -> DungeonConfig:
    """Reload configuration from disk.

    Args:
        config_path: Optional path to load from

    Returns:
        Newly loaded configuration
    """
    global _global_config
    _global_config = DungeonConfig.load(config_path)
    return _global_config
