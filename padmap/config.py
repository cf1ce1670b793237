"""Configuration loading from TOML file for padmap."""

import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class RoomLookupConfig:
    """Where "@all" mentions get their room member lists from."""

    # Room-state service URL; empty means use the in-memory store seeded by replay.rooms
    base_url: str = ""
    # Per-request timeout in seconds for the room-state service
    timeout_seconds: float = 10.0


@dataclass
class ReplayConfig:
    """Inputs for the replay entry point (main.py)."""

    # JSON-lines file of raw message records
    messages: str = "data/messages.jsonl"
    # Optional JSON-lines file of raw room contact records (seeds the in-memory store)
    rooms: str = ""


@dataclass
class LoggingConfig:
    """Logging configuration."""

    # Console log level (file handler always captures DEBUG)
    level: str = "INFO"
    # Directory for log files
    dir: str = "data/logs"
    # Number of days to keep rotated log files
    keep_days: int = 30
    # Total log size cap in MB; oldest files are deleted when exceeded
    max_total_mb: int = 100


@dataclass
class PadmapConfig:
    """Top-level padmap configuration, aggregating all sub-configs."""

    room_lookup: RoomLookupConfig = field(default_factory=RoomLookupConfig)
    replay: ReplayConfig = field(default_factory=ReplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path = "config.toml") -> PadmapConfig:
    """
    Load configuration from a TOML file.

    Falls back to defaults for any missing fields.
    Raises FileNotFoundError if the file does not exist.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        raw = tomllib.load(f)

    return PadmapConfig(
        room_lookup=RoomLookupConfig(**raw.get("room_lookup", {})),
        replay=ReplayConfig(**raw.get("replay", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )


def get_config_path() -> str:
    """Get config file path from command-line args or default."""
    # Simple arg parsing: main.py [config_path]
    if len(sys.argv) > 1:
        return sys.argv[1]
    return "config.toml"
