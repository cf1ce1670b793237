"""Tests for configuration loading."""

from pathlib import Path

import pytest

from padmap.config import PadmapConfig, load_config


def test_load_valid_config(tmp_config: Path) -> None:
    """Test loading a valid TOML config file."""
    config = load_config(tmp_config)
    assert isinstance(config, PadmapConfig)
    assert config.room_lookup.base_url == "http://127.0.0.1:8788"
    assert config.room_lookup.timeout_seconds == 3
    assert config.replay.messages.endswith("messages.jsonl")
    assert config.logging.level == "DEBUG"
    assert config.logging.keep_days == 7


def test_load_missing_file() -> None:
    """Test that missing config file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_config("nonexistent.toml")


def test_load_partial_config(tmp_path: Path) -> None:
    """Test that missing sections fall back to defaults."""
    config_file = tmp_path / "partial.toml"
    config_file.write_text('[replay]\nrooms = "rooms.jsonl"\n')

    config = load_config(config_file)
    assert config.replay.rooms == "rooms.jsonl"
    # Missing fields and sections should use defaults
    assert config.replay.messages == "data/messages.jsonl"
    assert config.room_lookup.base_url == ""
    assert config.logging.level == "INFO"


def test_load_empty_config(tmp_path: Path) -> None:
    """Test that an empty config file uses all defaults."""
    config_file = tmp_path / "empty.toml"
    config_file.write_text("")

    config = load_config(config_file)
    assert config.room_lookup.timeout_seconds == 10.0
    assert config.logging.max_total_mb == 100
    assert config.replay.rooms == ""
