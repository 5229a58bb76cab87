"""Configuration and logging setup for the trade journal.

Settings live in a TOML file under the config directory, which
defaults to ~/.config/tradejournal and can be moved with the
TRADEJOURNAL_HOME environment variable.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Optional

import toml


CONFIG_FILENAME = "config.toml"
DB_FILENAME = "journal.db"
SESSION_FILENAME = "session.toml"

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "openai": {
        "api_key": "",  # Leave empty to use OPENAI_API_KEY env var
        "model": "gpt-4o",
    },
    "journal": {
        "currency": "₹",
        "default_feeling": "Calm",
    },
    "challenge": {
        "title": "10L Professional Milestone",
        "starting_capital": 500000.0,
        "target_capital": 1000000.0,
    },
    "logging": {
        "level": "WARNING",
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    home = os.environ.get("TRADEJOURNAL_HOME")
    if home:
        return Path(home)
    return Path.home() / ".config" / "tradejournal"


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILENAME


def get_db_path() -> Path:
    """Get the database path."""
    return get_config_dir() / DB_FILENAME


def get_session_path() -> Path:
    return get_config_dir() / SESSION_FILENAME


def _merge(base: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        config_path: Optional explicit path to a config file.

    Returns:
        Config dict. Defaults are returned when the file is missing.

    Raises:
        toml.TomlDecodeError: If the file exists but is not valid TOML.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, toml.load(path))


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file if none exists.

    Returns:
        Path to the configuration file.
    """
    path = config_path or get_config_path()
    if path.exists():
        return path

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return path


def setup_logging(level: str = "WARNING") -> None:
    """Route library logging through rich.

    Args:
        level: Logging level name.
    """
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
