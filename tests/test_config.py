"""Tests for configuration loading.

**Feature: trade-journal**
"""

import tempfile
from pathlib import Path

import pytest
import toml

from tradejournal.config import (
    DEFAULT_CONFIG,
    create_template_config,
    get_config_dir,
    get_db_path,
    load_config,
)


@pytest.fixture
def config_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "config.toml"


class TestLoadConfig:
    """
    **Feature: trade-journal, Property 40: Config Defaults**

    Missing keys fall back to defaults; present keys override them.
    """

    def test_missing_file_gives_defaults(self, config_path: Path):
        config = load_config(config_path)

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_partial_override(self, config_path: Path):
        config_path.write_text(toml.dumps({"journal": {"currency": "$"}}))

        config = load_config(config_path)

        assert config["journal"]["currency"] == "$"
        assert config["journal"]["default_feeling"] == "Calm"
        assert config["challenge"] == DEFAULT_CONFIG["challenge"]

    def test_template_written_once(self, config_path: Path):
        create_template_config(config_path)
        config_path.write_text(toml.dumps({"logging": {"level": "INFO"}}))

        create_template_config(config_path)

        assert load_config(config_path)["logging"]["level"] == "INFO"

    def test_home_override(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("TRADEJOURNAL_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path
        assert get_db_path() == tmp_path / "journal.db"
