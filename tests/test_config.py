"""
Test Configuration Module
========================

Unit tests for configuration loading and validation.
"""

import pytest
from pathlib import Path

# Add parent directory to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml

from core.config import (
    Config, EngineConfig, LoggingConfig, load_config
)
from core.exceptions import SettingsError, ElizaError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep user config and ELIZA_* variables out of the tests."""
    for name in ("ELIZA_SCRIPT_PATH", "ELIZA_MEMORY_SIZE", "ELIZA_MAX_REDIRECTS",
                 "ELIZA_LOG_LEVEL", "ELIZA_LOG_DIR", "ELIZA_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ELIZA_CONFIG_DIR", str(tmp_path / "config"))


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_default_values(self):
        """Test default configuration values."""
        config = EngineConfig()
        assert config.script_path == ""
        assert config.memory_size == 5
        assert config.max_redirects == 5

    def test_validation_valid(self):
        """Test valid configuration passes validation."""
        EngineConfig(memory_size=1, max_redirects=0).validate()  # Should not raise

    def test_validation_invalid_memory_size(self):
        """Test memory_size below 1 raises error."""
        with pytest.raises(SettingsError):
            EngineConfig(memory_size=0).validate()

    def test_validation_missing_script(self, tmp_path):
        """Test a missing script file raises error."""
        with pytest.raises(SettingsError):
            EngineConfig(script_path=str(tmp_path / "nope.yaml")).validate()


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_invalid_level(self):
        """Test unknown levels are rejected."""
        with pytest.raises(SettingsError):
            LoggingConfig(level="LOUD").validate()


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self):
        """Test defaults when no config file exists."""
        config = load_config()
        assert config.engine.memory_size == 5
        assert config.logging.level == "WARNING"

    def test_yaml_file(self, tmp_path):
        """Test values are read from YAML."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "engine": {"memory_size": 3, "unknown_key": 1},
            "logging": {"level": "DEBUG"},
        }))
        config = load_config(str(path))
        assert config.engine.memory_size == 3
        assert config.logging.level == "DEBUG"

    def test_env_overrides(self, tmp_path, monkeypatch):
        """Test environment variables override the file."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"engine": {"memory_size": 3}}))
        monkeypatch.setenv("ELIZA_MEMORY_SIZE", "7")
        monkeypatch.setenv("ELIZA_LOG_JSON", "yes")

        config = load_config(str(path))
        assert config.engine.memory_size == 7
        assert config.logging.json_format is True

    def test_invalid_env_value(self, monkeypatch):
        """Test unconvertible environment values raise error."""
        monkeypatch.setenv("ELIZA_MEMORY_SIZE", "lots")
        with pytest.raises(SettingsError):
            load_config()

    def test_missing_explicit_file(self, tmp_path):
        """Test an explicit path must exist."""
        with pytest.raises(SettingsError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_malformed_yaml(self, tmp_path):
        """Test parse errors raise SettingsError."""
        path = tmp_path / "config.yaml"
        path.write_text("engine: [unclosed")
        with pytest.raises(SettingsError):
            load_config(str(path))

    def test_wrong_type_value(self, tmp_path):
        """Test unconvertible YAML values raise SettingsError."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"engine": {"memory_size": "big"}}))
        with pytest.raises(SettingsError) as exc:
            load_config(str(path))
        assert "engine.memory_size" in str(exc.value)

    def test_section_not_a_mapping(self, tmp_path):
        """Test a section written as a list raises SettingsError."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"engine": [1, 2]}))
        with pytest.raises(SettingsError):
            load_config(str(path))

    def test_level_not_a_string(self, tmp_path):
        """Test a nested value where a string belongs raises SettingsError."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"logging": {"level": ["DEBUG"]}}))
        with pytest.raises(SettingsError):
            load_config(str(path))

    def test_values_converted(self, tmp_path):
        """Test quoted numbers and flags are converted to their field types."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "engine": {"memory_size": "4"},
            "logging": {"json_format": "yes", "log_dir": None},
        }))
        config = load_config(str(path))
        assert config.engine.memory_size == 4
        assert config.logging.json_format is True
        assert config.logging.log_dir == ""

    def test_bool_is_not_an_int(self, tmp_path):
        """Test booleans are rejected for integer settings."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"engine": {"max_redirects": True}}))
        with pytest.raises(SettingsError):
            load_config(str(path))

    def test_to_dict(self):
        """Test conversion to dictionary."""
        d = Config().to_dict()
        assert "engine" in d
        assert "logging" in d

    def test_public_api(self):
        """Test the package exports only the loading side of settings."""
        import core
        assert "load_config" in core.__all__
        assert not hasattr(core, "save_config")


class TestExceptions:
    """Tests for the error hierarchy."""

    def test_details_in_message(self):
        """Test details are appended to the message."""
        error = SettingsError("Bad value", {"key": "memory_size"})
        assert isinstance(error, ElizaError)
        assert str(error) == "Bad value | Details: {'key': 'memory_size'}"
        assert str(SettingsError("Plain")) == "Plain"
