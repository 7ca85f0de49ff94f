"""
Configuration Management - YAML-based settings with environment overrides
=========================================================================

This module handles engine settings including:
- Loading from YAML files
- Environment variable overrides
- Default values
- Validation
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

from .exceptions import SettingsError


@dataclass
class EngineConfig:
    """
    Responder engine settings.

    Attributes:
        script_path: Rule script file (YAML or JSON); empty uses the built-in script
        memory_size: Capacity of each session's memory queue
        max_redirects: Longest chain of ``=keyword`` redirects allowed per turn
    """
    script_path: str = ""
    memory_size: int = 5
    max_redirects: int = 5

    def validate(self) -> None:
        """Validate engine settings."""
        if self.memory_size < 1:
            raise SettingsError(f"memory_size must be at least 1, got {self.memory_size}")

        if self.max_redirects < 0:
            raise SettingsError(f"max_redirects cannot be negative, got {self.max_redirects}")

        if self.script_path and not Path(self.script_path).exists():
            raise SettingsError(
                "Script file not found",
                {"path": self.script_path}
            )


@dataclass
class LoggingConfig:
    """Logging settings passed to ``setup_logging``."""
    level: str = "WARNING"
    log_dir: str = ""
    json_format: bool = False
    console_output: bool = True

    def validate(self) -> None:
        if self.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise SettingsError(f"Invalid log level: {self.level}")


@dataclass
class Config:
    """
    Main configuration container.

    Aggregates all configuration sections into a single object.
    """
    engine: EngineConfig = field(default_factory=EngineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_dir: str = ""

    def validate(self) -> None:
        """
        Validate all configuration sections.

        Raises:
            SettingsError: If any section is invalid
        """
        self.engine.validate()
        self.logging.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "engine": asdict(self.engine),
            "logging": asdict(self.logging),
        }


def get_default_config_dir() -> Path:
    """
    Get the default configuration directory path.

    Returns:
        Path to the configuration directory
    """
    if "ELIZA_CONFIG_DIR" in os.environ:
        return Path(os.environ["ELIZA_CONFIG_DIR"])

    if "XDG_CONFIG_HOME" in os.environ:
        return Path(os.environ["XDG_CONFIG_HOME"]) / "eliza-engine"

    return Path.home() / ".config" / "eliza-engine"


def load_config(config_path: Optional[str] = None, load_env: bool = True) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    Values are applied in this order:
    1. Default values from dataclass
    2. Values from YAML file
    3. Environment variable overrides

    Args:
        config_path: Path to configuration file (optional)
        load_env: Whether to load environment variable overrides

    Returns:
        Config object with loaded values

    Raises:
        SettingsError: If configuration is invalid or cannot be loaded
    """
    config = Config()
    config.config_dir = str(get_default_config_dir())

    if config_path:
        yaml_path = Path(config_path)
        if not yaml_path.exists():
            raise SettingsError("Config file not found", {"path": str(yaml_path)})
    else:
        yaml_path = Path(config.config_dir) / "config.yaml"

    if yaml_path.exists():
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"Failed to parse config file: {e}", {"path": str(yaml_path)})
        except IOError as e:
            raise SettingsError(f"Failed to read config file: {e}", {"path": str(yaml_path)})

        if not isinstance(yaml_config, dict):
            raise SettingsError("Config file must contain a mapping", {"path": str(yaml_path)})
        _apply_yaml_config(config, yaml_config)

    if load_env:
        _apply_env_overrides(config)

    config.validate()

    return config


def _apply_yaml_config(config: Config, yaml_config: Dict[str, Any]) -> None:
    """Apply YAML configuration values to Config object."""
    for section in ("engine", "logging"):
        values = yaml_config.get(section)
        if values is None:
            continue
        if not isinstance(values, dict):
            raise SettingsError(
                f"Config section '{section}' must be a mapping",
                {"got": type(values).__name__}
            )

        section_obj = getattr(config, section)
        for key, value in values.items():
            if hasattr(section_obj, key):
                default = getattr(section_obj, key)
                setattr(section_obj, key, _convert(value, type(default), f"{section}.{key}"))


def _convert(value: Any, target: type, name: str) -> Any:
    """Coerce a settings value to the type of its default."""
    if target == bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes", "on")
        raise SettingsError(f"Invalid value for {name}: {value!r}")

    if target == int and isinstance(value, bool):
        raise SettingsError(f"Invalid value for {name}: {value!r}")

    if target == str and value is None:
        return ""
    if target == str and not isinstance(value, (str, int, float)):
        raise SettingsError(f"Invalid value for {name}: {value!r}")

    try:
        return target(value)
    except (TypeError, ValueError):
        raise SettingsError(f"Invalid value for {name}: {value!r}")


def _apply_env_overrides(config: Config) -> None:
    """
    Apply environment variable overrides to Config object.

    For example: ELIZA_MEMORY_SIZE=3, ELIZA_LOG_LEVEL=DEBUG
    """
    env_mappings = {
        "ELIZA_SCRIPT_PATH": ("engine", "script_path"),
        "ELIZA_MEMORY_SIZE": ("engine", "memory_size", int),
        "ELIZA_MAX_REDIRECTS": ("engine", "max_redirects", int),
        "ELIZA_LOG_LEVEL": ("logging", "level"),
        "ELIZA_LOG_DIR": ("logging", "log_dir"),
        "ELIZA_LOG_JSON": ("logging", "json_format", bool),
    }

    for env_var, mapping in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        section, key = mapping[0], mapping[1]
        converter = mapping[2] if len(mapping) > 2 else str

        setattr(getattr(config, section), key, _convert(value, converter, env_var))
