"""
Core Module - Foundation components for the Eliza engine
========================================================

This module provides the foundational components including:
- Configuration management
- Logging setup
- Exception handling
"""

from .config import Config, EngineConfig, LoggingConfig, load_config
from .exceptions import (
    ElizaError,
    ScriptError,
    ConfigurationError,
    SettingsError,
)
from .logging import setup_logging, get_logger

__all__ = [
    "Config",
    "EngineConfig",
    "LoggingConfig",
    "load_config",
    "ElizaError",
    "ScriptError",
    "ConfigurationError",
    "SettingsError",
    "setup_logging",
    "get_logger",
]
