"""
Configuration loading for Prompt Generator.
"""

from __future__ import annotations

from .load import load_config
from .model import ConfigError, GeneratorConfig, DEFAULT_CONFIG
from .paths import CONFIG_FILE, config_path

__all__ = [
    "load_config",
    "ConfigError",
    "GeneratorConfig",
    "DEFAULT_CONFIG",
    "CONFIG_FILE",
    "config_path",
]
