"""
Загрузчик файла настроек pgen.yaml.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import ConfigError, GeneratorConfig, DEFAULT_CONFIG
from .paths import config_path

_LOG = logging.getLogger("pgen.config")
_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(root: Path, explicit: Optional[Path] = None) -> GeneratorConfig:
    """
    Загружает настройки генератора.

    Args:
        root: Каталог, в котором ищется pgen.yaml
        explicit: Путь из --config; в отличие от pgen.yaml обязан существовать

    Returns:
        GeneratorConfig (пустой, если файла нет)
    """
    if explicit is not None:
        path = explicit
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = config_path(root)
        if not path.is_file():
            return DEFAULT_CONFIG

    _LOG.debug("Loading config from %s", path)
    return GeneratorConfig.from_dict(_read_yaml_map(path))


__all__ = ["load_config"]
