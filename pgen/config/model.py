"""
Модель файла настроек pgen.yaml.

Все поля необязательны: None означает «не задано в файле»,
тогда действует значение по умолчанию из RunOptions.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from ..errors import PGUserError
from ..types import SelectionPolicy


class ConfigError(PGUserError, ValueError):
    """Ошибка загрузки конфигурации с указанием проблемного ключа."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        prefix = f"{key}: " if key else ""
        super().__init__(prefix + message)


def _expect(key: str, value: Any, tp: type) -> Any:
    # bool: подкласс int, поэтому num: true должно быть ошибкой
    if isinstance(value, tp) and not (tp is int and isinstance(value, bool)):
        return value
    raise ConfigError(f"expected {tp.__name__}, got {type(value).__name__}", key)


@dataclass(frozen=True)
class GeneratorConfig:
    num: Optional[int] = None
    out: Optional[str] = None
    verbose: Optional[bool] = None
    dry_run: Optional[bool] = None
    choice_guidance: Optional[SelectionPolicy] = None
    ignore_invalid_weight_literals: Optional[bool] = None
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        """Создание экземпляра из словаря (из YAML) со строгой проверкой ключей."""
        allowed = {f.name for f in fields(cls)}
        extras = set(data.keys()) - allowed
        if extras:
            raise ConfigError(f"unexpected keys: {sorted(map(str, extras))!r}")

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            if key in ("num", "seed"):
                kwargs[key] = _expect(key, value, int)
            elif key == "out":
                kwargs[key] = _expect(key, value, str)
            elif key == "choice_guidance":
                name = _expect(key, value, str)
                try:
                    kwargs[key] = SelectionPolicy.parse(name)
                except ValueError as e:
                    raise ConfigError(str(e), key) from e
            else:
                kwargs[key] = _expect(key, value, bool)

        num = kwargs.get("num")
        if num is not None and num < 0:
            raise ConfigError("must be a non-negative integer", "num")

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML (только заданные поля)."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[f.name] = value.value if isinstance(value, SelectionPolicy) else value
        return result


DEFAULT_CONFIG = GeneratorConfig()

__all__ = ["GeneratorConfig", "ConfigError", "DEFAULT_CONFIG"]
