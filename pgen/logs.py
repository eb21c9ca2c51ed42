from __future__ import annotations

import logging
import os

# -------------------- Logging setup --------------------

_ROOT = "pgen"
DEBUG_ENV = "PGEN_DEBUG"


def setup_logging() -> logging.Logger:
    """
    Однократная настройка логгера пакета.

    Уровень DEBUG включается переменной окружения PGEN_DEBUG,
    иначе WARNING. Повторные вызовы только меняют уровень.
    """
    log = logging.getLogger(_ROOT)
    level = logging.DEBUG if os.environ.get(DEBUG_ENV) else logging.WARNING
    log.setLevel(level)
    if not log.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        log.addHandler(h)
        log.propagate = False
    return log


__all__ = ["setup_logging", "DEBUG_ENV"]
