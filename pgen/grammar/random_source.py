"""
Источник случайности для вычислителя.

Передаётся явно, а не берётся из глобального генератора модуля random,
чтобы тесты и --seed давали воспроизводимый результат.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """
    Минимальный интерфейс генератора.

    random.Random удовлетворяет ему без адаптеров.
    """

    def random(self) -> float:
        """Равномерное число в [0, 1)."""
        ...


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """Новый независимый генератор; при seed=None: от энтропии ОС."""
    return random.Random(seed)


__all__ = ["RandomSource", "make_random_source"]
