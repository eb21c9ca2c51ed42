"""
Ошибки, которые pgen показывает пользователю одной строкой.

CLI перехватывает PGUserError (и ValueError от argparse-значений),
печатает сообщение в stderr и завершается с кодом 2. Всё остальное
считается ошибкой программы и выходит с полным трейсбеком.
"""

from __future__ import annotations


class PGUserError(Exception):
    """
    Исправимая пользователем проблема: битый шаблон, ошибка в pgen.yaml,
    отсутствующий файл с промптом, недоступный файл результатов.
    """
    pass


__all__ = ["PGUserError"]
