"""
Ввод/вывод вокруг ядра: источник шаблона и файл с результатами.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, cast

from .errors import PGUserError

_LOG = logging.getLogger("pgen.io")


def read_template_source(prompt: Optional[str], file: Optional[str]) -> str:
    """
    Возвращает текст шаблона из позиционного аргумента либо из файла.

    Поддерживаемые формы --file:
    - путь к файлу (завершающий перевод строки отбрасывается)
    - "-" для чтения из stdin

    Raises:
        PGUserError: Если заданы оба источника, ни одного, или файл не читается
    """
    if prompt is not None and file is not None:
        raise PGUserError("Specify either a prompt or --file, not both")
    if prompt is None and file is None:
        raise PGUserError("No prompt given: pass it as an argument or use --file")

    if file is None:
        return cast(str, prompt)

    if file == "-":
        return sys.stdin.read().rstrip("\r\n")

    path = Path(file)
    if not path.is_file():
        raise PGUserError(f"Prompt file not found: {path}")
    try:
        return path.read_text(encoding="utf-8").rstrip("\r\n")
    except OSError as e:
        raise PGUserError(f"Failed to read prompt file {path}: {e}") from e


def write_prompts(path: Path, prompts: Iterable[str]) -> int:
    """Пишет результаты по одному на строку. Возвращает число записанных строк."""
    n = 0
    try:
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            for prompt in prompts:
                fh.write(prompt + "\n")
                n += 1
    except OSError as e:
        raise PGUserError(f"Failed to write output file {path}: {e}") from e
    _LOG.info("Wrote %d prompt(s) to %s", n, path)
    return n


__all__ = ["read_template_source", "write_prompts"]
