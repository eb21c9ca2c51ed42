from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any) -> str:
    """
    Сериализует отчёт generate/inspect в одну строку JSON.
    Кириллица и прочий не-ASCII текст промптов остаётся как есть.
    """
    return json.dumps(obj, ensure_ascii=False)
