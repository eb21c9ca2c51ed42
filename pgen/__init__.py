"""
Prompt Generator: weighted-choice prompt templates.

    {ball:1|box:3}                      -> "box" three times as often as "ball"
    this {{large |}cake|{loud|tiny} boat} is not very nice
"""

from __future__ import annotations

from .grammar import generate, parse_template, TemplateParseError
from .types import SelectionPolicy

__all__ = ["parse_template", "generate", "TemplateParseError", "SelectionPolicy"]
