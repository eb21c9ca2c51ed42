"""
Грамматика шаблонов с взвешенным выбором: лексер, парсер, вычислитель.

Два входа ядра:
- parse_template(text, lenient) -> Template
- generate(template, policy, count, rng) -> List[str]
"""

from __future__ import annotations

from .analysis import AlternativeInfo, TemplateStats, analyze_template, list_alternatives
from .evaluator import TemplateEvaluator, generate
from .model import Alternative, ChoiceNode, LiteralNode, Node, NodeType, SequenceNode, Template
from .parser import ParseErrorKind, TemplateParseError, TemplateParser, parse_template
from .random_source import RandomSource, make_random_source

__all__ = [
    "Template",
    "Node",
    "NodeType",
    "LiteralNode",
    "SequenceNode",
    "ChoiceNode",
    "Alternative",
    "ParseErrorKind",
    "TemplateParseError",
    "TemplateParser",
    "parse_template",
    "TemplateEvaluator",
    "generate",
    "RandomSource",
    "make_random_source",
    "TemplateStats",
    "AlternativeInfo",
    "analyze_template",
    "list_alternatives",
]
