"""
Модели данных для шаблонов с взвешенным выбором.

Разобранный шаблон представляет собой неизменяемое дерево из трёх видов узлов:
литерал, последовательность и группа выбора {a|b:3|c}.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union


class NodeType(Enum):
    """Типы узлов дерева шаблона."""
    LITERAL = "literal"
    SEQUENCE = "sequence"
    CHOICE = "choice"


DEFAULT_WEIGHT = 1.0

# Кусок исходной записи: готовый текст или узел, который ещё предстоит развернуть
_SourcePart = Union[str, "Node"]


@dataclass(frozen=True, eq=False)
class Node(ABC):
    """
    Базовый абстрактный класс для всех узлов.

    Сравнение по идентичности (eq=False): вычислитель кэширует
    экстремальные длины по id(узла), а структурно равные поддеревья
    в разных местах шаблона остаются разными узлами.
    """

    @abstractmethod
    def get_type(self) -> NodeType:
        """Возвращает тип узла."""
        pass

    def __str__(self) -> str:
        return node_to_source(self)

    @abstractmethod
    def _source_parts(self) -> List[_SourcePart]:
        """Куски исходной записи узла: строки и дочерние узлы по порядку."""
        pass


def escape_text(text: str) -> str:
    """Экранирует служебные символы литерала: { } | :"""
    out = []
    for ch in text:
        if ch in "{}|:":
            out.append("\\")
        out.append(ch)
    return "".join(out)


def node_to_source(node: Node) -> str:
    """
    Восстанавливает исходную запись узла (с экранированием).

    Обход через явный стек: глубина вложенности групп не ограничена.
    """
    out: List[str] = []
    stack: List[_SourcePart] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
        else:
            stack.extend(reversed(item._source_parts()))
    return "".join(out)


def _format_weight(weight: float) -> str:
    return f"{weight:g}"


@dataclass(frozen=True, eq=False)
class LiteralNode(Node):
    """Непрерывный кусок обычного текста."""
    text: str

    def get_type(self) -> NodeType:
        return NodeType.LITERAL

    def _source_parts(self) -> List[_SourcePart]:
        return [escape_text(self.text)]


@dataclass(frozen=True, eq=False)
class SequenceNode(Node):
    """
    Конкатенация дочерних узлов.

    Пустая последовательность раскрывается в пустую строку.
    """
    children: Tuple[Node, ...] = ()

    def get_type(self) -> NodeType:
        return NodeType.SEQUENCE

    def _source_parts(self) -> List[_SourcePart]:
        return list(self.children)


@dataclass(frozen=True, eq=False)
class Alternative:
    """
    Один вариант внутри группы выбора.

    Attributes:
        node: Содержимое варианта (всегда SequenceNode после парсинга)
        weight: Строго положительный вес
        declared_order: Позиция варианта в группе слева направо (с нуля)
    """
    node: Node
    weight: float = DEFAULT_WEIGHT
    declared_order: int = 0


@dataclass(frozen=True, eq=False)
class ChoiceNode(Node):
    """
    Группа выбора: {alt1|alt2:3|...}

    При вычислении выбирается ровно одна альтернатива.
    Всегда содержит хотя бы одну альтернативу.
    """
    alternatives: Tuple[Alternative, ...]

    def __post_init__(self) -> None:
        if not self.alternatives:
            raise ValueError("ChoiceNode requires at least one alternative")

    def get_type(self) -> NodeType:
        return NodeType.CHOICE

    @property
    def total_weight(self) -> float:
        return sum(alt.weight for alt in self.alternatives)

    def _source_parts(self) -> List[_SourcePart]:
        parts: List[_SourcePart] = ["{"]
        for index, alt in enumerate(self.alternatives):
            if index:
                parts.append("|")
            parts.append(alt.node)
            if alt.weight != DEFAULT_WEIGHT:
                parts.append(":" + _format_weight(alt.weight))
        parts.append("}")
        return parts


@dataclass(frozen=True, eq=False)
class Template:
    """
    Разобранный шаблон.

    Неизменяем после создания; один и тот же экземпляр можно
    безопасно использовать в любом числе вызовов generate.
    """
    root: Node
    source: str = ""

    def __str__(self) -> str:
        return str(self.root)


__all__ = [
    "NodeType",
    "Node",
    "LiteralNode",
    "SequenceNode",
    "ChoiceNode",
    "Alternative",
    "Template",
    "DEFAULT_WEIGHT",
    "escape_text",
    "node_to_source",
]
