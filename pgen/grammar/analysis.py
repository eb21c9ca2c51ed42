"""
Статический анализ разобранного шаблона.

Используется командой `pgen inspect`: размер пространства вариантов,
границы длины результата и плоская таблица альтернатив с вероятностями.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union, cast

from .evaluator import TemplateEvaluator
from .model import ChoiceNode, Node, NodeType, SequenceNode, Template
from ..types import SelectionPolicy


@dataclass(frozen=True)
class TemplateStats:
    choices: int       # число групп {...}
    max_depth: int     # максимальная вложенность групп (0: групп нет)
    variants: int      # число различных путей выбора
    min_length: int
    max_length: int


@dataclass(frozen=True)
class AlternativeInfo:
    """
    Строка таблицы альтернатив.

    path: индексы альтернатив от корня, например "0.1.2";
    probability: локальная вероятность выбора внутри своей группы.
    """
    path: str
    text: str
    weight: float
    probability: float


def _walk_counts(root: Node) -> Tuple[int, int, int]:
    """
    Возвращает (число групп, макс. глубина, число вариантов) для узла.

    Обратный порядок обхода через явный стек: варианты перемножаются
    по последовательности и складываются по альтернативам группы.
    """
    results: Dict[int, Tuple[int, int, int]] = {}
    # (узел, глубина, дети уже в стеке)
    stack: List[Tuple[Node, int, bool]] = [(root, 0, False)]

    while stack:
        node, depth, expanded = stack.pop()
        node_type = node.get_type()

        if node_type == NodeType.SEQUENCE:
            children = list(cast(SequenceNode, node).children)
            child_depth = depth
        elif node_type == NodeType.CHOICE:
            children = [alt.node for alt in cast(ChoiceNode, node).alternatives]
            child_depth = depth + 1
        else:
            results[id(node)] = (0, depth, 1)
            continue

        if not expanded:
            stack.append((node, depth, True))
            stack.extend((child, child_depth, False) for child in children)
            continue

        is_choice = node_type == NodeType.CHOICE
        choices, max_depth, variants = (1, depth + 1, 0) if is_choice else (0, depth, 1)
        for child in children:
            c, d, v = results[id(child)]
            choices += c
            max_depth = max(max_depth, d)
            variants = variants + v if is_choice else variants * v
        results[id(node)] = (choices, max_depth, variants)

    return results[id(root)]


def analyze_template(template: Template) -> TemplateStats:
    choices, max_depth, variants = _walk_counts(template.root)
    return TemplateStats(
        choices=choices,
        max_depth=max_depth,
        variants=variants,
        min_length=TemplateEvaluator(SelectionPolicy.SHORTEST).extremal_length(template.root),
        max_length=TemplateEvaluator(SelectionPolicy.LONGEST).extremal_length(template.root),
    )


def list_alternatives(template: Template) -> List[AlternativeInfo]:
    """Плоский список всех альтернатив в порядке обхода (сначала родитель)."""
    out: List[AlternativeInfo] = []

    root = template.root
    prefix = "0" if root.get_type() == NodeType.CHOICE else ""
    # В стеке либо готовая строка таблицы, либо поддерево с префиксом пути
    stack: List[Union[AlternativeInfo, Tuple[Node, str]]] = [(root, prefix)]

    while stack:
        item = stack.pop()
        if isinstance(item, AlternativeInfo):
            out.append(item)
            continue

        node, prefix = item
        node_type = node.get_type()
        pending: List[Union[AlternativeInfo, Tuple[Node, str]]] = []

        if node_type == NodeType.SEQUENCE:
            groups = [c for c in cast(SequenceNode, node).children if c.get_type() == NodeType.CHOICE]
            pending.extend((group, f"{prefix}{index}") for index, group in enumerate(groups))
        elif node_type == NodeType.CHOICE:
            choice = cast(ChoiceNode, node)
            total = choice.total_weight
            for alt in choice.alternatives:
                path = f"{prefix}.{alt.declared_order}"
                pending.append(AlternativeInfo(
                    path=path,
                    text=str(alt.node),
                    weight=alt.weight,
                    probability=alt.weight / total,
                ))
                pending.append((alt.node, path + "."))

        stack.extend(reversed(pending))

    return out


__all__ = ["TemplateStats", "AlternativeInfo", "analyze_template", "list_alternatives"]
