"""
Вычислитель шаблонов.

Проходит по дереву Template и раскрывает его в строку, выбирая
по одной альтернативе в каждой группе согласно политике выбора.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple, cast

from .model import (
    Alternative,
    ChoiceNode,
    LiteralNode,
    Node,
    NodeType,
    SequenceNode,
    Template,
)
from .random_source import RandomSource, make_random_source
from ..types import SelectionPolicy


class TemplateEvaluator:
    """
    Вычислитель шаблонов.

    Политика применяется рекурсивно ко всем вложенным группам.
    Для RANDOM каждая группа получает собственный независимый бросок.
    """

    def __init__(self, policy: SelectionPolicy = SelectionPolicy.RANDOM, rng: Optional[RandomSource] = None):
        """
        Args:
            policy: Политика выбора альтернатив
            rng: Источник случайности (нужен только для RANDOM)
        """
        self.policy = policy
        self.rng = rng if rng is not None else make_random_source()
        # id(узла) -> (экстремальная длина, индекс выбранной альтернативы)
        self._extremal: Dict[int, Tuple[int, int]] = {}

    def render(self, template: Template) -> str:
        """Раскрывает шаблон в одну строку."""
        self._extremal = {}
        return self.evaluate(template.root)

    def evaluate(self, node: Node) -> str:
        """
        Раскрывает узел в строку.

        Обход в прямом порядке через явный стек, слева направо: порядок
        бросков для RANDOM совпадает с порядком групп в тексте.
        Для корректного шаблона никогда не завершается ошибкой.
        """
        out: List[str] = []
        stack: List[Node] = [node]

        while stack:
            current = stack.pop()
            node_type = current.get_type()

            if node_type == NodeType.LITERAL:
                out.append(cast(LiteralNode, current).text)
            elif node_type == NodeType.SEQUENCE:
                stack.extend(reversed(cast(SequenceNode, current).children))
            elif node_type == NodeType.CHOICE:
                stack.append(self.select(cast(ChoiceNode, current)).node)
            else:
                raise TypeError(f"Unknown node type: {node_type}")

        return "".join(out)

    def select(self, choice: ChoiceNode) -> Alternative:
        """Выбирает альтернативу группы по текущей политике."""
        if self.policy == SelectionPolicy.RANDOM:
            return self._select_random(choice)
        elif self.policy == SelectionPolicy.MOST_LIKELY:
            return _leftmost_best(choice.alternatives, lambda alt: alt.weight, prefer_max=True)
        elif self.policy == SelectionPolicy.LEAST_LIKELY:
            return _leftmost_best(choice.alternatives, lambda alt: alt.weight, prefer_max=False)
        else:
            _, index = self._extremal_choice(choice)
            return choice.alternatives[index]

    def _select_random(self, choice: ChoiceNode) -> Alternative:
        """
        Выбор, пропорциональный весам.

        Бросок u ∈ [0, total) и проход по накопленным весам
        в порядке объявления: выигрывает первая альтернатива,
        чья накопленная сумма превышает u.
        """
        draw = self.rng.random() * choice.total_weight
        cumulative = 0.0
        for alt in choice.alternatives:
            cumulative += alt.weight
            if draw < cumulative:
                return alt
        # Погрешность округления float
        return choice.alternatives[-1]

    # Экстремальные длины (SHORTEST / LONGEST)

    def extremal_length(self, node: Node) -> int:
        """
        Минимальная (SHORTEST) или максимальная (LONGEST) длина раскрытия узла.

        Считается лениво, только по поддереву узла, в обратном порядке
        обхода через явный стек; результаты для групп кэшируются
        на время одного render.
        """
        lengths: Dict[int, int] = {}
        # (узел, дети уже в стеке)
        stack: List[Tuple[Node, bool]] = [(node, False)]

        while stack:
            current, expanded = stack.pop()
            key = id(current)
            node_type = current.get_type()

            if node_type == NodeType.LITERAL:
                lengths[key] = len(cast(LiteralNode, current).text)
                continue

            if node_type == NodeType.SEQUENCE:
                children = list(cast(SequenceNode, current).children)
            elif node_type == NodeType.CHOICE:
                cached = self._extremal.get(key)
                if cached is not None:
                    lengths[key] = cached[0]
                    continue
                children = [alt.node for alt in cast(ChoiceNode, current).alternatives]
            else:
                raise TypeError(f"Unknown node type: {node_type}")

            if not expanded:
                stack.append((current, True))
                stack.extend((child, False) for child in children)
            elif node_type == NodeType.SEQUENCE:
                lengths[key] = sum(lengths[id(child)] for child in children)
            else:
                lengths[key] = self._resolve_extremal(cast(ChoiceNode, current), lengths)

        return lengths[id(node)]

    def _extremal_choice(self, choice: ChoiceNode) -> Tuple[int, int]:
        if id(choice) not in self._extremal:
            self.extremal_length(choice)
        return self._extremal[id(choice)]

    def _resolve_extremal(self, choice: ChoiceNode, lengths: Dict[int, int]) -> int:
        """Выбирает альтернативу группы по уже посчитанным длинам и кэширует выбор."""
        prefer_max = self.policy == SelectionPolicy.LONGEST
        best = _leftmost_best(choice.alternatives, lambda alt: lengths[id(alt.node)], prefer_max)

        length = lengths[id(best.node)]
        self._extremal[id(choice)] = (length, choice.alternatives.index(best))
        return length


def _leftmost_best(
    alternatives: Tuple[Alternative, ...],
    key: Callable[[Alternative], float],
    prefer_max: bool,
) -> Alternative:
    """Альтернатива с максимальным/минимальным ключом; при равенстве: самая левая."""
    best = alternatives[0]
    best_key = key(best)
    for alt in alternatives[1:]:
        k = key(alt)
        if (k > best_key) if prefer_max else (k < best_key):
            best, best_key = alt, k
    return best


def generate(
    template: Template,
    policy: SelectionPolicy = SelectionPolicy.RANDOM,
    count: int = 1,
    rng: Optional[RandomSource] = None,
) -> List[str]:
    """
    Раскрывает шаблон count раз.

    Args:
        template: Разобранный шаблон
        policy: Политика выбора
        count: Число результатов (>= 0)
        rng: Источник случайности; по умолчанию новый несидированный генератор

    Returns:
        Список из count строк. Для детерминированных политик все строки одинаковы.

    Raises:
        ValueError: Если count не является неотрицательным целым
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValueError(f"count must be a non-negative integer, got {count!r}")
    if count == 0:
        return []

    evaluator = TemplateEvaluator(policy, rng)

    if policy.is_deterministic:
        return [evaluator.render(template)] * count

    return [evaluator.render(template) for _ in range(count)]


__all__ = ["TemplateEvaluator", "generate"]
