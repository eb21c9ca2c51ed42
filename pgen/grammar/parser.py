"""
Парсер шаблонов с взвешенным выбором.

Строит неизменяемое дерево Template из последовательности токенов.

Грамматика:
template     → alternatives EOF
alternatives → alternative ("|" alternative)*
alternative  → (TEXT | ":" | choice)*
choice       → "{" alternatives "}"

Вес альтернативы: всё, что стоит после последнего ":" на её собственном
уровне вложенности. Двоеточия внутри вложенных групп относятся к этим группам.
На верхнем уровне без "|" двоеточие: обычный текст.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .lexer import TemplateLexer, Token, TokenType
from .model import (
    DEFAULT_WEIGHT,
    Alternative,
    ChoiceNode,
    LiteralNode,
    Node,
    SequenceNode,
    Template,
)
from ..errors import PGUserError

_LOG = logging.getLogger("pgen.grammar.parser")

# Целое или десятичное число; экспоненты, inf и nan не допускаются
_WEIGHT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


class ParseErrorKind(Enum):
    """Виды ошибок разбора шаблона."""
    UNTERMINATED_GROUP = "unterminated_group"
    UNEXPECTED_CLOSE_BRACE = "unexpected_close_brace"
    INVALID_WEIGHT = "invalid_weight"
    NEGATIVE_WEIGHT = "negative_weight"


class TemplateParseError(PGUserError, ValueError):
    """
    Ошибка парсинга шаблона.

    Attributes:
        kind: Вид ошибки
        offset: Позиция (индекс символа) в исходной строке
        detail: Описание проблемы
        fragment: Проблемный фрагмент (для ошибок веса: текст после ':')
    """

    def __init__(self, kind: ParseErrorKind, offset: int, detail: str, fragment: Optional[str] = None):
        self.kind = kind
        self.offset = offset
        self.detail = detail
        self.fragment = fragment
        super().__init__(f"{detail} at char {offset}")


# Часть сырой альтернативы: текстовый токен, токен ':' или уже разобранная группа
_Part = Union[Token, ChoiceNode]


@dataclass
class _RawAlternative:
    """Альтернатива до разбора веса."""
    start: int
    end: int = 0
    parts: List[_Part] = field(default_factory=list)


class _Frame:
    """Открытая группа на стеке разбора (open_token=None: верхний уровень)."""

    def __init__(self, open_token: Optional[Token], start: int):
        self.open_token = open_token
        self.alternatives: List[_RawAlternative] = []
        self.current = _RawAlternative(start=start)

    def close_alternative(self, end: int) -> None:
        self.current.end = end
        self.alternatives.append(self.current)


def _last_colon(raw: _RawAlternative) -> Optional[Token]:
    """Последний ':' собственного уровня альтернативы."""
    colon: Optional[Token] = None
    for part in raw.parts:
        if isinstance(part, Token) and part.type == TokenType.COLON:
            colon = part
    return colon


class TemplateParser:
    """
    Парсер шаблонов.

    Args:
        lenient: Разрешить некорректные веса: вся альтернатива вместе
                 с ':' и хвостом считается текстом с весом 1.0.
                 Неположительный вес остаётся ошибкой в любом режиме.
    """

    def __init__(self, lenient: bool = False):
        self.lenient = lenient
        self._source = ""
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, text: str) -> Template:
        """
        Парсит строку шаблона в дерево.

        Args:
            text: Исходный текст шаблона

        Returns:
            Неизменяемый Template

        Raises:
            TemplateParseError: При синтаксической ошибке или некорректном весе
        """
        self._source = text
        self._tokens = TemplateLexer(text).tokenize()
        self._position = 0

        raw_alternatives = self._parse_alternatives()

        root: Node
        if len(raw_alternatives) == 1:
            root = self._build_sequence(raw_alternatives[0].parts)
        else:
            # "a|b" на верхнем уровне: неявная группа выбора
            root = self._build_choice(raw_alternatives)

        return Template(root=root, source=text)

    def _parse_alternatives(self) -> List[_RawAlternative]:
        """
        Собирает альтернативы верхнего уровня до EOF.

        Открытые группы хранятся в явном стеке фреймов, поэтому глубина
        вложенности не ограничена стеком вызовов. Группа превращается
        в ChoiceNode в момент закрытия и становится частью альтернативы
        родительского фрейма.
        """
        stack = [_Frame(None, self._current_position())]

        while True:
            token = self._advance()
            frame = stack[-1]

            if token.type in (TokenType.TEXT, TokenType.COLON):
                frame.current.parts.append(token)
            elif token.type == TokenType.PIPE:
                frame.close_alternative(token.position)
                frame.current = _RawAlternative(start=token.end)
            elif token.type == TokenType.LBRACE:
                stack.append(_Frame(token, token.end))
            elif token.type == TokenType.RBRACE:
                if frame.open_token is None:
                    raise TemplateParseError(
                        ParseErrorKind.UNEXPECTED_CLOSE_BRACE,
                        token.position,
                        "Unexpected closing brace",
                    )
                stack.pop()
                frame.close_alternative(token.position)
                stack[-1].current.parts.append(self._build_choice(frame.alternatives))
            else:
                if frame.open_token is not None:
                    raise TemplateParseError(
                        ParseErrorKind.UNTERMINATED_GROUP,
                        frame.open_token.position,
                        "Unclosed open brace",
                    )
                frame.close_alternative(token.position)
                return frame.alternatives

    # Построение узлов

    def _build_choice(self, raw_alternatives: List[_RawAlternative]) -> ChoiceNode:
        alternatives: List[Alternative] = []
        total = 0.0
        for order, raw in enumerate(raw_alternatives):
            alt = self._build_alternative(raw, order)
            total += alt.weight
            if not math.isfinite(total):
                # Каждый вес конечен, но их сумма переполнила float
                colon = _last_colon(raw)
                offset = colon.end if colon is not None else raw.start
                weight_text = self._source[offset:raw.end]
                raise TemplateParseError(
                    ParseErrorKind.INVALID_WEIGHT,
                    offset,
                    f"Group weights sum to infinity at '{weight_text.strip()}'",
                    fragment=weight_text,
                )
            alternatives.append(alt)
        return ChoiceNode(tuple(alternatives))

    def _build_alternative(self, raw: _RawAlternative, order: int) -> Alternative:
        """Отделяет вес по последнему ':' уровня альтернативы."""
        colon = _last_colon(raw)
        if colon is None:
            return Alternative(self._build_sequence(raw.parts), DEFAULT_WEIGHT, order)

        weight_text = self._source[colon.end:raw.end]
        weight = self._parse_weight(weight_text, colon.end)

        if weight is None:
            _LOG.debug(
                "Invalid weight %r at char %d treated as literal text", weight_text, colon.end
            )
            return Alternative(self._build_sequence(raw.parts), DEFAULT_WEIGHT, order)

        return Alternative(self._build_sequence(raw.parts[:raw.parts.index(colon)]), weight, order)

    def _parse_weight(self, text: str, offset: int) -> Optional[float]:
        """
        Разбирает текст веса.

        Returns:
            Положительный вес, либо None в мягком режиме для нечислового текста
        """
        stripped = text.strip()
        value = float(stripped) if _WEIGHT_RE.fullmatch(stripped) else None

        if value is None or not math.isfinite(value):
            if self.lenient:
                return None
            raise TemplateParseError(
                ParseErrorKind.INVALID_WEIGHT,
                offset,
                f"Invalid weight specifier '{text}'",
                fragment=text,
            )

        if value <= 0:
            raise TemplateParseError(
                ParseErrorKind.NEGATIVE_WEIGHT,
                offset,
                f"Weight must be positive, got '{stripped}'",
                fragment=text,
            )

        return value

    @staticmethod
    def _build_sequence(parts: List[_Part]) -> SequenceNode:
        """Склеивает соседние текстовые токены (и лишние ':') в литералы."""
        children: List[Node] = []
        buf: List[str] = []

        for part in parts:
            if isinstance(part, Token):
                buf.append(part.value)
                continue
            if buf:
                children.append(LiteralNode("".join(buf)))
                buf = []
            children.append(part)

        if buf:
            children.append(LiteralNode("".join(buf)))

        return SequenceNode(tuple(children))

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        """Возвращает текущий токен без продвижения позиции."""
        return self._tokens[self._position]

    def _current_position(self) -> int:
        """Возвращает текущую позицию в исходной строке."""
        return self._current_token().position

    def _advance(self) -> Token:
        """Продвигает позицию и возвращает предыдущий токен."""
        token = self._current_token()
        if token.type != TokenType.EOF:
            self._position += 1
        return token


def parse_template(text: str, lenient: bool = False) -> Template:
    """
    Удобная функция для разбора шаблона из строки.

    Raises:
        TemplateParseError: При ошибке парсинга
    """
    return TemplateParser(lenient=lenient).parse(text)


__all__ = [
    "ParseErrorKind",
    "TemplateParseError",
    "TemplateParser",
    "parse_template",
]
