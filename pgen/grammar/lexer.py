"""
Лексер для шаблонов с взвешенным выбором.

Разбивает исходный текст на токены:
- TEXT: обычный текст (экранированные \\{ \\} \\| \\: уже раскрыты)
- LBRACE / RBRACE: границы группы { }
- PIPE: разделитель альтернатив |
- COLON: разделитель веса :
- EOF: конец строки

Каждый токен хранит позицию (индекс символа) в исходной строке
и сырой фрагмент исходника, из которого он получен.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterator, List


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""
    TEXT = "TEXT"
    LBRACE = "LBRACE"    # {
    RBRACE = "RBRACE"    # }
    PIPE = "PIPE"        # |
    COLON = "COLON"      # :
    EOF = "EOF"


ESCAPE_CHAR = "\\"

_SYMBOLS: Dict[str, TokenType] = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "|": TokenType.PIPE,
    ":": TokenType.COLON,
}


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.

    Attributes:
        type: Тип токена
        value: Значение (для TEXT: уже без экранирования)
        position: Позиция начала токена в исходной строке
        raw: Исходный фрагмент текста, покрываемый токеном
    """
    type: TokenType
    value: str
    position: int
    raw: str

    @property
    def end(self) -> int:
        """Позиция сразу за токеном."""
        return self.position + len(self.raw)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, pos={self.position})"


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Лексер не знает о вложенности: балансировку скобок и смысл
    двоеточий определяет парсер.
    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст.

        Returns:
            Список токенов, включая EOF в конце
        """
        tokens: List[Token] = []
        position = 0
        buf: List[str] = []
        text_start = 0

        def flush(end: int) -> None:
            if buf:
                tokens.append(Token(
                    TokenType.TEXT, "".join(buf), text_start, self.text[text_start:end]
                ))
                buf.clear()

        while position < self.length:
            char = self.text[position]

            # Экранированный служебный символ превращается в текст
            if char == ESCAPE_CHAR and position + 1 < self.length and self.text[position + 1] in _SYMBOLS:
                if not buf:
                    text_start = position
                buf.append(self.text[position + 1])
                position += 2
                continue

            token_type = _SYMBOLS.get(char)
            if token_type is not None:
                flush(position)
                tokens.append(Token(token_type, char, position, char))
                position += 1
                continue

            if not buf:
                text_start = position
            buf.append(char)
            position += 1

        flush(position)
        tokens.append(Token(TokenType.EOF, "", position, ""))
        return tokens

    def tokenize_stream(self) -> Iterator[Token]:
        """Генератор для ленивой обработки токенов."""
        for token in self.tokenize():
            yield token


def tokenize_template(text: str) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Список токенов
    """
    return TemplateLexer(text).tokenize()


__all__ = ["TokenType", "Token", "TemplateLexer", "tokenize_template", "ESCAPE_CHAR"]
