"""
Лексический анализатор шаблонов.

Работает в два уровня: сначала шаблон делится на структурные элементы
(литеральный текст, {{ expression }}, {% tag %}), затем содержимое каждой
области выражения или тега делится на токены. Сопоставление блоков
({% name %} ... {% endname %}) остаётся парсеру и выполняется на уровне
элементов, до того как директива посмотрит на свои аргументы.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import LexerError

logger = logging.getLogger(__name__)


class TokenType(enum.Enum):
    """Типы токенов внутри областей выражений и тегов."""
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    COMPARISON = "COMPARISON"    # == != <> < > <= >=
    ASSIGN = "ASSIGN"            # =
    PIPE = "PIPE"                # |
    DOT = "DOT"                  # .
    COLON = "COLON"              # :
    COMMA = "COMMA"              # ,
    LBRACKET = "LBRACKET"        # [
    RBRACKET = "RBRACKET"        # ]


class ElementType(enum.Enum):
    """Структурные единицы шаблона."""
    TEXT = "TEXT"
    EXPRESSION = "EXPRESSION"    # {{ ... }}
    TAG = "TAG"                  # {% ... %}


@dataclass(frozen=True)
class Token:
    """
    Токен со смещением в исходном тексте шаблона.

    Токены STRING хранят литерал без кавычек.
    """
    type: TokenType
    value: str
    position: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r})"


@dataclass(frozen=True)
class Element:
    """
    Структурная единица вместе с точным исходным текстом.

    Attributes:
        type: Вид элемента
        raw: Исходный текст вместе с разделителями
        tokens: Токены области (пусто для TEXT)
        line: Строка первого символа (с 1)
        column: Столбец первого символа (с 1)
    """
    type: ElementType
    raw: str
    tokens: Tuple[Token, ...] = ()
    line: int = 1
    column: int = 1

    @property
    def name(self) -> Optional[str]:
        """Имя тега; None для всего, что не является корректным тегом."""
        if self.type is ElementType.TAG and self.tokens and self.tokens[0].type is TokenType.IDENTIFIER:
            return self.tokens[0].value
        return None

    @property
    def arguments(self) -> List[Token]:
        """Токены аргументов тега (всё после имени)."""
        return list(self.tokens[1:])

    def __repr__(self) -> str:
        return f"Element({self.type.name}, {self.raw!r}, {self.line}:{self.column})"


class TemplateLexer:
    """
    Делит текст шаблона на элементы.

    Области {% raw %} распознаются здесь: содержимое до парного {% endraw %}
    становится одним элементом TEXT и никогда не токенизируется.
    """

    _REGION_START = re.compile(r'\{\{|\{%')
    _RAW_END = re.compile(r'\{%\s*endraw\s*%\}')

    # (regex, тип токена); None означает пропускаемый ввод
    TOKEN_SPECS = [
        (r'\s+', None),
        (r'"([^"]*)"|\'([^\']*)\'', TokenType.STRING),
        (r'-?\d+(?:\.\d+)?', TokenType.NUMBER),
        (r'==|!=|<>|<=|>=|<|>', TokenType.COMPARISON),
        (r'=', TokenType.ASSIGN),
        (r'\|', TokenType.PIPE),
        (r'\.', TokenType.DOT),
        (r':', TokenType.COLON),
        (r',', TokenType.COMMA),
        (r'\[', TokenType.LBRACKET),
        (r'\]', TokenType.RBRACKET),
        (r'[A-Za-z_][\w-]*', TokenType.IDENTIFIER),
    ]

    _BOOLEANS = {"true", "false"}

    _compiled_specs = [(re.compile(pattern), token_type) for pattern, token_type in TOKEN_SPECS]

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Element]:
        """
        Делит весь текст на элементы.

        Raises:
            LexerError: При незакрытой области или недопустимом токене
        """
        elements: List[Element] = []

        while self.position < self.length:
            match = self._REGION_START.search(self.text, self.position)
            if match is None:
                elements.append(self._take_text(self.length))
                break

            if match.start() > self.position:
                elements.append(self._take_text(match.start()))

            if match.group(0) == "{{":
                elements.append(self._take_region(ElementType.EXPRESSION, "}}"))
            else:
                tag = self._take_region(ElementType.TAG, "%}")
                elements.append(tag)
                if tag.name == "raw":
                    raw_text = self._take_raw_body()
                    if raw_text is not None:
                        elements.append(raw_text)

        logger.debug(f"Tokenized template into {len(elements)} elements")
        return elements

    def _take_text(self, end: int) -> Element:
        line, column = self.line, self.column
        value = self.text[self.position:end]
        self._advance(len(value))
        return Element(ElementType.TEXT, value, (), line, column)

    def _take_region(self, element_type: ElementType, closing: str) -> Element:
        line, column, start = self.line, self.column, self.position
        end = self.text.find(closing, start + 2)
        if end == -1:
            kind = "expression" if element_type is ElementType.EXPRESSION else "tag"
            raise LexerError(f"Unterminated {kind}, expected '{closing}'", line, column, start)

        content_start = start + 2
        # курсор на начало содержимого, чтобы ошибки токенов указывали реальные позиции
        self._advance(2)
        tokens = granularize(self.text[content_start:end], content_start, self.line, self.column)
        self._advance(end + len(closing) - content_start)

        if element_type is ElementType.TAG and not tokens:
            raise LexerError("Empty tag", line, column, start)

        return Element(element_type, self.text[start:end + len(closing)], tuple(tokens), line, column)

    def _take_raw_body(self) -> Optional[Element]:
        """Забирает сырой текст до {% endraw %}; отсутствие конца остаётся парсеру."""
        match = self._RAW_END.search(self.text, self.position)
        if match is None or match.start() == self.position:
            return None
        return self._take_text(match.start())

    def _advance(self, count: int) -> None:
        """Сдвигает курсор, поддерживая строку и столбец в актуальном состоянии."""
        for _ in range(count):
            if self.position >= self.length:
                break
            if self.text[self.position] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.position += 1


def granularize(source: str, offset: int = 0, line: int = 1, column: int = 1) -> List[Token]:
    """
    Делит содержимое области выражения или тега на токены.

    Args:
        source: Содержимое области без разделителей
        offset: Позиция содержимого в шаблоне
        line: Строка первого символа содержимого
        column: Столбец первого символа содержимого

    Returns:
        Список токенов

    Raises:
        LexerError: При незакрытой строке или неожиданном символе
    """
    tokens: List[Token] = []
    index = 0

    while index < len(source):
        for pattern, token_type in TemplateLexer._compiled_specs:
            match = pattern.match(source, index)
            if not match:
                continue
            if token_type is TokenType.STRING:
                value = match.group(1) if match.group(1) is not None else match.group(2)
            else:
                value = match.group(0)
            if token_type is TokenType.IDENTIFIER and value in TemplateLexer._BOOLEANS:
                token_type = TokenType.BOOLEAN
            if token_type is not None:
                tokens.append(Token(token_type, value, offset + index))
            index = match.end()
            break
        else:
            char = source[index]
            err_line, err_column = _locate(source, index, line, column)
            if char in "\"'":
                raise LexerError("Unterminated string literal", err_line, err_column, offset + index)
            raise LexerError(f"Unexpected character {char!r}", err_line, err_column, offset + index)

    return tokens


def _locate(source: str, index: int, line: int, column: int) -> Tuple[int, int]:
    newlines = source.count("\n", 0, index)
    if newlines == 0:
        return line, column + index
    return line + newlines, index - source.rfind("\n", 0, index)


def tokenize(text: str) -> List[Element]:
    """
    Удобная функция для разбиения шаблона на элементы.

    Raises:
        LexerError: При лексических ошибках
    """
    return TemplateLexer(text).tokenize()


__all__ = [
    "TokenType",
    "ElementType",
    "Token",
    "Element",
    "TemplateLexer",
    "granularize",
    "tokenize",
]
