"""
Парсер шаблонов методом рекурсивного спуска.

Превращает элементы лексера в список узлов. Теги и блоки диспетчеризуются по
имени через TemplateRegistry; конструкторы блоков получают неразобранное тело
и сами снова вызывают parse(), если хотят его интерпретировать. Так
директивы вкладываются друг в друга.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from .errors import ParserError
from .lexer import Element, ElementType, Token, TokenType
from .nodes import Argument, FilterCall, Literal, Output, Renderable, Text, Variable
from .value import Bool, NIL, Num, Str

if TYPE_CHECKING:
    from .registry import TemplateRegistry

logger = logging.getLogger(__name__)


class TokenStream:
    """
    Курсор по токенам одной области.

    Используется парсером выражений и конструкторами директив.
    """

    def __init__(self, tokens: Sequence[Token]):
        self._tokens = list(tokens)
        self._position = 0

    def peek(self) -> Optional[Token]:
        if self._position >= len(self._tokens):
            return None
        return self._tokens[self._position]

    def next(self) -> Optional[Token]:
        token = self.peek()
        if token is not None:
            self._position += 1
        return token

    def at_end(self) -> bool:
        return self._position >= len(self._tokens)

    def match(self, token_type: TokenType, value: Optional[str] = None) -> Optional[Token]:
        """Поглощает текущий токен, если у него нужный тип (и значение)."""
        token = self.peek()
        if token is None or token.type is not token_type:
            return None
        if value is not None and token.value != value:
            return None
        self._position += 1
        return token

    def expect(self, token_type: TokenType, description: str, value: Optional[str] = None) -> Token:
        token = self.peek()
        if token is None or token.type is not token_type or (value is not None and token.value != value):
            raise ParserError(f"Expected {description}, found {describe(token)}", token)
        self._position += 1
        return token

    def expect_end(self) -> None:
        token = self.peek()
        if token is not None:
            raise ParserError(f"Unexpected {describe(token)}", token)


def describe(token: Optional[Token]) -> str:
    """Читаемое представление токена для сообщений об ошибках."""
    if token is None:
        return "end of input"
    return repr(token)


# -------------------- Выражения --------------------

def parse_argument(stream: TokenStream) -> Argument:
    """
    Разбирает литерал или путь к переменной.

    argument → STRING | NUMBER | BOOLEAN | "nil" | IDENTIFIER accessor*
    accessor → "." IDENTIFIER | "[" (NUMBER | STRING) "]"
    """
    token = stream.next()
    if token is None:
        raise ParserError("Expected a value, found end of input")

    if token.type is TokenType.STRING:
        return Literal(Str(token.value))
    if token.type is TokenType.NUMBER:
        return Literal(Num(float(token.value)))
    if token.type is TokenType.BOOLEAN:
        return Literal(Bool(token.value == "true"))
    if token.type is not TokenType.IDENTIFIER:
        raise ParserError(f"Expected a value, found {describe(token)}", token)
    if token.value == "nil":
        return Literal(NIL)

    path = []
    while True:
        if stream.match(TokenType.DOT):
            path.append(stream.expect(TokenType.IDENTIFIER, "a property name after '.'").value)
        elif stream.match(TokenType.LBRACKET):
            path.append(_parse_index(stream))
            stream.expect(TokenType.RBRACKET, "']'")
        else:
            break
    return Variable(token.value, tuple(path))


def _parse_index(stream: TokenStream):
    token = stream.next()
    if token is not None and token.type is TokenType.STRING:
        return token.value
    if token is not None and token.type is TokenType.NUMBER:
        number = float(token.value)
        if number.is_integer():
            return int(number)
    raise ParserError(f"Expected an index, found {describe(token)}", token)


def parse_filters(stream: TokenStream) -> Tuple[FilterCall, ...]:
    """
    Разбирает конвейер фильтров.

    filters → ("|" IDENTIFIER (":" argument ("," argument)*)?)*
    """
    calls = []
    while stream.match(TokenType.PIPE):
        name = stream.expect(TokenType.IDENTIFIER, "a filter name after '|'").value
        arguments = []
        if stream.match(TokenType.COLON):
            arguments.append(parse_argument(stream))
            while stream.match(TokenType.COMMA):
                arguments.append(parse_argument(stream))
        calls.append(FilterCall(name, tuple(arguments)))
    return tuple(calls)


def parse_output(tokens: Sequence[Token]) -> Output:
    """Строит узел подстановки из токенов области {{ ... }}."""
    stream = TokenStream(tokens)
    if stream.at_end():
        raise ParserError("Empty expression")
    argument = parse_argument(stream)
    filters = parse_filters(stream)
    stream.expect_end()
    return Output(argument, filters)


# -------------------- Элементы --------------------

def parse(elements: Sequence[Element], registry: "TemplateRegistry") -> List[Renderable]:
    """
    Разбирает последовательность элементов в узлы.

    Args:
        elements: Вывод лексера (или тело блока)
        registry: Конструкторы тегов и блоков

    Returns:
        Узлы в порядке следования в шаблоне

    Raises:
        ParserError: Неизвестная директива, неверные аргументы или незакрытый блок
    """
    nodes: List[Renderable] = []
    index = 0

    while index < len(elements):
        element = elements[index]

        if element.type is ElementType.TEXT:
            nodes.append(Text(element.raw))
        elif element.type is ElementType.EXPRESSION:
            nodes.append(parse_output(element.tokens))
        else:
            node, index = _parse_tag(elements, index, registry)
            nodes.append(node)
        index += 1

    logger.debug(f"Parsed {len(elements)} elements into {len(nodes)} nodes")
    return nodes


def _parse_tag(
    elements: Sequence[Element],
    index: int,
    registry: "TemplateRegistry",
) -> Tuple[Renderable, int]:
    """Диспетчеризует элемент тега; возвращает узел и индекс его последнего элемента."""
    element = elements[index]
    name = element.name
    if name is None:
        raise ParserError(f"Expected a tag name in {element.raw!r}", element.tokens[0])

    if name in registry.blocks:
        end = find_block_end(elements, index, name)
        body = list(elements[index + 1:end])
        logger.debug(f"Block '{name}' at {element.line}:{element.column} with {len(body)} body elements")
        node = registry.blocks[name](name, element.arguments, body, registry)
        return node, end

    if name in registry.tags:
        return registry.tags[name](name, element.arguments, registry), index

    if name.startswith("end") and name[3:] in registry.blocks:
        raise ParserError(
            f"Unmatched '{{% {name} %}}' at {element.line}:{element.column}",
            element.tokens[0],
        )
    raise ParserError(
        f"There is no tag or block named '{name}' at {element.line}:{element.column}",
        element.tokens[0],
    )


def find_block_end(elements: Sequence[Element], start: int, name: str) -> int:
    """
    Находит индекс {% end<name> %}, парного блоку, открытому в start.

    Глубину вложенности меняют только блоки с тем же именем.
    """
    end_name = "end" + name
    depth = 1
    for index in range(start + 1, len(elements)):
        element = elements[index]
        if element.type is not ElementType.TAG:
            continue
        if element.name == name:
            depth += 1
        elif element.name == end_name:
            depth -= 1
            if depth == 0:
                return index

    opening = elements[start]
    raise ParserError(
        f"Block '{name}' opened at {opening.line}:{opening.column} is never closed, "
        f"expected '{{% {end_name} %}}'",
        opening.tokens[0],
    )


__all__ = [
    "TokenStream",
    "describe",
    "parse_argument",
    "parse_filters",
    "parse_output",
    "parse",
    "find_block_end",
]
