"""
{% assign name = argument | filter: args %}

Подключается явно: registry.register_tag("assign", assign_tag).
Конструкторы тегов не могут падать, поэтому некорректный заголовок даёт узел,
который сообщает о проблеме при рендеринге.
"""

from __future__ import annotations

from typing import List, Optional

from ..context import Context
from ..errors import ParserError, RenderError
from ..lexer import Token, TokenType
from ..nodes import Output, Renderable
from ..parser import TokenStream, parse_argument, parse_filters
from ..registry import TemplateRegistry


class Assign(Renderable):
    def __init__(self, name: str, source: Output):
        self.name = name
        self.source = source

    def render(self, context: Context) -> Optional[str]:
        context.set(self.name, self.source.evaluate(context))
        return None


class InvalidAssign(Renderable):
    def __init__(self, message: str):
        self.message = message

    def render(self, context: Context) -> Optional[str]:
        raise RenderError(self.message)


def _parse_assign(arguments: List[Token]) -> Assign:
    stream = TokenStream(arguments)
    name = stream.expect(TokenType.IDENTIFIER, "a variable name").value
    stream.expect(TokenType.ASSIGN, "'='")
    argument = parse_argument(stream)
    filters = parse_filters(stream)
    stream.expect_end()
    return Assign(name, Output(argument, filters))


def assign_tag(tag_name: str, arguments: List[Token], registry: TemplateRegistry) -> Renderable:
    try:
        return _parse_assign(arguments)
    except ParserError as e:
        return InvalidAssign(f"Invalid '{tag_name}' tag: {e}")


__all__ = ["Assign", "InvalidAssign", "assign_tag"]
