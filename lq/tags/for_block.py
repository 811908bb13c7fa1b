"""
{% for <name> in <array> %} ... {% endfor %}
"""

from __future__ import annotations

from typing import List, Tuple

from ..context import Context
from ..errors import RenderError
from ..lexer import Element, Token, TokenType
from ..nodes import Renderable, Template
from ..parser import TokenStream, parse
from ..registry import TemplateRegistry
from ..value import Array, Value


class For(Renderable):
    """
    Рендерит тело по разу на каждый элемент массива.

    Переменная цикла живёт в общем контексте: она перезаписывается на каждой
    итерации и после цикла остаётся привязанной к последнему элементу.
    """

    def __init__(self, var_name: str, array_id: str, inner: Template):
        self.var_name = var_name
        self.array_id = array_id
        self.inner = inner

    def render(self, context: Context) -> str:
        items = _get_array(context, self.array_id)
        ret = ""
        for item in items:
            context.set(self.var_name, item)
            ret += self.inner.render(context) or ""
        return ret


def _get_array(context: Context, array_id: str) -> Tuple[Value, ...]:
    value = context.get(array_id)
    if isinstance(value, Array):
        # значения неизменяемы, кортеж является независимым снимком
        return value.items
    offending = repr(value) if value is not None else f"undefined variable '{array_id}'"
    raise RenderError(f"Tried to iterate over {offending}, which is not supported")


def for_block(
    tag_name: str,
    arguments: List[Token],
    tokens: List[Element],
    registry: TemplateRegistry,
) -> Renderable:
    stream = TokenStream(arguments)

    var_name = stream.expect(TokenType.IDENTIFIER, "an identifier").value
    stream.expect(TokenType.IDENTIFIER, "'in'", value="in")
    # TODO: принимать диапазоны ((1..n)) как источник итерации
    array_id = stream.expect(TokenType.IDENTIFIER, "an identifier").value
    stream.expect_end()

    inner = parse(tokens, registry)
    return For(var_name, array_id, Template(inner))


__all__ = ["For", "for_block"]
