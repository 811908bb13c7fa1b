"""
lq: небольшой шаблонизатор в стиле Liquid.

    >>> import lq
    >>> template = lq.parse("Hello {{ name | upcase }}!")
    >>> template.render(lq.Context({"name": "world"}))
    'Hello WORLD!'
"""

from __future__ import annotations

from typing import Optional

from .context import Context
from .errors import FilterError, LexerError, ParserError, RenderError, TemplateError
from .lexer import Element, ElementType, Token, TokenType, tokenize
from .nodes import Renderable, Template
from .parser import parse as parse_elements
from .registry import BlockFactory, ErrorMode, TagFactory, TemplateRegistry
from .tags import assign_tag, register_builtins
from .value import Array, Bool, NIL, Nil, Num, Object, Str, Value, to_value


def parse(text: str, registry: Optional[TemplateRegistry] = None) -> Template:
    """
    Разбирает текст шаблона.

    Встроенные блоки (if, for, raw, comment) добавляются в реестр перед
    разбором и заменяют пользовательские записи с теми же именами.

    Args:
        text: Исходный текст шаблона
        registry: Пользовательские теги и блоки; если не передан, создаётся новый

    Returns:
        Разобранный шаблон

    Raises:
        LexerError: Некорректные разделители или токены
        ParserError: Неизвестная директива, неверные аргументы, незакрытый блок
    """
    if registry is None:
        registry = TemplateRegistry()
    elements = tokenize(text)
    register_builtins(registry)
    return Template(parse_elements(elements, registry))


__all__ = [
    "parse",
    "Context",
    "Template",
    "Renderable",
    "TemplateRegistry",
    "TagFactory",
    "BlockFactory",
    "ErrorMode",
    "Element",
    "ElementType",
    "Token",
    "TokenType",
    "tokenize",
    "assign_tag",
    "Value",
    "Nil",
    "NIL",
    "Bool",
    "Num",
    "Str",
    "Array",
    "Object",
    "to_value",
    "TemplateError",
    "LexerError",
    "ParserError",
    "RenderError",
    "FilterError",
]
