"""
{% if cond %} ... {% elsif cond %} ... {% else %} ... {% endif %}

Маркеры веток отделяются только на верхнем уровне тела: вложенные блоки уже
сгруппированы парсером при поиске end-тегов, поэтому {% else %} внутри
вложенного {% if %} принадлежит этому блоку.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..conditions import Condition, ConditionParser, evaluate_condition
from ..context import Context
from ..errors import ParserError
from ..lexer import Element, ElementType, Token
from ..nodes import Renderable, Template
from ..parser import describe, find_block_end, parse
from ..registry import TemplateRegistry

logger = logging.getLogger(__name__)

Branch = Tuple[Optional[Condition], Template]


class If(Renderable):
    """
    Рендерит первую ветку с истинным условием; условие None означает
    ветку else.
    """

    def __init__(self, branches: List[Branch]):
        self.branches = branches

    def render(self, context: Context) -> Optional[str]:
        for condition, body in self.branches:
            if condition is None or evaluate_condition(condition, context):
                return body.render(context)
        return None


def _split_branches(
    arguments: List[Token],
    tokens: List[Element],
    registry: TemplateRegistry,
) -> List[Tuple[Optional[List[Token]], List[Element]]]:
    """Делит тело по маркерам elsif/else верхнего уровня."""
    branches: List[Tuple[Optional[List[Token]], List[Element]]] = [(arguments, [])]
    seen_else = False
    index = 0

    while index < len(tokens):
        element = tokens[index]
        name = element.name if element.type is ElementType.TAG else None

        if name in ("elsif", "else"):
            if seen_else:
                raise ParserError(f"Unexpected '{{% {name} %}}' after '{{% else %}}'", element.tokens[0])
            if name == "else":
                if element.arguments:
                    raise ParserError(
                        f"'else' takes no arguments, found {describe(element.arguments[0])}",
                        element.arguments[0],
                    )
                seen_else = True
                branches.append((None, []))
            else:
                branches.append((element.arguments, []))
        elif name is not None and name in registry.blocks:
            # вложенные блоки остаются целиком, их маркеры не наши
            end = find_block_end(tokens, index, name)
            branches[-1][1].extend(tokens[index:end + 1])
            index = end
        else:
            branches[-1][1].append(element)
        index += 1

    return branches


def if_block(
    tag_name: str,
    arguments: List[Token],
    tokens: List[Element],
    registry: TemplateRegistry,
) -> Renderable:
    condition_parser = ConditionParser()
    branches: List[Branch] = []

    for condition_tokens, body in _split_branches(arguments, tokens, registry):
        condition = condition_parser.parse(condition_tokens) if condition_tokens is not None else None
        branches.append((condition, Template(parse(body, registry))))

    logger.debug(f"Built '{tag_name}' with {len(branches)} branches")
    return If(branches)


__all__ = ["If", "if_block"]
