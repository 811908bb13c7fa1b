from __future__ import annotations

from typing import List, Optional

from ..context import Context
from ..errors import ParserError
from ..lexer import Element, Token
from ..nodes import Renderable
from ..parser import describe
from ..registry import TemplateRegistry


class RawText(Renderable):
    """Тело блока {% raw %}, выводится байт в байт."""

    def __init__(self, content: str):
        self.content = content

    def render(self, context: Context) -> Optional[str]:
        return self.content


def raw_block(
    tag_name: str,
    arguments: List[Token],
    tokens: List[Element],
    registry: TemplateRegistry,
) -> Renderable:
    if arguments:
        raise ParserError(f"'{tag_name}' takes no arguments, found {describe(arguments[0])}", arguments[0])
    return RawText("".join(element.raw for element in tokens))


__all__ = ["RawText", "raw_block"]
