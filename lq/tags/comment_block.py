from __future__ import annotations

from typing import List, Optional

from ..context import Context
from ..lexer import Element, Token
from ..nodes import Renderable
from ..registry import TemplateRegistry


class Comment(Renderable):
    def render(self, context: Context) -> Optional[str]:
        return None


def comment_block(
    tag_name: str,
    arguments: List[Token],
    tokens: List[Element],
    registry: TemplateRegistry,
) -> Renderable:
    # тело отбрасывается без разбора
    return Comment()


__all__ = ["Comment", "comment_block"]
