"""
Встроенные директивы.

Блоки из BUILTIN_BLOCKS lq.parse() добавляет в каждый реестр;
assign_tag доступен для явной регистрации.
"""

from __future__ import annotations

from typing import Dict

from ..registry import BlockFactory, TemplateRegistry
from .assign_tag import assign_tag
from .comment_block import comment_block
from .for_block import for_block
from .if_block import if_block
from .raw_block import raw_block

BUILTIN_BLOCKS: Dict[str, BlockFactory] = {
    "raw": raw_block,
    "if": if_block,
    "for": for_block,
    "comment": comment_block,
}


def register_builtins(registry: TemplateRegistry) -> None:
    """Добавляет встроенные блоки, заменяя пользовательские блоки с теми же именами."""
    for name, factory in BUILTIN_BLOCKS.items():
        registry.register_block(name, factory)


__all__ = [
    "BUILTIN_BLOCKS",
    "register_builtins",
    "assign_tag",
    "comment_block",
    "for_block",
    "if_block",
    "raw_block",
]
