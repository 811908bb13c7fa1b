"""
Реестр конструкторов тегов и блоков.

Внешний код расширяет язык шаблонов, регистрируя конструкторы под именем до
вызова lq.parse(). Встроенные блоки lq.parse() добавляет уже после этого, и
они заменяют пользовательские записи с теми же именами.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .lexer import Element, Token
    from .nodes import Renderable

logger = logging.getLogger(__name__)


class ErrorMode(enum.Enum):
    """
    Режим сообщения об ошибках.

    Объявлен для совместимости API; на лексический анализ, разбор и
    рендеринг сейчас не влияет.
    """
    STRICT = "strict"
    WARN = "warn"
    LAX = "lax"


# (имя тега, токены аргументов, реестр) -> узел; не должен падать
TagFactory = Callable[[str, List["Token"], "TemplateRegistry"], "Renderable"]

# (имя блока, токены аргументов, элементы тела, реестр) -> узел; может бросить ParserError
BlockFactory = Callable[[str, List["Token"], List["Element"], "TemplateRegistry"], "Renderable"]


@dataclass
class TemplateRegistry:
    """
    Конструкторы тегов и блоков, доступные одному вызову разбора.

    Глобального экземпляра по умолчанию нет: каждый вызов lq.parse() работает
    с переданным ему реестром (или с новым).
    """
    tags: Dict[str, TagFactory] = field(default_factory=dict)
    blocks: Dict[str, BlockFactory] = field(default_factory=dict)
    error_mode: ErrorMode = ErrorMode.WARN

    def register_tag(self, name: str, factory: TagFactory) -> None:
        if name in self.tags:
            logger.debug(f"Tag '{name}' overwrites existing tag")
        self.tags[name] = factory

    def register_block(self, name: str, factory: BlockFactory) -> None:
        if name in self.blocks:
            logger.debug(f"Block '{name}' overwrites existing block")
        self.blocks[name] = factory


__all__ = ["ErrorMode", "TagFactory", "BlockFactory", "TemplateRegistry"]
