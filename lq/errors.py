"""
Иерархия ошибок шаблонизатора.

Все ожидаемые ошибки (некорректный шаблон, неверные аргументы директивы,
несовпадение типов при рендеринге) наследуются от TemplateError, чтобы
вызывающий код мог показать их как аккуратное сообщение. Ошибки
программирования не оборачиваются.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .lexer import Token


class TemplateError(Exception):
    """Базовый класс пользовательских ошибок шаблона."""
    pass


class LexerError(TemplateError):
    """Некорректные разделители или поток токенов."""

    def __init__(self, message: str, line: int, column: int, position: int):
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column
        self.position = position


class ParserError(TemplateError):
    """Неизвестная директива, неверные аргументы или незакрытый блок."""

    def __init__(self, message: str, token: Optional["Token"] = None):
        super().__init__(message)
        self.token = token


class RenderError(TemplateError):
    """Несовпадение типов со значениями из контекста."""
    pass


class FilterError(RenderError):
    """Фильтр отверг входное значение или аргументы."""

    def __init__(self, filter_name: str, message: str):
        super().__init__(f"Filter '{filter_name}': {message}")
        self.filter_name = filter_name


__all__ = [
    "TemplateError",
    "LexerError",
    "ParserError",
    "RenderError",
    "FilterError",
]
