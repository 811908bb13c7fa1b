"""
Узлы разобранного шаблона.

У каждого узла одна операция render(context): она возвращает текст либо None,
если узел отработал без вывода. Любая TemplateError, выброшенная узлом,
прерывает рендеринг всего объемлющего шаблона.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from .context import Context
from .errors import RenderError
from .value import Array, NIL, Num, Object, Str, Value

logger = logging.getLogger(__name__)


class Renderable(ABC):
    """То, что возвращают конструкторы тегов и блоков."""

    @abstractmethod
    def render(self, context: Context) -> Optional[str]:
        pass


@dataclass(frozen=True)
class Text(Renderable):
    """Литеральный текст, выводится как есть."""
    text: str

    def render(self, context: Context) -> Optional[str]:
        return self.text


# -------------------- Аргументы --------------------

class Argument(ABC):
    """Операнд выражения: литерал или путь к переменной."""

    @abstractmethod
    def evaluate(self, context: Context) -> Value:
        pass


@dataclass(frozen=True)
class Literal(Argument):
    value: Value

    def evaluate(self, context: Context) -> Value:
        return self.value

    def __str__(self) -> str:
        if isinstance(self.value, Str):
            return repr(self.value.value)
        return self.value.to_str() or "nil"


PathPart = Union[str, int]


@dataclass(frozen=True)
class Variable(Argument):
    """
    Ссылка на переменную с необязательным путём доступа: a.b[0]["key"].

    Незаданные имена и отсутствующие ключи дают Nil.
    """
    name: str
    path: Tuple[PathPart, ...] = ()

    def evaluate(self, context: Context) -> Value:
        value = context.get(self.name)
        if value is None:
            logger.debug(f"Variable '{self.name}' is not defined, using nil")
            return NIL
        for part in self.path:
            value = _lookup(value, part)
        return value

    def __str__(self) -> str:
        parts = [self.name]
        for part in self.path:
            parts.append(f"[{part}]" if isinstance(part, int) else f".{part}")
        return "".join(parts)


def _lookup(value: Value, part: PathPart) -> Value:
    if isinstance(part, int):
        if isinstance(value, Array) and -len(value.items) <= part < len(value.items):
            return value.items[part]
        return NIL

    if isinstance(value, Object):
        found = value.get(part)
        if found is not None:
            return found
    if part == "size" and isinstance(value, (Array, Object)):
        return Num(len(value))
    if part == "size" and isinstance(value, Str):
        return Num(len(value.value))
    if part in ("first", "last") and isinstance(value, Array):
        if not value.items:
            return NIL
        return value.items[0] if part == "first" else value.items[-1]
    return NIL


# -------------------- Подстановка --------------------

@dataclass(frozen=True)
class FilterCall:
    name: str
    arguments: Tuple[Argument, ...] = ()


@dataclass(frozen=True)
class Output(Renderable):
    """
    Подстановка {{ argument | filter: arg, ... }}.

    Фильтры ищутся в контексте во время рендеринга.
    """
    argument: Argument
    filters: Tuple[FilterCall, ...] = ()

    def evaluate(self, context: Context) -> Value:
        value = self.argument.evaluate(context)
        for call in self.filters:
            func = context.get_filter(call.name)
            if func is None:
                raise RenderError(f"Filter '{call.name}' is not defined")
            args = [argument.evaluate(context) for argument in call.arguments]
            value = func(value, args)
        return value

    def render(self, context: Context) -> Optional[str]:
        return self.evaluate(context).to_str()


# -------------------- Шаблон --------------------

class Template(Renderable):
    """
    Неизменяемая последовательность узлов, полученная при разборе.

    Можно рендерить многократно и параллельно, если каждый параллельный
    вызов получает собственный Context.
    """

    def __init__(self, nodes: Iterable[Renderable]):
        self._nodes: Tuple[Renderable, ...] = tuple(nodes)

    @property
    def nodes(self) -> Tuple[Renderable, ...]:
        return self._nodes

    def render(self, context: Context) -> Optional[str]:
        """
        Рендерит узлы по порядку, передавая всем один и тот же контекст.

        Returns:
            Склеенный вывод всех узлов (частичного вывода не бывает)

        Raises:
            TemplateError: Первая ошибка любого узла
        """
        parts = []
        for node in self._nodes:
            output = node.render(context)
            if output:
                parts.append(output)
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Template({list(self._nodes)!r})"


__all__ = [
    "Renderable",
    "Text",
    "Argument",
    "Literal",
    "Variable",
    "FilterCall",
    "Output",
    "Template",
]
