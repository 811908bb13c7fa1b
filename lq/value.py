"""
Модель значений времени выполнения.

Значения неизменяемы: сохранение в Context или обход Array никогда не
разделяет изменяемое состояние с вызывающим кодом, каждое обращение ведёт
себя как копия, а циклические ссылки построить невозможно.
"""

from __future__ import annotations

import enum
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


class ValueType(enum.Enum):
    """Теги вариантов значения."""
    NIL = "nil"
    BOOL = "bool"
    NUM = "num"
    STR = "str"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class Value(ABC):
    """Базовый класс всех значений."""

    @abstractmethod
    def get_type(self) -> ValueType:
        pass

    @abstractmethod
    def to_str(self) -> str:
        """Текст, который выводится при подстановке значения."""
        pass

    def is_truthy(self) -> bool:
        return True

    def type_name(self) -> str:
        return self.get_type().value


@dataclass(frozen=True)
class Nil(Value):
    def get_type(self) -> ValueType:
        return ValueType.NIL

    def to_str(self) -> str:
        return ""

    def is_truthy(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nil"


@dataclass(frozen=True)
class Bool(Value):
    value: bool

    def get_type(self) -> ValueType:
        return ValueType.BOOL

    def to_str(self) -> str:
        return "true" if self.value else "false"

    def is_truthy(self) -> bool:
        return self.value

    def __repr__(self) -> str:
        return f"Bool({self.to_str()})"


@dataclass(frozen=True)
class Num(Value):
    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))

    def get_type(self) -> ValueType:
        return ValueType.NUM

    def to_str(self) -> str:
        # 22.0 -> "22", 2.5 -> "2.5"
        if math.isfinite(self.value) and self.value.is_integer():
            return str(int(self.value))
        return str(self.value)

    def __repr__(self) -> str:
        return f"Num({self.to_str()})"


@dataclass(frozen=True)
class Str(Value):
    value: str

    def get_type(self) -> ValueType:
        return ValueType.STR

    def to_str(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Str({self.value!r})"


@dataclass(frozen=True)
class Array(Value):
    items: Tuple[Value, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def get_type(self) -> ValueType:
        return ValueType.ARRAY

    def to_str(self) -> str:
        return "".join(item.to_str() for item in self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Array([{', '.join(repr(item) for item in self.items)}])"


@dataclass(frozen=True)
class Object(Value):
    """
    Отображение строковых ключей на значения в порядке вставки.

    Ключи хранятся в read-only представлении собственной копии словаря.
    """
    items: Mapping[str, Value] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "items", MappingProxyType(dict(self.items)))

    def get_type(self) -> ValueType:
        return ValueType.OBJECT

    def to_str(self) -> str:
        inner = ", ".join(f"{key}: {value.to_str()}" for key, value in self.items.items())
        return "{" + inner + "}"

    def get(self, key: str) -> Optional[Value]:
        return self.items.get(key)

    def __len__(self) -> int:
        return len(self.items)

    def __hash__(self) -> int:
        return hash(tuple(self.items.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{key!r}: {value!r}" for key, value in self.items.items())
        return f"Object({{{inner}}})"


NIL = Nil()


def to_value(obj: Any) -> Value:
    """
    Преобразует обычные данные Python в Value.

    Args:
        obj: None, bool, int, float, str, list/tuple, dict или Value

    Returns:
        Эквивалентное значение

    Raises:
        TypeError: Для данных без соответствующего варианта
            (в том числе для целых, не представимых как float)
    """
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return NIL
    # bool раньше int: bool является подклассом int
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float)):
        try:
            return Num(obj)
        except OverflowError as e:
            raise TypeError(f"Number {obj} is too large for a template value") from e
    if isinstance(obj, str):
        return Str(obj)
    if isinstance(obj, (list, tuple)):
        return Array(tuple(to_value(item) for item in obj))
    if isinstance(obj, Mapping):
        return Object({str(key): to_value(item) for key, item in obj.items()})
    raise TypeError(f"Cannot convert {type(obj).__name__} to a template value")


__all__ = [
    "ValueType",
    "Value",
    "Nil",
    "Bool",
    "Num",
    "Str",
    "Array",
    "Object",
    "NIL",
    "to_value",
]
