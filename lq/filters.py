"""
Стандартные фильтры конвейеров подстановки.

Фильтр получает значение из конвейера и вычисленные аргументы вызова и
возвращает новое значение. Входные значения фильтры не изменяют.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .errors import FilterError
from .value import Array, NIL, Num, Object, Str, Value

FilterFunc = Callable[[Value, List[Value]], Value]


def _expect_args(name: str, args: List[Value], count: int) -> None:
    if len(args) != count:
        raise FilterError(name, f"expected {count} argument(s), got {len(args)}")


def _expect_str(name: str, value: Value) -> str:
    if isinstance(value, Str):
        return value.value
    raise FilterError(name, f"expected a string, got {value!r}")


def _expect_num(name: str, value: Value) -> float:
    if isinstance(value, Num):
        return value.value
    raise FilterError(name, f"expected a number, got {value!r}")


# -------------------- Строковые фильтры --------------------

def size(value: Value, args: List[Value]) -> Value:
    _expect_args("size", args, 0)
    if isinstance(value, Str):
        return Num(len(value.value))
    if isinstance(value, (Array, Object)):
        return Num(len(value))
    raise FilterError("size", f"cannot measure {value!r}")


def upcase(value: Value, args: List[Value]) -> Value:
    _expect_args("upcase", args, 0)
    return Str(_expect_str("upcase", value).upper())


def downcase(value: Value, args: List[Value]) -> Value:
    _expect_args("downcase", args, 0)
    return Str(_expect_str("downcase", value).lower())


def capitalize(value: Value, args: List[Value]) -> Value:
    _expect_args("capitalize", args, 0)
    text = _expect_str("capitalize", value)
    return Str(text[:1].upper() + text[1:])


def strip(value: Value, args: List[Value]) -> Value:
    _expect_args("strip", args, 0)
    return Str(_expect_str("strip", value).strip())


def append(value: Value, args: List[Value]) -> Value:
    _expect_args("append", args, 1)
    return Str(value.to_str() + args[0].to_str())


def prepend(value: Value, args: List[Value]) -> Value:
    _expect_args("prepend", args, 1)
    return Str(args[0].to_str() + value.to_str())


def replace(value: Value, args: List[Value]) -> Value:
    _expect_args("replace", args, 2)
    text = _expect_str("replace", value)
    return Str(text.replace(_expect_str("replace", args[0]), args[1].to_str()))


def split(value: Value, args: List[Value]) -> Value:
    _expect_args("split", args, 1)
    text = _expect_str("split", value)
    separator = _expect_str("split", args[0])
    parts = text.split(separator) if separator else list(text)
    return Array(tuple(Str(part) for part in parts))


# -------------------- Арифметика --------------------

def plus(value: Value, args: List[Value]) -> Value:
    _expect_args("plus", args, 1)
    return Num(_expect_num("plus", value) + _expect_num("plus", args[0]))


def minus(value: Value, args: List[Value]) -> Value:
    _expect_args("minus", args, 1)
    return Num(_expect_num("minus", value) - _expect_num("minus", args[0]))


def times(value: Value, args: List[Value]) -> Value:
    _expect_args("times", args, 1)
    return Num(_expect_num("times", value) * _expect_num("times", args[0]))


def divided_by(value: Value, args: List[Value]) -> Value:
    _expect_args("divided_by", args, 1)
    divisor = _expect_num("divided_by", args[0])
    if divisor == 0:
        raise FilterError("divided_by", "division by zero")
    return Num(_expect_num("divided_by", value) / divisor)


def modulo(value: Value, args: List[Value]) -> Value:
    _expect_args("modulo", args, 1)
    divisor = _expect_num("modulo", args[0])
    if divisor == 0:
        raise FilterError("modulo", "division by zero")
    return Num(_expect_num("modulo", value) % divisor)


# -------------------- Массивы --------------------

def first(value: Value, args: List[Value]) -> Value:
    _expect_args("first", args, 0)
    if isinstance(value, Array):
        return value.items[0] if value.items else NIL
    if isinstance(value, Str):
        return Str(value.value[:1])
    raise FilterError("first", f"expected an array or string, got {value!r}")


def last(value: Value, args: List[Value]) -> Value:
    _expect_args("last", args, 0)
    if isinstance(value, Array):
        return value.items[-1] if value.items else NIL
    if isinstance(value, Str):
        return Str(value.value[-1:])
    raise FilterError("last", f"expected an array or string, got {value!r}")


def join(value: Value, args: List[Value]) -> Value:
    if len(args) > 1:
        raise FilterError("join", f"expected at most 1 argument, got {len(args)}")
    if not isinstance(value, Array):
        raise FilterError("join", f"expected an array, got {value!r}")
    separator = args[0].to_str() if args else " "
    return Str(separator.join(item.to_str() for item in value.items))


def default(value: Value, args: List[Value]) -> Value:
    _expect_args("default", args, 1)
    if not value.is_truthy() or value == Str(""):
        return args[0]
    return value


STANDARD_FILTERS: Dict[str, FilterFunc] = {
    "size": size,
    "upcase": upcase,
    "downcase": downcase,
    "capitalize": capitalize,
    "strip": strip,
    "append": append,
    "prepend": prepend,
    "replace": replace,
    "split": split,
    "plus": plus,
    "minus": minus,
    "times": times,
    "divided_by": divided_by,
    "modulo": modulo,
    "first": first,
    "last": last,
    "join": join,
    "default": default,
}


__all__ = ["FilterFunc", "STANDARD_FILTERS"]
