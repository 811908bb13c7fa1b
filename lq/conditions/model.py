"""
Модель данных условных выражений.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from ..nodes import Argument


class ConditionType(Enum):
    TRUTHY = "truthy"
    COMPARISON = "comparison"
    AND = "and"
    OR = "or"


@dataclass(frozen=True)
class Condition(ABC):
    """Базовый класс для всех условий."""

    @abstractmethod
    def get_type(self) -> ConditionType:
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass(frozen=True)
class TruthyCondition(Condition):
    """
    Одиночный операнд: {% if user %}

    Истинно, если операнд не nil и не false.
    """
    argument: Argument

    def get_type(self) -> ConditionType:
        return ConditionType.TRUTHY

    def _to_string(self) -> str:
        return str(self.argument)


@dataclass(frozen=True)
class ComparisonCondition(Condition):
    """
    left op right, где op одно из == != <> < > <= >= contains
    """
    left: Argument
    operator: str
    right: Argument

    def get_type(self) -> ConditionType:
        return ConditionType.COMPARISON

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


@dataclass(frozen=True)
class BinaryCondition(Condition):
    """
    left and right / left or right
    """
    left: Condition
    right: Condition
    operator: ConditionType  # AND или OR

    def get_type(self) -> ConditionType:
        return self.operator

    def _to_string(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


__all__ = [
    "Condition",
    "ConditionType",
    "TruthyCondition",
    "ComparisonCondition",
    "BinaryCondition",
]
