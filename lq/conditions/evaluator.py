"""
Вычислитель условных выражений в контексте рендеринга.
"""

from __future__ import annotations

from typing import cast

from ..context import Context
from ..errors import RenderError
from ..value import Array, Num, Object, Str, Value
from .model import (
    BinaryCondition,
    ComparisonCondition,
    Condition,
    ConditionType,
    TruthyCondition,
)


class ConditionEvaluator:
    """
    Вычисляет булево значение дерева условия.
    """

    def __init__(self, context: Context):
        self.context = context

    def evaluate(self, condition: Condition) -> bool:
        """
        Raises:
            RenderError: Если операнды нельзя сравнить
        """
        condition_type = condition.get_type()

        if condition_type == ConditionType.TRUTHY:
            return cast(TruthyCondition, condition).argument.evaluate(self.context).is_truthy()
        elif condition_type == ConditionType.COMPARISON:
            return self._evaluate_comparison(cast(ComparisonCondition, condition))
        elif condition_type == ConditionType.AND:
            binary = cast(BinaryCondition, condition)
            return self.evaluate(binary.left) and self.evaluate(binary.right)
        elif condition_type == ConditionType.OR:
            binary = cast(BinaryCondition, condition)
            return self.evaluate(binary.left) or self.evaluate(binary.right)
        else:
            raise RenderError(f"Unknown condition type: {condition_type}")

    def _evaluate_comparison(self, condition: ComparisonCondition) -> bool:
        left = condition.left.evaluate(self.context)
        right = condition.right.evaluate(self.context)
        operator = condition.operator

        if operator == "==":
            return left == right
        if operator in ("!=", "<>"):
            return left != right
        if operator == "contains":
            return _contains(left, right)
        return _order(left, operator, right)


def _contains(container: Value, item: Value) -> bool:
    if isinstance(container, Str) and isinstance(item, Str):
        return item.value in container.value
    if isinstance(container, Array):
        return item in container.items
    if isinstance(container, Object) and isinstance(item, Str):
        return item.value in container.items
    return False


def _order(left: Value, operator: str, right: Value) -> bool:
    if not (isinstance(left, Num) and isinstance(right, Num)) and \
            not (isinstance(left, Str) and isinstance(right, Str)):
        raise RenderError(f"Cannot compare {left!r} and {right!r} with '{operator}'")

    a, b = left.value, right.value
    if operator == "<":
        return a < b
    if operator == ">":
        return a > b
    if operator == "<=":
        return a <= b
    if operator == ">=":
        return a >= b
    raise RenderError(f"Unknown comparison operator '{operator}'")


def evaluate_condition(condition: Condition, context: Context) -> bool:
    """Удобная функция для однократного вычисления условия."""
    return ConditionEvaluator(context).evaluate(condition)


__all__ = ["ConditionEvaluator", "evaluate_condition"]
