"""
Условия директив {% if %} / {% elsif %}.
"""

from __future__ import annotations

from .evaluator import ConditionEvaluator, evaluate_condition
from .model import (
    Condition,
    ConditionType,
    TruthyCondition,
    ComparisonCondition,
    BinaryCondition,
)
from .parser import ConditionParser

__all__ = [
    "Condition",
    "ConditionType",
    "TruthyCondition",
    "ComparisonCondition",
    "BinaryCondition",
    "ConditionParser",
    "ConditionEvaluator",
    "evaluate_condition",
]
