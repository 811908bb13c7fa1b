"""
Парсер условных выражений методом рекурсивного спуска.

Грамматика:
expression  → or_expr
or_expr     → and_expr ("or" and_expr)*
and_expr    → comparison ("and" comparison)*
comparison  → argument ((COMPARISON | "contains") argument)?
"""

from __future__ import annotations

from typing import Sequence

from ..errors import ParserError
from ..lexer import Token, TokenType
from ..parser import TokenStream, parse_argument
from .model import (
    BinaryCondition,
    ComparisonCondition,
    Condition,
    ConditionType,
    TruthyCondition,
)


class ConditionParser:
    """
    Строит дерево условия из токенов аргументов директивы.

    "and" связывает сильнее, чем "or".
    """

    def parse(self, tokens: Sequence[Token]) -> Condition:
        """
        Args:
            tokens: Токены аргументов директивы

        Returns:
            Корень дерева условия

        Raises:
            ParserError: При синтаксической ошибке
        """
        stream = TokenStream(tokens)
        if stream.at_end():
            raise ParserError("Empty condition")

        condition = self._parse_or(stream)
        stream.expect_end()
        return condition

    def _parse_or(self, stream: TokenStream) -> Condition:
        left = self._parse_and(stream)
        while stream.match(TokenType.IDENTIFIER, "or"):
            right = self._parse_and(stream)
            left = BinaryCondition(left=left, right=right, operator=ConditionType.OR)
        return left

    def _parse_and(self, stream: TokenStream) -> Condition:
        left = self._parse_comparison(stream)
        while stream.match(TokenType.IDENTIFIER, "and"):
            right = self._parse_comparison(stream)
            left = BinaryCondition(left=left, right=right, operator=ConditionType.AND)
        return left

    def _parse_comparison(self, stream: TokenStream) -> Condition:
        left = parse_argument(stream)

        operator = stream.match(TokenType.COMPARISON) or stream.match(TokenType.IDENTIFIER, "contains")
        if operator is None:
            return TruthyCondition(left)

        right = parse_argument(stream)
        return ComparisonCondition(left=left, operator=operator.value, right=right)


__all__ = ["ConditionParser"]
