"""
Tests for the condition parser and evaluator.
"""

import pytest

from lq import Context, ParserError, RenderError
from lq.conditions import (
    BinaryCondition,
    ComparisonCondition,
    ConditionParser,
    ConditionType,
    TruthyCondition,
    evaluate_condition,
)
from lq.lexer import granularize
from lq.nodes import Literal, Variable
from lq.value import Num, Str


def parse_condition(source):
    return ConditionParser().parse(granularize(source))


class TestConditionParser:

    def setup_method(self):
        self.parser = ConditionParser()

    def test_truthy(self):
        assert parse_condition("user") == TruthyCondition(Variable("user"))

    def test_comparison(self):
        condition = parse_condition("n >= 2")
        assert condition == ComparisonCondition(Variable("n"), ">=", Literal(Num(2)))

    def test_contains(self):
        condition = parse_condition("title contains 'x'")
        assert condition.get_type() == ConditionType.COMPARISON
        assert condition.operator == "contains"
        assert condition.right == Literal(Str("x"))

    def test_and_binds_tighter_than_or(self):
        condition = parse_condition("a or b and c")
        assert isinstance(condition, BinaryCondition)
        assert condition.get_type() == ConditionType.OR
        assert condition.left == TruthyCondition(Variable("a"))
        assert condition.right.get_type() == ConditionType.AND

    def test_chain_is_left_associative(self):
        condition = parse_condition("a and b and c")
        assert condition.left.get_type() == ConditionType.AND
        assert condition.right == TruthyCondition(Variable("c"))

    def test_empty(self):
        with pytest.raises(ParserError, match="Empty condition"):
            self.parser.parse([])

    def test_trailing_tokens(self):
        with pytest.raises(ParserError, match="Unexpected"):
            parse_condition("a b")

    def test_missing_right_operand(self):
        with pytest.raises(ParserError, match="Expected a value, found end of input"):
            parse_condition("a ==")

    def test_str(self):
        assert str(parse_condition("a and b")) == "a and b"


class TestConditionEvaluator:

    def check(self, source, data=None):
        return evaluate_condition(parse_condition(source), Context(data or {}))

    def test_truthiness(self):
        assert self.check("x", {"x": 0})
        assert self.check("x", {"x": []})
        assert not self.check("x", {"x": False})
        assert not self.check("x", {"x": None})
        assert not self.check("x")

    def test_equality_across_types(self):
        assert not self.check("x == '1'", {"x": 1})
        assert self.check("x != '1'", {"x": 1})
        assert self.check("x == 1", {"x": 1.0})
        assert self.check("x == nil")

    def test_string_ordering(self):
        assert self.check("a < b", {"a": "apple", "b": "banana"})

    def test_ordering_mixed_types_fails(self):
        with pytest.raises(RenderError, match="Cannot compare"):
            self.check("a > b", {"a": "1", "b": 0})

    def test_ordering_nil_fails(self):
        with pytest.raises(RenderError):
            self.check("missing < 1")

    def test_contains_object_key(self):
        assert self.check("user contains 'name'", {"user": {"name": "x"}})
        assert not self.check("user contains 'age'", {"user": {"name": "x"}})

    def test_contains_unsupported_operands_is_false(self):
        assert not self.check("n contains 1", {"n": 10})

    def test_short_circuit(self):
        """The right side of 'or' is not evaluated once the left holds."""
        assert self.check("t or a < 'x'", {"t": True, "a": 1})
