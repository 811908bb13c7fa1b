"""
Tests for the element parser and the expression grammar.
"""

import pytest

from lq import Context, ParserError, TemplateRegistry
from lq.lexer import granularize, tokenize
from lq.nodes import FilterCall, Literal, Output, Text, Variable
from lq.parser import TokenStream, find_block_end, parse, parse_argument, parse_output
from lq.tags import register_builtins
from lq.value import NIL, Bool, Num, Str


def builtins_registry() -> TemplateRegistry:
    registry = TemplateRegistry()
    register_builtins(registry)
    return registry


class TestParseElements:

    def test_empty(self):
        assert parse([], TemplateRegistry()) == []

    def test_text_and_output(self):
        nodes = parse(tokenize("Hello {{ name }}!"), TemplateRegistry())
        assert nodes == [Text("Hello "), Output(Variable("name")), Text("!")]

    def test_unknown_tag(self):
        with pytest.raises(ParserError, match="There is no tag or block named 'frobnicate'"):
            parse(tokenize("{% frobnicate %}"), builtins_registry())

    def test_unknown_tag_is_never_skipped(self):
        with pytest.raises(ParserError):
            parse(tokenize("a {% else %} b"), builtins_registry())

    def test_unclosed_block(self):
        with pytest.raises(ParserError, match="never closed, expected '{% endfor %}'"):
            parse(tokenize("{% for x in y %}{{ x }}"), builtins_registry())

    def test_unmatched_end_marker(self):
        with pytest.raises(ParserError, match="Unmatched '{% endif %}'"):
            parse(tokenize("text {% endif %}"), builtins_registry())

    def test_tag_name_must_be_identifier(self):
        with pytest.raises(ParserError, match="Expected a tag name"):
            parse(tokenize("{% 'x' %}"), builtins_registry())

    def test_error_in_nested_body_aborts_whole_parse(self):
        text = "{% if a %}{% for x in y %}{% nope %}{% endfor %}{% endif %}"
        with pytest.raises(ParserError, match="nope"):
            parse(tokenize(text), builtins_registry())


class TestFindBlockEnd:

    def test_same_name_nesting(self):
        elements = tokenize("{% if a %}{% if b %}{% endif %}{% endif %}")
        assert find_block_end(elements, 0, "if") == 3
        assert find_block_end(elements, 1, "if") == 2

    def test_other_blocks_do_not_count(self):
        elements = tokenize("{% if a %}{% for x in y %}{% endif %}{% endfor %}")
        assert find_block_end(elements, 0, "if") == 2


class TestExpressions:

    def test_literals(self):
        assert parse_argument(TokenStream(granularize("'x'"))) == Literal(Str("x"))
        assert parse_argument(TokenStream(granularize("4"))) == Literal(Num(4))
        assert parse_argument(TokenStream(granularize("true"))) == Literal(Bool(True))
        assert parse_argument(TokenStream(granularize("nil"))) == Literal(NIL)

    def test_variable_path(self):
        argument = parse_argument(TokenStream(granularize("a.b[0]['c d']")))
        assert argument == Variable("a", ("b", 0, "c d"))

    def test_filters(self):
        output = parse_output(granularize("x | append: 'a', y | upcase"))
        assert output == Output(
            Variable("x"),
            (
                FilterCall("append", (Literal(Str("a")), Variable("y"))),
                FilterCall("upcase"),
            ),
        )

    def test_empty_expression(self):
        with pytest.raises(ParserError, match="Empty expression"):
            parse(tokenize("{{ }}"), TemplateRegistry())

    def test_trailing_tokens(self):
        with pytest.raises(ParserError, match="Unexpected"):
            parse_output(granularize("a b"))

    def test_missing_filter_name(self):
        with pytest.raises(ParserError, match="filter name"):
            parse_output(granularize("a |"))

    def test_bad_index(self):
        with pytest.raises(ParserError, match="Expected an index"):
            parse_output(granularize("a[1.5]"))


class TestVariableResolution:

    def setup_method(self):
        self.context = Context({
            "user": {"name": "Ann", "tags": ["a", "b", "c"]},
            "word": "hello",
        })

    def resolve(self, source):
        return parse_argument(TokenStream(granularize(source))).evaluate(self.context)

    def test_object_keys(self):
        assert self.resolve("user.name") == Str("Ann")
        assert self.resolve("user['name']") == Str("Ann")

    def test_array_index(self):
        assert self.resolve("user.tags[1]") == Str("b")
        assert self.resolve("user.tags[-1]") == Str("c")
        assert self.resolve("user.tags[5]") == NIL

    def test_size_first_last(self):
        assert self.resolve("user.tags.size") == Num(3)
        assert self.resolve("user.tags.first") == Str("a")
        assert self.resolve("user.tags.last") == Str("c")
        assert self.resolve("word.size") == Num(5)

    def test_missing(self):
        assert self.resolve("nobody") == NIL
        assert self.resolve("user.age") == NIL
        assert self.resolve("word.name") == NIL
