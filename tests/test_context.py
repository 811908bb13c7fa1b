"""
Tests for the render context.
"""

from lq import Context
from lq.value import Num, Str


class TestContext:

    def test_unset_name_has_no_value(self):
        assert Context().get("missing") is None

    def test_set_converts_plain_data(self):
        context = Context()
        context.set("n", 3)
        assert context.get("n") == Num(3)

    def test_set_overwrites(self):
        context = Context({"x": "a"})
        context.set("x", "b")
        assert context.get("x") == Str("b")
        assert "x" in context

    def test_standard_filters_are_available(self):
        context = Context()
        assert context.get_filter("upcase") is not None
        assert context.get_filter("nope") is None

    def test_custom_filters(self):
        context = Context(filters={"shout": lambda value, args: Str(value.to_str() + "!")})
        assert context.get_filter("shout")(Str("hi"), []) == Str("hi!")

    def test_add_filter_overrides_standard(self):
        context = Context()
        context.add_filter("upcase", lambda value, args: Str("custom"))
        assert context.get_filter("upcase")(Str("x"), []) == Str("custom")
