"""
Tests for the opt-in {% assign %} tag.
"""

import pytest

from lq import ParserError, RenderError, assign_tag


@pytest.fixture
def assign_registry(registry):
    registry.register_tag("assign", assign_tag)
    return registry


class TestAssignTag:

    def test_not_registered_by_default(self, render):
        with pytest.raises(ParserError, match="no tag or block named 'assign'"):
            render("{% assign x = 1 %}")

    def test_assign_literal(self, render, assign_registry):
        assert render("{% assign x = 'hi' %}{{ x }}", registry=assign_registry) == "hi"

    def test_assign_renders_nothing(self, render, assign_registry):
        assert render("a{% assign x = 1 %}b", registry=assign_registry) == "ab"

    def test_assign_with_filters(self, render, assign_registry):
        text = "{% assign shout = name | upcase | append: '!' %}{{ shout }}"
        assert render(text, {"name": "hey"}, assign_registry) == "HEY!"

    def test_assign_from_path(self, render, assign_registry):
        text = "{% assign city = user.address.city %}{{ city }}"
        data = {"user": {"address": {"city": "Oslo"}}}
        assert render(text, data, assign_registry) == "Oslo"

    def test_assign_inside_loop(self, render, assign_registry):
        text = "{% for x in xs %}{% assign last = x %}{% endfor %}{{ last }}"
        assert render(text, {"xs": [1, 2, 3]}, assign_registry) == "3"

    def test_invalid_header_fails_at_render(self, assign_registry):
        """Construction succeeds; the problem surfaces on render."""
        import lq

        template = lq.parse("{% assign = 1 %}", assign_registry)
        with pytest.raises(RenderError, match="Invalid 'assign' tag: Expected a variable name"):
            template.render(lq.Context())

    def test_missing_equals(self, render, assign_registry):
        with pytest.raises(RenderError, match="Expected '='"):
            render("{% assign x 1 %}", registry=assign_registry)

    def test_unknown_filter(self, render, assign_registry):
        with pytest.raises(RenderError, match="Filter 'nope' is not defined"):
            render("{% assign x = 1 | nope %}", registry=assign_registry)
