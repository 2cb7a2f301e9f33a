"""
Tests for the qdefs Expression System

These tests verify:
    - Literal and Expression creation
    - Immutability
    - exp_with_args argument conversion
"""

import pytest
from qdefs.errors import ConfigurationError
from qdefs.expressions import (
    Expression,
    Literal,
    SEQUENTIAL_ORDER,
    exp_with_args,
    to_arg,
)


class TestLiteral:
    """Test literal arguments."""

    def test_integer_literal(self):
        """Should hold an integer and report it as numeric."""
        lit = Literal(5)
        assert lit.value == 5
        assert lit.is_numeric

    def test_float_literal(self):
        """Should hold a float."""
        assert Literal(2.5).value == 2.5

    def test_string_literal(self):
        """String literals are not numeric."""
        lit = Literal("weekly.Q1")
        assert lit.value == "weekly.Q1"
        assert not lit.is_numeric

    def test_literal_immutable(self):
        """Literals should be immutable."""
        lit = Literal(5)
        with pytest.raises(AttributeError):
            lit.value = 10


class TestExpression:
    """Test expression nodes."""

    def test_expression_without_arguments(self):
        """An expression may have no arguments."""
        expr = Expression(name="sequential")
        assert expr.data == ()
        assert expr == SEQUENTIAL_ORDER

    def test_nested_expression(self):
        """Arguments may be nested expressions."""
        inner = Expression(name="getAttribute", data=(Literal("participant"),))
        outer = Expression(name="eq", data=(inner, Literal(1)))
        assert outer.data[0] is inner

    def test_expression_immutable(self):
        """Expressions should be immutable."""
        expr = Expression(name="and")
        with pytest.raises(AttributeError):
            expr.name = "or"

    def test_structural_equality(self):
        """Expressions with the same structure are equal."""
        assert Expression("eq", (Literal(1), Literal("a"))) == Expression("eq", (Literal(1), Literal("a")))


class TestExpWithArgs:
    """Test raw argument conversion."""

    def test_converts_raw_values(self):
        """Strings and numbers become literals, expressions are kept."""
        inner = Expression(name="now")
        expr = exp_with_args("timestampWithOffset", 86400, inner)
        assert expr.name == "timestampWithOffset"
        assert expr.data == (Literal(86400), inner)

    def test_drops_none_arguments(self):
        """None arguments are skipped."""
        expr = exp_with_args("timestampWithOffset", -60, None)
        assert expr.data == (Literal(-60),)

    def test_keeps_argument_order(self):
        """Arguments keep the given order."""
        expr = exp_with_args("responseHasKeysAny", "s.q", "rg.scg", "1", "2")
        assert [a.value for a in expr.data] == ["s.q", "rg.scg", "1", "2"]

    def test_rejects_booleans(self):
        """Booleans are not valid arguments."""
        with pytest.raises(ConfigurationError):
            exp_with_args("eq", True)

    def test_rejects_unknown_types(self):
        """Lists and other containers are rejected."""
        with pytest.raises(ConfigurationError):
            to_arg([1, 2])
