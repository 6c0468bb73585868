"""Tests for NumberValue parsing: fixed values, ranges and formulas."""

import random

import pytest

from blockregen.errors import FormulaError, ParseError
from blockregen.model.context import Context
from blockregen.values.number import Fixed, Formula, NumberValue, Range
from blockregen.values.parser import parse_number_value, require_number


# ---------------------------------------------------------------------------
# Fixed values
# ---------------------------------------------------------------------------


class TestFixed:
    def test_int_node(self):
        result = parse_number_value(5)
        assert result.is_ok
        assert result.value == Fixed(5)

    def test_float_node(self):
        assert parse_number_value(2.5).value == Fixed(2.5)

    def test_numeric_string(self):
        assert parse_number_value("7").value == Fixed(7)

    def test_negative_string(self):
        assert parse_number_value("-4").value == Fixed(-4)

    def test_decimal_string(self):
        assert parse_number_value(" 0.25 ").value == Fixed(0.25)

    def test_get_ignores_context(self):
        assert Fixed(3).get(Context({"x": 1})) == 3.0

    def test_get_int_rounds(self):
        assert Fixed(2.6).get_int() == 3

    def test_str_drops_trailing_zero(self):
        assert str(Fixed(3.0)) == "3"
        assert str(Fixed(1.5)) == "1.5"

    def test_static_constructors(self):
        assert NumberValue.fixed(4) == Fixed(4)
        assert NumberValue.ranged(1, 2) == Range(1, 2)


# ---------------------------------------------------------------------------
# Ranges
# ---------------------------------------------------------------------------


class TestRange:
    def test_range_string(self):
        assert parse_number_value("5-10").value == Range(5, 10)

    def test_spaced_hyphen_is_subtraction(self):
        low_first = parse_number_value("2 - 10").value
        high_first = parse_number_value("10 - 2").value
        assert isinstance(low_first, Formula)
        assert low_first.get() == -8
        assert high_first.get() == 8

    def test_range_with_negative_lower_bound(self):
        assert parse_number_value("-5-10").value == Range(-5, 10)

    def test_min_max_mapping(self):
        assert parse_number_value({"min": 1, "max": 3}).value == Range(1, 3)

    def test_low_high_mapping(self):
        assert parse_number_value({"low": 2, "high": 4}).value == Range(2, 4)

    def test_reversed_bounds_are_invalid(self):
        result = parse_number_value("10-5")
        assert result.is_invalid
        assert "exceeds" in str(result.error)

    def test_reversed_mapping_bounds_are_invalid(self):
        assert parse_number_value({"min": 9, "max": 1}).is_invalid

    def test_non_numeric_bounds_are_invalid(self):
        assert parse_number_value({"min": "a", "max": 3}).is_invalid

    def test_mapping_without_bounds_is_invalid(self):
        assert parse_number_value({"value": 3}).is_invalid

    def test_constructor_rejects_reversed_bounds(self):
        with pytest.raises(ValueError):
            Range(3, 1)

    def test_integral_bounds_draw_integers(self):
        rng = random.Random(1)
        values = {Range(5, 10).get(rng=rng) for _ in range(200)}
        assert values <= {5.0, 6.0, 7.0, 8.0, 9.0, 10.0}
        assert all(v.is_integer() for v in values)

    def test_fractional_bounds_draw_floats_in_range(self):
        rng = random.Random(2)
        for _ in range(100):
            assert 0.5 <= Range(0.5, 1.5).get(rng=rng) <= 1.5

    def test_equal_bounds(self):
        assert Range(4, 4).get(rng=random.Random(0)) == 4.0

    def test_str(self):
        assert str(Range(5, 10)) == "5-10"


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------


class TestFormulaValue:
    def test_formula_string(self):
        result = parse_number_value("10 + %player_level% * 2")
        assert result.is_ok
        assert isinstance(result.value, Formula)

    def test_formula_reevaluates_per_context(self):
        value = parse_number_value("%player_level% * 2").value
        assert value.get(Context({"player_level": 3})) == 6.0
        assert value.get(Context({"player_level": 5})) == 10.0

    def test_formula_placeholders(self):
        value = parse_number_value("%a% + max(%b%, 1)").value
        assert value.placeholders() == {"a", "b"}

    def test_bare_word_is_invalid(self):
        assert parse_number_value("abc").is_invalid

    def test_unknown_function_is_invalid(self):
        result = parse_number_value("foo(1)")
        assert result.is_invalid
        assert "Unknown function" in str(result.error)

    def test_missing_placeholder_raises_on_get(self):
        value = parse_number_value("%missing% + 1").value
        with pytest.raises(FormulaError):
            value.get(Context())

    def test_str_is_source_expression(self):
        assert str(Formula.parse("  1 + %x%  ")) == "1 + %x%"


# ---------------------------------------------------------------------------
# Other node types
# ---------------------------------------------------------------------------


class TestOtherNodes:
    def test_none_is_absent(self):
        assert parse_number_value(None).is_absent

    def test_boolean_is_invalid(self):
        assert parse_number_value(True).is_invalid

    def test_list_is_invalid(self):
        assert parse_number_value([1, 2]).is_invalid

    def test_empty_string_is_invalid(self):
        assert parse_number_value("").is_invalid


class TestRequireNumber:
    def test_returns_value(self):
        assert require_number("25") == Fixed(25)

    def test_raises_on_invalid(self):
        with pytest.raises(ParseError):
            require_number("not a number")

    def test_raises_on_missing(self):
        with pytest.raises(ParseError, match="Missing number"):
            require_number(None)
