"""Parse config nodes into NumberValue instances."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from blockregen.config.section import ConfigSection
from blockregen.errors import FormulaError, ParseError
from blockregen.values.load_result import LoadResult, try_load
from blockregen.values.number import Fixed, Formula, NumberValue, Range

__all__ = ["parse_number_value", "load_number", "require_number"]

_NUMBER = r"-?\d+(?:\.\d+)?"
_NUMBER_RE = re.compile(rf"^\s*({_NUMBER})\s*$")
# "min-max" only; spaced "a - b" is subtraction.
_RANGE_RE = re.compile(rf"^\s*({_NUMBER})-({_NUMBER})\s*$")

_RANGE_KEYS = (("min", "max"), ("low", "high"))


def _to_number(text: str) -> float:
    value = float(text)
    return int(value) if value.is_integer() and "." not in text else value


def _range(low: Any, high: Any) -> LoadResult[NumberValue]:
    try:
        return LoadResult.ok(Range(low, high))
    except ValueError as exc:
        return LoadResult.invalid(str(exc))


def parse_number_value(node: Any) -> LoadResult[NumberValue]:
    """Interpret *node* as a fixed number, a ``min-max`` range or a formula.

    Malformed input yields an invalid result; this never raises.
    """
    if node is None:
        return LoadResult.absent()

    if isinstance(node, bool):
        return LoadResult.invalid(f"Expected a number, got boolean {node}")

    if isinstance(node, (int, float)):
        return LoadResult.ok(Fixed(node))

    if isinstance(node, Mapping):
        for low_key, high_key in _RANGE_KEYS:
            if low_key in node and high_key in node:
                low, high = node[low_key], node[high_key]
                if _is_plain_number(low) and _is_plain_number(high):
                    return _range(low, high)
                return LoadResult.invalid(f"Range bounds must be numbers: {low!r}, {high!r}")
        return LoadResult.invalid("Expected 'min' and 'max' keys for a range")

    if isinstance(node, str):
        match = _NUMBER_RE.match(node)
        if match:
            return LoadResult.ok(Fixed(_to_number(match.group(1))))

        match = _RANGE_RE.match(node)
        if match:
            return _range(_to_number(match.group(1)), _to_number(match.group(2)))

        try:
            return LoadResult.ok(Formula.parse(node))
        except FormulaError as exc:
            return LoadResult.invalid(exc)

    return LoadResult.invalid(f"Expected a number, range or formula, got {type(node).__name__}")


def _is_plain_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_number(section: ConfigSection, path: str) -> LoadResult[NumberValue]:
    """Shorthand for ``try_load(section, path, parse_number_value)``."""
    return try_load(section, path, parse_number_value)


def require_number(node: Any) -> NumberValue:
    """Parse *node* or raise :class:`ParseError`; used where a number is mandatory."""
    result = parse_number_value(node)
    if result.is_absent:
        raise ParseError("Missing number")
    if result.is_invalid:
        assert result.error is not None
        raise result.error
    assert result.value is not None
    return result.value
