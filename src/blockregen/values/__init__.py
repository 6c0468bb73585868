"""Typed config values: numbers, formulas and load results."""

from blockregen.values.load_result import LoadResult, LoadState, try_load
from blockregen.values.number import Fixed, Formula, NumberValue, Range
from blockregen.values.parser import load_number, parse_number_value, require_number

__all__ = [
    "Fixed",
    "Formula",
    "LoadResult",
    "LoadState",
    "NumberValue",
    "Range",
    "load_number",
    "parse_number_value",
    "require_number",
    "try_load",
]
