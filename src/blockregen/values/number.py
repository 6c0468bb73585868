"""NumberValue: a numeric config field given as a fixed value, a range or a formula."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from blockregen.values.formula import Expression, parse_formula

if TYPE_CHECKING:
    from blockregen.model.context import Context

__all__ = ["NumberValue", "Fixed", "Range", "Formula"]

_default_rng = random.Random()


class NumberValue:
    """Base class of the three number shapes.

    Instances are immutable. ``get`` may return a different value on every
    call for ranges and context-dependent formulas.
    """

    def get(self, context: Context | None = None, rng: random.Random | None = None) -> float:
        raise NotImplementedError

    def get_int(self, context: Context | None = None, rng: random.Random | None = None) -> int:
        return int(round(self.get(context, rng)))

    @staticmethod
    def fixed(value: float) -> Fixed:
        return Fixed(value)

    @staticmethod
    def ranged(low: float, high: float) -> Range:
        return Range(low, high)


@dataclass(frozen=True)
class Fixed(NumberValue):
    value: float

    def get(self, context: Context | None = None, rng: random.Random | None = None) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return _format(self.value)


@dataclass(frozen=True)
class Range(NumberValue):
    """Uniform draw between two bounds; integral bounds draw integers."""

    low: float
    high: float

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(f"Range lower bound {self.low} exceeds upper bound {self.high}")

    @property
    def integral(self) -> bool:
        return float(self.low).is_integer() and float(self.high).is_integer()

    def get(self, context: Context | None = None, rng: random.Random | None = None) -> float:
        rng = rng or _default_rng
        if self.integral:
            return float(rng.randint(int(self.low), int(self.high)))
        return rng.uniform(self.low, self.high)

    def __str__(self) -> str:
        return f"{_format(self.low)}-{_format(self.high)}"


@dataclass(frozen=True)
class Formula(NumberValue):
    """A parsed expression, re-evaluated against the context on every use."""

    expression: str
    tree: Expression = field(compare=False, repr=False)

    @classmethod
    def parse(cls, expression: str) -> Formula:
        return cls(expression.strip(), parse_formula(expression))

    def get(self, context: Context | None = None, rng: random.Random | None = None) -> float:
        return self.tree.evaluate(_resolver(context), rng or _default_rng)

    def placeholders(self) -> set[str]:
        return self.tree.placeholders()

    def __str__(self) -> str:
        return self.expression


def _resolver(context: Context | None):
    def resolve(name: str) -> Any:
        if context is None:
            return None
        return context.get(name)

    return resolve


def _format(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
