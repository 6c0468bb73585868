"""Formula expressions for number fields.

Formulas are parsed once at load time with a Lark LALR grammar and the
resulting expression tree is evaluated on every use, because placeholders
(``%player_level%``) are resolved against the evaluation context.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, VisitError

from blockregen.errors import FormulaError

__all__ = ["Expression", "parse_formula"]

GRAMMAR_PATH = Path(__file__).parent / "formula.lark"

Resolver = Callable[[str], Any]


class Expression:
    """Base class for formula expression nodes."""

    def evaluate(self, resolve: Resolver, rng: random.Random) -> float:
        raise NotImplementedError

    def placeholders(self) -> set[str]:
        return set()


@dataclass(frozen=True)
class Number(Expression):
    value: float

    def evaluate(self, resolve: Resolver, rng: random.Random) -> float:
        return self.value

    def __str__(self) -> str:
        return _format_number(self.value)


@dataclass(frozen=True)
class Placeholder(Expression):
    name: str

    def evaluate(self, resolve: Resolver, rng: random.Random) -> float:
        raw = resolve(self.name)
        if raw is None:
            raise FormulaError(f"Unknown placeholder '%{self.name}%'")
        try:
            return float(raw)
        except (TypeError, ValueError) as exc:
            raise FormulaError(
                f"Placeholder '%{self.name}%' is not numeric: {raw!r}"
            ) from exc

    def placeholders(self) -> set[str]:
        return {self.name}

    def __str__(self) -> str:
        return f"%{self.name}%"


@dataclass(frozen=True)
class Negate(Expression):
    operand: Expression

    def evaluate(self, resolve: Resolver, rng: random.Random) -> float:
        return -self.operand.evaluate(resolve, rng)

    def placeholders(self) -> set[str]:
        return self.operand.placeholders()

    def __str__(self) -> str:
        return f"-{self.operand}"


def _divide(left: float, right: float) -> float:
    if right == 0:
        raise FormulaError("Division by zero")
    return left / right


def _modulo(left: float, right: float) -> float:
    if right == 0:
        raise FormulaError("Modulo by zero")
    return left % right


_OPERATORS: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "%": _modulo,
    "^": lambda a, b: a ** b,
}


@dataclass(frozen=True)
class BinaryOp(Expression):
    operator: str
    left: Expression
    right: Expression

    def evaluate(self, resolve: Resolver, rng: random.Random) -> float:
        left = self.left.evaluate(resolve, rng)
        right = self.right.evaluate(resolve, rng)
        try:
            result = _OPERATORS[self.operator](left, right)
        except OverflowError as exc:
            raise FormulaError(f"Overflow in '{self}'") from exc
        if isinstance(result, complex):
            raise FormulaError(f"'{self}' has no real result")
        return float(result)

    def placeholders(self) -> set[str]:
        return self.left.placeholders() | self.right.placeholders()

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


def _random(rng: random.Random, low: float, high: float) -> float:
    if low > high:
        low, high = high, low
    return rng.uniform(low, high)


def _sqrt(value: float) -> float:
    if value < 0:
        raise FormulaError("sqrt() of a negative number")
    return math.sqrt(value)


# name -> (min args, max args or None for variadic, implementation)
_FUNCTIONS: dict[str, tuple[int, int | None, Callable[..., float]]] = {
    "min": (1, None, min),
    "max": (1, None, max),
    "abs": (1, 1, abs),
    "floor": (1, 1, math.floor),
    "ceil": (1, 1, math.ceil),
    "round": (1, 1, round),
    "sqrt": (1, 1, _sqrt),
}


@dataclass(frozen=True)
class Call(Expression):
    function: str
    args: tuple[Expression, ...]

    def evaluate(self, resolve: Resolver, rng: random.Random) -> float:
        values = [arg.evaluate(resolve, rng) for arg in self.args]
        if self.function == "random":
            return _random(rng, *values)
        _, _, impl = _FUNCTIONS[self.function]
        try:
            return float(impl(*values))
        except (OverflowError, ValueError) as exc:
            raise FormulaError(f"'{self}' has no finite result") from exc

    def placeholders(self) -> set[str]:
        names: set[str] = set()
        for arg in self.args:
            names |= arg.placeholders()
        return names

    def __str__(self) -> str:
        return f"{self.function}({', '.join(str(a) for a in self.args)})"


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _check_arity(name: str, count: int) -> None:
    if name == "random":
        if count != 2:
            raise FormulaError(f"random() takes 2 arguments, got {count}")
        return
    if name not in _FUNCTIONS:
        raise FormulaError(f"Unknown function '{name}'")
    low, high, _ = _FUNCTIONS[name]
    if count < low or (high is not None and count > high):
        raise FormulaError(f"Wrong number of arguments for {name}(): {count}")


class FormulaTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into :class:`Expression` nodes."""

    def number(self, items: list[Token]) -> Number:
        return Number(float(items[0]))

    def placeholder(self, items: list[Token]) -> Placeholder:
        return Placeholder(str(items[0])[1:-1])

    def neg(self, items: list[Expression]) -> Negate:
        return Negate(items[0])

    def add(self, items: list[Expression]) -> BinaryOp:
        return BinaryOp("+", items[0], items[1])

    def sub(self, items: list[Expression]) -> BinaryOp:
        return BinaryOp("-", items[0], items[1])

    def mul(self, items: list[Expression]) -> BinaryOp:
        return BinaryOp("*", items[0], items[1])

    def div(self, items: list[Expression]) -> BinaryOp:
        return BinaryOp("/", items[0], items[1])

    def mod(self, items: list[Expression]) -> BinaryOp:
        return BinaryOp("%", items[0], items[1])

    def pow(self, items: list[Expression]) -> BinaryOp:
        return BinaryOp("^", items[0], items[1])

    def args(self, items: list[Expression]) -> tuple[Expression, ...]:
        return tuple(items)

    def call(self, items: list[Any]) -> Call:
        name = str(items[0]).lower()
        args = items[1] if len(items) > 1 and items[1] is not None else ()
        _check_arity(name, len(args))
        return Call(name, tuple(args))


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")


def parse_formula(source: str) -> Expression:
    """Parse a formula string into an expression tree.

    Raises :class:`FormulaError` on syntax errors, unknown functions and
    wrong argument counts.
    """
    if not source or not source.strip():
        raise FormulaError("Empty formula")
    try:
        tree = _parser().parse(source)
    except LarkError as exc:
        raise FormulaError(f"Invalid formula '{source}': {exc}") from exc
    try:
        return FormulaTransformer().transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, FormulaError):
            raise exc.orig_exc from exc
        raise FormulaError(f"Invalid formula '{source}': {exc.orig_exc}") from exc
