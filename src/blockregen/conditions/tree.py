"""Condition tree: leaf predicates and AND/OR compositions.

All node types are frozen dataclasses. ``aliased`` returns a copy with a
new alias; aliases replace the node's rendering in ``str()`` so traces
show config keys (``require-tool``) instead of predicate internals.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable

from blockregen.model.context import Context

__all__ = [
    "Condition",
    "ComposedCondition",
    "ConstantCondition",
    "ContextExtender",
    "ExtendedCondition",
    "LeafCondition",
    "Relation",
    "wrap",
]

ContextExtender = Callable[[Context], Context]
Predicate = Callable[[Context], bool]


class Relation(Enum):
    AND = "and"
    OR = "or"

    @property
    def symbol(self) -> str:
        return "&&" if self is Relation.AND else "||"


class Condition:
    """Base class for all condition nodes."""

    alias: str | None

    def matches(self, context: Context) -> bool:
        raise NotImplementedError

    def aliased(self, alias: str | None) -> Condition:
        return replace(self, alias=alias)  # type: ignore[type-var]

    @staticmethod
    def true() -> ConstantCondition:
        return ConstantCondition(True)

    @staticmethod
    def false() -> ConstantCondition:
        return ConstantCondition(False)

    @staticmethod
    def of(predicate: Predicate, alias: str | None = None) -> LeafCondition:
        return LeafCondition(predicate, alias)

    @staticmethod
    def all_of(*children: Condition) -> ComposedCondition:
        return ComposedCondition(Relation.AND, tuple(children))

    @staticmethod
    def any_of(*children: Condition) -> ComposedCondition:
        return ComposedCondition(Relation.OR, tuple(children))


@dataclass(frozen=True)
class ConstantCondition(Condition):
    value: bool
    alias: str | None = None

    def matches(self, context: Context) -> bool:
        return self.value

    def __str__(self) -> str:
        return self.alias or ("true" if self.value else "false")


@dataclass(frozen=True)
class LeafCondition(Condition):
    predicate: Predicate = field(compare=False)
    alias: str | None = None

    def matches(self, context: Context) -> bool:
        return bool(self.predicate(context))

    def __str__(self) -> str:
        return self.alias or getattr(self.predicate, "__name__", "condition")


@dataclass(frozen=True)
class ComposedCondition(Condition):
    """AND/OR over ordered children, evaluated left to right with short-circuit.

    An empty AND is true and an empty OR is false.
    """

    relation: Relation
    children: tuple[Condition, ...]
    alias: str | None = None

    def matches(self, context: Context) -> bool:
        if self.relation is Relation.AND:
            for child in self.children:
                if not child.matches(context):
                    return False
            return True
        for child in self.children:
            if child.matches(context):
                return True
        return False

    def __str__(self) -> str:
        if self.alias:
            return self.alias
        joined = f" {self.relation.symbol} ".join(str(c) for c in self.children)
        return f"({joined})"


@dataclass(frozen=True)
class ExtendedCondition(Condition):
    """Evaluates *inner* against the context produced by *extender*."""

    inner: Condition
    extender: ContextExtender = field(compare=False)
    alias: str | None = None

    def matches(self, context: Context) -> bool:
        return self.inner.matches(self.extender(context))

    def __str__(self) -> str:
        return self.alias or str(self.inner)


def wrap(condition: Condition, extender: ContextExtender) -> ExtendedCondition:
    """Return a condition that derives its context through *extender* first."""
    return ExtendedCondition(condition, extender)
