"""Keyed registry of condition providers.

The registry is itself a :class:`~blockregen.conditions.builder.ConditionProvider`:
given ``(key, node)`` it looks up the provider registered under *key*,
checks the node's shape and builds the condition with the entry's relation.
Registration happens while loading; the registry is only read afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from blockregen.conditions.builder import ConditionProvider, from_node
from blockregen.conditions.tree import (
    ComposedCondition,
    Condition,
    ContextExtender,
    Relation,
    wrap,
)
from blockregen.errors import ParseError

__all__ = ["ConditionProviderRegistry", "NodeKind", "ProviderEntry", "kind_of"]


class NodeKind(Enum):
    """Config node shapes a provider can declare it expects."""

    ANY = "any"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SCALAR = "scalar"
    LIST = "list"
    MAP = "map"

    def accepts(self, node: Any) -> bool:
        if self is NodeKind.ANY:
            return True
        actual = kind_of(node)
        if self is NodeKind.SCALAR:
            return actual in (NodeKind.STRING, NodeKind.NUMBER, NodeKind.BOOLEAN)
        return actual is self


def kind_of(node: Any) -> NodeKind:
    if isinstance(node, bool):
        return NodeKind.BOOLEAN
    if isinstance(node, (int, float)):
        return NodeKind.NUMBER
    if isinstance(node, str):
        return NodeKind.STRING
    if isinstance(node, list):
        return NodeKind.LIST
    if isinstance(node, Mapping):
        return NodeKind.MAP
    return NodeKind.ANY


@dataclass(frozen=True)
class ProviderEntry:
    """A provider with the node kind it expects and the relation used for lists."""

    provider: ConditionProvider
    expected: NodeKind = NodeKind.ANY
    relation: Relation = Relation.OR

    @classmethod
    def of(
        cls,
        provider: ConditionProvider,
        expected: NodeKind = NodeKind.ANY,
        relation: Relation = Relation.OR,
    ) -> ProviderEntry:
        return cls(provider, expected, relation)


class ConditionProviderRegistry:
    """Maps config keys to :class:`ProviderEntry` objects.

    Latest registration wins on key collision. An optional context extender
    wraps every condition the registry builds.
    """

    def __init__(
        self,
        providers: Mapping[str, ProviderEntry] | None = None,
        extender: ContextExtender | None = None,
    ) -> None:
        self._providers: dict[str, ProviderEntry] = dict(providers or {})
        self._extender = extender

    @classmethod
    def empty(cls) -> ConditionProviderRegistry:
        return cls()

    @classmethod
    def single(
        cls,
        key: str,
        entry: ProviderEntry | ConditionProvider,
        extender: ContextExtender | None = None,
    ) -> ConditionProviderRegistry:
        if not isinstance(entry, ProviderEntry):
            entry = ProviderEntry.of(entry)
        return cls({key: entry}, extender)

    # --- registration ---------------------------------------------------------

    def add_provider(
        self,
        key: str,
        entry: ProviderEntry | ConditionProvider,
        expected: NodeKind = NodeKind.ANY,
        relation: Relation = Relation.OR,
    ) -> ConditionProviderRegistry:
        """Register *entry* under *key*, overwriting any existing entry.

        A bare provider is wrapped in a :class:`ProviderEntry` built from
        *expected* and *relation*.
        """
        if not isinstance(entry, ProviderEntry):
            entry = ProviderEntry.of(entry, expected, relation)
        self._providers[key] = entry
        return self

    register_provider = add_provider

    def extender(self, extender: ContextExtender | None) -> ConditionProviderRegistry:
        self._extender = extender
        return self

    # --- lookup ---------------------------------------------------------------

    @property
    def providers(self) -> Mapping[str, ProviderEntry]:
        return MappingProxyType(self._providers)

    def keys(self) -> list[str]:
        return list(self._providers.keys())

    def get(self, key: str) -> ProviderEntry | None:
        return self._providers.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._providers

    # --- building -------------------------------------------------------------

    def load(self, key: str | None, node: Any) -> Condition:
        """Build the condition for *node* found under *key*.

        Raises :class:`ParseError` for an unknown key, a node of the wrong
        kind, or any failure inside the provider (prefixed with the key).
        """
        condition = self._build(key, node)
        if self._extender is None:
            return condition
        return wrap(condition, self._extender)

    build = load

    def unextended(self) -> ConditionProvider:
        """Return a provider view of this registry that never applies the extender.

        Used by providers that recurse into the registry, so the extender
        wraps only the outermost condition.
        """
        return _Unextended(self)

    def _build(self, key: str | None, node: Any) -> Condition:
        if key is None:
            # A bare string names a flag-style provider: "- sneaking".
            if isinstance(node, str) and node in self._providers:
                key, node = node, True
            else:
                raise ParseError(f"Invalid property '{node}'")

        entry = self._providers.get(key)
        if entry is None:
            raise ParseError(f"Invalid property '{key}'")

        if not entry.expected.accepts(node):
            raise ParseError(
                f"Invalid property type '{kind_of(node).value}' for '{key}'"
                f" (expected {entry.expected.value})"
            )

        try:
            condition = from_node(node, entry.relation, entry.provider)
        except ParseError as exc:
            raise ParseError(f"Failed to parse '{key}': {exc}") from exc

        # Composed conditions stay unaliased so str() shows their children.
        if not isinstance(condition, ComposedCondition):
            condition = condition.aliased(key)
        return condition

    def __repr__(self) -> str:
        return f"ConditionProviderRegistry(keys={self.keys()})"


class _Unextended:
    def __init__(self, registry: ConditionProviderRegistry) -> None:
        self._registry = registry

    def load(self, key: str | None, node: Any) -> Condition:
        return self._registry._build(key, node)
