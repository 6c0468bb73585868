"""Condition trees built from config nodes and evaluated against a context."""

from blockregen.conditions.builder import (
    ConditionProvider,
    PredicateProvider,
    from_node,
    from_node_multiple,
)
from blockregen.conditions.builtin import create_default_registry
from blockregen.conditions.registry import (
    ConditionProviderRegistry,
    NodeKind,
    ProviderEntry,
    kind_of,
)
from blockregen.conditions.tree import (
    ComposedCondition,
    Condition,
    ConstantCondition,
    ContextExtender,
    ExtendedCondition,
    LeafCondition,
    Relation,
    wrap,
)

__all__ = [
    "ComposedCondition",
    "Condition",
    "ConditionProvider",
    "ConditionProviderRegistry",
    "ConstantCondition",
    "ContextExtender",
    "ExtendedCondition",
    "LeafCondition",
    "NodeKind",
    "PredicateProvider",
    "ProviderEntry",
    "Relation",
    "create_default_registry",
    "from_node",
    "from_node_multiple",
    "kind_of",
    "wrap",
]
