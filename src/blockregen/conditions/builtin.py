"""Generic condition providers backed by context keys.

Domain-specific checks (held items, external job plugins) register their
own providers; these cover what can be decided from the evaluation
context alone.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any

from blockregen.conditions.builder import PredicateProvider
from blockregen.conditions.registry import ConditionProviderRegistry, NodeKind
from blockregen.conditions.tree import Condition, ContextExtender, LeafCondition, Relation
from blockregen.errors import ParseError
from blockregen.model.context import Context
from blockregen.values.parser import require_number

__all__ = ["create_default_registry"]


def _scalar_string(node: Any) -> str:
    if node is None or isinstance(node, (list, Mapping)):
        raise ParseError(f"Expected a single value, got {type(node).__name__}")
    return str(node)


def _material_name(node: Any) -> str:
    name = _scalar_string(node).strip().upper()
    if name.startswith("MINECRAFT:"):
        name = name[len("MINECRAFT:"):]
    if not name:
        raise ParseError("Empty material name")
    return name


def _has_tool(material: str, context: Context) -> bool:
    return context.get_string("tool").upper() == material


def _has_permission(permission: str, context: Context) -> bool:
    return context.has_member("permissions", permission)


def _in_world(world: str, context: Context) -> bool:
    return context.get_string("world") == world


def _roll_chance(chance: Any, context: Context) -> bool:
    rng = context.get("random")
    roll = rng.random() if isinstance(rng, random.Random) else random.random()
    return roll * 100 < chance.get(context)


class PlaceholderProvider:
    """``placeholder: {"%player_level%": 10}``: string equality per placeholder."""

    def load(self, key: str | None, node: Any) -> Condition:
        if key is None:
            raise ParseError("Expected a mapping of placeholder to value")
        name = key.strip("%")
        expected = _scalar_string(node)

        def predicate(context: Context) -> bool:
            return context.get_string(name) == expected

        predicate.__name__ = f"%{name}%={expected}"
        return LeafCondition(predicate)


class NegationProvider:
    """``not: {...}``: true when the nested condition is false."""

    def __init__(self, registry: ConditionProviderRegistry) -> None:
        self._registry = registry

    def load(self, key: str | None, node: Any) -> Condition:
        inner = self._registry.unextended().load(key, node)

        def predicate(context: Context) -> bool:
            return not inner.matches(context)

        predicate.__name__ = f"not {inner}"
        return LeafCondition(predicate)


def create_default_registry(extender: ContextExtender | None = None) -> ConditionProviderRegistry:
    """Create a registry with the generic providers registered.

    Keys: ``tool``/``require-tool``, ``permission``/``require-permission``,
    ``world``, ``chance``, ``placeholder``, ``all``, ``any`` and ``not``.
    """
    registry = ConditionProviderRegistry(extender=extender)

    tool = PredicateProvider(_has_tool, prepare=_material_name)
    registry.add_provider("tool", tool)
    registry.add_provider("require-tool", tool)

    permission = PredicateProvider(_has_permission, prepare=_scalar_string)
    registry.add_provider("permission", permission)
    registry.add_provider("require-permission", permission)

    registry.add_provider("world", PredicateProvider(_in_world, prepare=_scalar_string))
    registry.add_provider(
        "chance",
        PredicateProvider(_roll_chance, prepare=require_number),
        expected=NodeKind.SCALAR,
    )
    registry.add_provider(
        "placeholder", PlaceholderProvider(), expected=NodeKind.MAP, relation=Relation.AND
    )

    # Nested groups switch the relation purely through node structure.
    nested = registry.unextended()
    registry.add_provider("all", nested, relation=Relation.AND)
    registry.add_provider("any", nested, relation=Relation.OR)
    registry.add_provider("not", NegationProvider(registry), relation=Relation.AND)
    return registry

