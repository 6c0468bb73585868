"""Build condition trees from config nodes.

Node shapes:

    require-tool: DIAMOND_PICKAXE          # mapping, one key   -> one leaf
    - require-tool: DIAMOND_PICKAXE        # sequence           -> composed
    - permission: vip.mine
    require-tool: [DIAMOND_PICKAXE, ...]   # sequence value     -> composed with
                                           #   the provider's own relation
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Protocol

from blockregen.conditions.tree import ComposedCondition, Condition, LeafCondition, Relation
from blockregen.model.context import Context

__all__ = [
    "ConditionProvider",
    "PredicateProvider",
    "from_node",
    "from_node_multiple",
]


class ConditionProvider(Protocol):
    """Turns one config node into a condition.

    *key* is the mapping key the node was found under, or ``None`` when the
    node is a bare scalar (an element of a list).
    """

    def load(self, key: str | None, node: Any) -> Condition: ...


class PredicateProvider:
    """Adapts ``evaluate(node, context) -> bool`` into a :class:`ConditionProvider`.

    The node is captured at load time; *prepare* may convert or validate it
    first (raising :class:`~blockregen.errors.ParseError` on bad input).
    """

    def __init__(
        self,
        evaluate: Callable[[Any, Context], bool],
        prepare: Callable[[Any], Any] | None = None,
    ) -> None:
        self._evaluate = evaluate
        self._prepare = prepare

    def load(self, key: str | None, node: Any) -> Condition:
        value = self._prepare(node) if self._prepare else node
        evaluate = self._evaluate

        def predicate(context: Context) -> bool:
            return evaluate(value, context)

        predicate.__name__ = str(node) if key is None else f"{key}={node}"
        return LeafCondition(predicate)


def _compose(children: list[Condition], relation: Relation) -> Condition:
    if len(children) == 1:
        return children[0]
    return ComposedCondition(relation, tuple(children))


def from_node(node: Any, relation: Relation, provider: ConditionProvider) -> Condition:
    """Build a condition from *node*, composing collections with *relation*.

    Lists and multi-key mappings become a composed condition whose
    children keep the source order. A collection holding exactly one entry
    collapses to that entry's condition. Errors from *provider* propagate
    unchanged, so nothing is returned for a partially valid node.
    """
    if isinstance(node, list):
        children = [from_node(item, relation, provider) for item in node]
        return _compose(children, relation)

    if isinstance(node, Mapping):
        children = [provider.load(str(key), value) for key, value in node.items()]
        return _compose(children, relation)

    return provider.load(None, node)


def from_node_multiple(
    node: Any, relation: Relation, provider: ConditionProvider
) -> Condition:
    """Entry point for a preset's top-level ``conditions`` node.

    A missing (``None``) node yields an always-true condition; anything
    else goes through :func:`from_node`.
    """
    if node is None:
        return Condition.true()
    return from_node(node, relation, provider)
