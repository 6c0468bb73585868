"""Tests for the generic providers registered by create_default_registry."""

import random

import pytest

from blockregen.conditions.builder import from_node_multiple
from blockregen.conditions.builtin import create_default_registry
from blockregen.conditions.tree import ComposedCondition, ExtendedCondition, LeafCondition, Relation
from blockregen.errors import ParseError
from blockregen.model.context import Context


@pytest.fixture
def registry():
    return create_default_registry()


def _build(registry, node):
    return from_node_multiple(node, Relation.AND, registry)


class TestRegisteredKeys:
    def test_default_keys(self, registry):
        assert set(registry.keys()) == {
            "tool",
            "require-tool",
            "permission",
            "require-permission",
            "world",
            "chance",
            "placeholder",
            "all",
            "any",
            "not",
        }


class TestTreeShape:
    def test_single_key_map_is_aliased_leaf(self, registry):
        cond = _build(registry, {"require-tool": "DIAMOND_PICKAXE"})
        assert isinstance(cond, LeafCondition)
        assert cond.alias == "require-tool"

    def test_list_of_maps_is_ordered_and(self, registry):
        cond = _build(registry, [{"require-tool": "DIAMOND_PICKAXE"}, {"permission": "vip.mine"}])
        assert isinstance(cond, ComposedCondition)
        assert cond.relation is Relation.AND
        assert all(isinstance(child, LeafCondition) for child in cond.children)
        assert [child.alias for child in cond.children] == ["require-tool", "permission"]


class TestTool:
    def test_matches_held_tool(self, registry):
        cond = _build(registry, {"require-tool": "diamond_pickaxe"})
        assert cond.matches(Context({"tool": "DIAMOND_PICKAXE"}))
        assert not cond.matches(Context({"tool": "IRON_PICKAXE"}))

    def test_namespaced_material(self, registry):
        cond = _build(registry, {"tool": "minecraft:shears"})
        assert cond.matches(Context({"tool": "shears"}))

    def test_list_is_any_of(self, registry):
        cond = _build(registry, {"require-tool": ["DIAMOND_PICKAXE", "NETHERITE_PICKAXE"]})
        assert cond.matches(Context({"tool": "NETHERITE_PICKAXE"}))
        assert str(cond) == "(DIAMOND_PICKAXE || NETHERITE_PICKAXE)"

    def test_empty_material_rejected(self, registry):
        with pytest.raises(ParseError, match="Failed to parse 'tool': Empty material name"):
            _build(registry, {"tool": " "})


class TestPermissionAndWorld:
    def test_permission_in_collection(self, registry):
        cond = _build(registry, {"permission": "vip.mine"})
        assert cond.matches(Context({"permissions": {"vip.mine", "other"}}))
        assert not cond.matches(Context({"permissions": []}))

    def test_permission_missing_from_context(self, registry):
        assert not _build(registry, {"permission": "vip.mine"}).matches(Context())

    def test_world(self, registry):
        cond = _build(registry, {"world": "mine"})
        assert cond.matches(Context({"world": "mine"}))
        assert not cond.matches(Context({"world": "spawn"}))


class TestChance:
    def test_always(self, registry):
        cond = _build(registry, {"chance": 100})
        assert all(cond.matches(Context()) for _ in range(20))

    def test_never(self, registry):
        cond = _build(registry, {"chance": 0})
        assert not any(cond.matches(Context()) for _ in range(20))

    def test_uses_context_rng(self, registry):
        cond = _build(registry, {"chance": "50"})
        first = [cond.matches(Context({"random": random.Random(3)})) for _ in range(5)]
        second = [cond.matches(Context({"random": random.Random(3)})) for _ in range(5)]
        assert first == second

    def test_formula_chance(self, registry):
        cond = _build(registry, {"chance": "%luck% * 10"})
        assert cond.matches(Context({"luck": 10}))
        assert not cond.matches(Context({"luck": 0}))

    def test_list_rejected(self, registry):
        with pytest.raises(ParseError, match="Invalid property type 'list' for 'chance'"):
            _build(registry, {"chance": [1, 2]})

    def test_invalid_number(self, registry):
        with pytest.raises(ParseError, match="Failed to parse 'chance'"):
            _build(registry, {"chance": "lots"})


class TestPlaceholder:
    def test_all_placeholders_must_match(self, registry):
        cond = _build(registry, {"placeholder": {"%rank%": "gold", "%level%": 10}})
        assert cond.matches(Context({"rank": "gold", "level": 10}))
        assert not cond.matches(Context({"rank": "gold", "level": 9}))

    def test_requires_mapping(self, registry):
        with pytest.raises(ParseError, match="expected map"):
            _build(registry, {"placeholder": "%rank%"})


class TestNesting:
    def test_any_group(self, registry):
        cond = _build(registry, {"any": [{"world": "mine"}, {"permission": "bypass"}]})
        assert cond.matches(Context({"world": "spawn", "permissions": ["bypass"]}))
        assert not cond.matches(Context({"world": "spawn"}))

    def test_all_group(self, registry):
        cond = _build(registry, {"all": [{"world": "mine"}, {"tool": "SHEARS"}]})
        assert not cond.matches(Context({"world": "mine", "tool": "AIR"}))
        assert cond.matches(Context({"world": "mine", "tool": "SHEARS"}))

    def test_not(self, registry):
        cond = _build(registry, {"not": {"world": "spawn"}})
        assert cond.matches(Context({"world": "mine"}))
        assert not cond.matches(Context({"world": "spawn"}))
        assert str(cond) == "not"

    def test_top_level_list_is_and(self, registry):
        cond = _build(registry, [{"world": "mine"}, {"permission": "vip"}])
        assert not cond.matches(Context({"world": "mine"}))
        assert cond.matches(Context({"world": "mine", "permissions": ["vip"]}))

    def test_nested_unknown_key_names_outer_key(self, registry):
        with pytest.raises(ParseError, match="Failed to parse 'any': Invalid property 'swimming'"):
            _build(registry, {"any": [{"swimming": True}]})

    def test_missing_conditions_are_true(self, registry):
        assert _build(registry, None).matches(Context())


class TestExtender:
    def test_extender_applies_once_at_top_level(self):
        calls = []

        def extender(ctx):
            calls.append(1)
            return ctx.derive({"world": "mine"})

        registry = create_default_registry(extender)
        cond = _build(registry, {"all": [{"world": "mine"}, {"not": {"world": "spawn"}}]})
        assert isinstance(cond, ExtendedCondition)
        assert cond.matches(Context())
        assert len(calls) == 1
