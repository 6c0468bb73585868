"""Tests for DropLoader: rewards sections and individual drop descriptors."""

import pytest

from blockregen.config.section import ConfigSection
from blockregen.drops.items import Enchant, ExternalDropItem, ItemFlag, MaterialDropItem
from blockregen.drops.loader import DropLoader
from blockregen.drops.providers import ItemProviderRegistry, StaticItemProvider
from blockregen.errors import ParseError
from blockregen.model.diagnostic import DiagnosticLog
from blockregen.model.material import MaterialResolver
from blockregen.values.fields import FieldReader
from blockregen.values.number import Fixed, Formula, Range


@pytest.fixture
def diagnostics() -> DiagnosticLog:
    return DiagnosticLog()


@pytest.fixture
def loader(diagnostics) -> DropLoader:
    items = ItemProviderRegistry()
    items.register("econ", StaticItemProvider(["coin"]))
    return DropLoader(FieldReader("ore", diagnostics), MaterialResolver(), items)


def _section(data: dict) -> ConfigSection:
    return ConfigSection(data)


class TestMaterialDrop:
    def test_full_descriptor(self, loader, diagnostics):
        drop = loader.load_drop(
            _section(
                {
                    "material": "minecraft:diamond",
                    "amount": "1-3",
                    "chance": 50,
                    "name": "&bShiny",
                    "lores": ["one", "two"],
                    "enchants": ["FORTUNE:2", "MENDING"],
                    "flags": ["hide_enchants"],
                    "exp": {"amount": 4, "drop-naturally": False},
                    "custom-model-data": 7,
                    "item-model": "custom_gem",
                }
            ),
            drop_naturally=True,
        )
        assert isinstance(drop, MaterialDropItem)
        assert drop.material == "DIAMOND"
        assert drop.amount == Range(1, 3)
        assert drop.chance == Fixed(50)
        assert drop.display_name == "&bShiny"
        assert drop.lore == ["one", "two"]
        assert drop.enchants == [Enchant("FORTUNE", 2), Enchant("MENDING", 1)]
        assert drop.item_flags == {ItemFlag.HIDE_ENCHANTS}
        assert drop.experience.amount == Fixed(4)
        assert drop.experience.drop_naturally is False
        assert drop.custom_model_data == 7
        assert drop.item_model == "minecraft:custom_gem"
        assert len(diagnostics) == 0

    def test_defaults(self, loader):
        drop = loader.load_drop(_section({"material": "STONE"}), drop_naturally=False)
        assert drop.amount == Fixed(1)
        assert drop.chance == Fixed(100)
        assert drop.drop_naturally is False
        assert drop.experience is None

    def test_missing_material(self, loader):
        with pytest.raises(ParseError, match="Material is missing"):
            loader.load_drop(_section({"amount": 1}), True)

    def test_invalid_material(self, loader):
        with pytest.raises(ParseError, match="Material is invalid"):
            loader.load_drop(_section({"material": "bad/name"}), True)

    def test_bad_optional_fields_warn(self, loader, diagnostics):
        drop = loader.load_drop(
            _section(
                {
                    "material": "STONE",
                    "enchants": ["FORTUNE:x"],
                    "flags": ["NOT_A_FLAG"],
                    "custom-model-data": "abc",
                    "item-model": "Bad Model!",
                }
            ),
            True,
            "rewards.drop-item",
        )
        assert drop.enchants == []
        assert drop.item_flags == set()
        assert drop.custom_model_data is None
        assert drop.item_model is None
        paths = [d.path for d in diagnostics.warnings]
        assert paths == [
            "rewards.drop-item.enchants",
            "rewards.drop-item.flags",
            "rewards.drop-item.custom-model-data",
            "rewards.drop-item.item-model",
        ]

    def test_invalid_amount_defaults_with_warning(self, loader, diagnostics):
        drop = loader.load_drop(_section({"material": "STONE", "amount": "5-1"}), True, "x")
        assert drop.amount == Fixed(1)
        assert diagnostics.warnings[0].path == "x.amount"

    def test_none_section(self, loader):
        assert loader.load_drop(None, True) is None


class TestExternalDrop:
    def test_known_item(self, loader):
        drop = loader.load_drop(_section({"item": "ECON:coin", "amount": 2}), True)
        assert isinstance(drop, ExternalDropItem)
        assert drop.prefix == "econ"
        assert drop.item_id == "coin"
        assert drop.amount == Fixed(2)

    def test_unknown_prefix(self, loader):
        with pytest.raises(ParseError, match="Invalid prefix 'shop'"):
            loader.load_drop(_section({"item": "shop:coin"}), True)

    def test_unknown_item(self, loader):
        with pytest.raises(ParseError, match="External item 'gem' doesn't exist"):
            loader.load_drop(_section({"item": "econ:gem"}), True)

    def test_malformed_reference(self, loader):
        with pytest.raises(ParseError, match="expected 'prefix:id'"):
            loader.load_drop(_section({"item": "coin"}), True)


class TestRewards:
    def test_missing_section(self, loader):
        assert loader.load_rewards(None, True).is_empty

    def test_commands_and_money(self, loader):
        rewards = loader.load_rewards(
            _section(
                {
                    "commands": ["say hi", "say bye"],
                    "player-command": "spawn",
                    "money": "10 + %player_level% * 2",
                }
            ),
            True,
        )
        assert rewards.console_commands == ["say hi", "say bye"]
        assert rewards.player_commands == ["spawn"]
        assert isinstance(rewards.money, Formula)

    def test_console_commands_preferred_over_commands(self, loader):
        rewards = loader.load_rewards(
            _section({"console-commands": ["a"], "commands": ["b"]}), True
        )
        assert rewards.console_commands == ["a"]

    def test_single_drop(self, loader):
        rewards = loader.load_rewards(_section({"drop-item": {"material": "COBBLESTONE"}}), True)
        assert [d.material for d in rewards.drops] == ["COBBLESTONE"]

    def test_multiple_drops_keep_order(self, loader):
        rewards = loader.load_rewards(
            _section(
                {
                    "drop-item": {
                        "first": {"material": "DIAMOND"},
                        "second": {"item": "econ:coin"},
                        "third": {"material": "EMERALD"},
                    }
                }
            ),
            True,
        )
        assert [type(d).__name__ for d in rewards.drops] == [
            "MaterialDropItem",
            "ExternalDropItem",
            "MaterialDropItem",
        ]

    def test_numbered_drop_keys(self, loader, diagnostics):
        rewards = loader.load_rewards(
            ConfigSection.from_yaml(
                "drop-item:\n  1:\n    material: DIAMOND\n  2:\n    material: EMERALD\n"
            ),
            True,
        )
        assert [d.material for d in rewards.drops] == ["DIAMOND", "EMERALD"]
        assert len(diagnostics) == 0

    def test_bad_drop_skipped_others_kept(self, loader, diagnostics):
        rewards = loader.load_rewards(
            _section(
                {
                    "drop-item": {
                        "good": {"material": "DIAMOND"},
                        "bad": {"item": "shop:coin"},
                        "broken": "not a section",
                    }
                }
            ),
            True,
        )
        assert [d.material for d in rewards.drops] == ["DIAMOND"]
        assert [d.path for d in diagnostics.warnings] == [
            "rewards.drop-item.bad",
            "rewards.drop-item.broken",
        ]
        assert diagnostics.errors == []

    def test_drop_item_must_be_section(self, loader, diagnostics):
        rewards = loader.load_rewards(_section({"drop-item": "DIAMOND"}), True)
        assert rewards.drops == []
        assert diagnostics.warnings[0].path == "rewards.drop-item"
