"""Drop descriptors, external item providers and preset rewards."""

from blockregen.drops.items import (
    DropItem,
    Enchant,
    ExperienceDrop,
    ExternalDropItem,
    ItemFlag,
    MaterialDropItem,
    RolledDrop,
)
from blockregen.drops.loader import DropLoader
from blockregen.drops.providers import ItemProvider, ItemProviderRegistry, StaticItemProvider
from blockregen.drops.rewards import PresetRewards, RewardOutcome

__all__ = [
    "DropItem",
    "DropLoader",
    "Enchant",
    "ExperienceDrop",
    "ExternalDropItem",
    "ItemFlag",
    "ItemProvider",
    "ItemProviderRegistry",
    "MaterialDropItem",
    "PresetRewards",
    "RewardOutcome",
    "RolledDrop",
    "StaticItemProvider",
]
