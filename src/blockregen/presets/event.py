"""Preset events: temporary boosts attached to a preset."""

from __future__ import annotations

from dataclasses import dataclass, field

from blockregen.drops.items import DropItem
from blockregen.drops.rewards import PresetRewards
from blockregen.values.number import Fixed, NumberValue

BOSS_BAR_COLORS = frozenset({"PINK", "BLUE", "RED", "GREEN", "YELLOW", "PURPLE", "WHITE"})
BOSS_BAR_STYLES = frozenset({"SOLID", "SEGMENTED_6", "SEGMENTED_10", "SEGMENTED_12", "SEGMENTED_20"})


@dataclass(frozen=True)
class EventBossBar:
    text: str
    color: str = "YELLOW"
    style: str = "SOLID"


@dataclass
class PresetEvent:
    preset_name: str
    display_name: str
    double_drops: bool = False
    double_experience: bool = False
    boss_bar: EventBossBar | None = None
    item: DropItem | None = None
    item_rarity: NumberValue = field(default_factory=lambda: Fixed(1))
    rewards: PresetRewards = field(default_factory=PresetRewards)
    active: bool = False
