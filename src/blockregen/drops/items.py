"""Drop descriptors: items a preset can reward, each with its own chance and amount."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

from blockregen.drops.providers import ItemProvider
from blockregen.model.context import Context
from blockregen.values.number import Fixed, NumberValue

__all__ = [
    "DropItem",
    "Enchant",
    "ExperienceDrop",
    "ExternalDropItem",
    "ItemFlag",
    "MaterialDropItem",
    "RolledDrop",
]


class ItemFlag(Enum):
    HIDE_ENCHANTS = "HIDE_ENCHANTS"
    HIDE_ATTRIBUTES = "HIDE_ATTRIBUTES"
    HIDE_UNBREAKABLE = "HIDE_UNBREAKABLE"
    HIDE_DESTROYS = "HIDE_DESTROYS"
    HIDE_PLACED_ON = "HIDE_PLACED_ON"
    HIDE_ADDITIONAL_TOOLTIP = "HIDE_ADDITIONAL_TOOLTIP"
    HIDE_POTION_EFFECTS = "HIDE_POTION_EFFECTS"
    HIDE_DYE = "HIDE_DYE"
    HIDE_ARMOR_TRIM = "HIDE_ARMOR_TRIM"
    HIDE_STORED_ENCHANTS = "HIDE_STORED_ENCHANTS"


@dataclass(frozen=True)
class Enchant:
    name: str
    level: int = 1

    @classmethod
    def parse(cls, raw: str) -> Enchant:
        """Parse ``NAME`` or ``NAME:level``."""
        name, sep, level = raw.strip().partition(":")
        name = name.strip().upper()
        if not name:
            raise ValueError(f"Invalid enchantment '{raw}'")
        if not sep:
            return cls(name)
        try:
            value = int(level.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid enchantment level in '{raw}'") from exc
        if value < 1:
            raise ValueError(f"Enchantment level must be positive in '{raw}'")
        return cls(name, value)

    def __str__(self) -> str:
        return f"{self.name}:{self.level}"


@dataclass
class ExperienceDrop:
    amount: NumberValue = field(default_factory=lambda: Fixed(0))
    drop_naturally: bool = True

    def roll(self, context: Context | None, rng: random.Random) -> int:
        return max(0, self.amount.get_int(context, rng))


@dataclass(frozen=True)
class RolledDrop:
    """One drop that passed its chance roll."""

    item: DropItem
    amount: int
    experience: int = 0

    @property
    def drop_naturally(self) -> bool:
        return self.item.drop_naturally


@dataclass
class DropItem:
    """Base drop descriptor.

    ``chance`` is a percentage in ``[0, 100]``; every descriptor is an
    independent trial.
    """

    chance: NumberValue = field(default_factory=lambda: Fixed(100), kw_only=True)
    amount: NumberValue = field(default_factory=lambda: Fixed(1), kw_only=True)
    drop_naturally: bool = field(default=True, kw_only=True)

    def should_drop(self, context: Context | None, rng: random.Random) -> bool:
        return rng.random() * 100 < self.chance.get(context, rng)

    def roll(self, context: Context | None = None, rng: random.Random | None = None) -> RolledDrop | None:
        """Roll chance and amount; ``None`` when nothing drops."""
        rng = rng or random.Random()
        if not self.should_drop(context, rng):
            return None
        amount = self.amount.get_int(context, rng)
        if amount <= 0:
            return None
        return RolledDrop(self, amount, self._roll_experience(context, rng))

    def _roll_experience(self, context: Context | None, rng: random.Random) -> int:
        return 0


@dataclass
class MaterialDropItem(DropItem):
    """An item described entirely in config."""

    material: str
    display_name: str | None = None
    lore: list[str] = field(default_factory=list)
    enchants: list[Enchant] = field(default_factory=list)
    item_flags: set[ItemFlag] = field(default_factory=set)
    experience: ExperienceDrop | None = None
    custom_model_data: int | None = None
    item_model: str | None = None

    def _roll_experience(self, context: Context | None, rng: random.Random) -> int:
        if self.experience is None:
            return 0
        return self.experience.roll(context, rng)

    def __str__(self) -> str:
        return f"MaterialDropItem({self.material}, amount={self.amount}, chance={self.chance})"


@dataclass
class ExternalDropItem(DropItem):
    """An item resolved through an external :class:`ItemProvider`."""

    provider: ItemProvider
    item_id: str
    prefix: str = ""

    def __str__(self) -> str:
        return f"ExternalDropItem({self.prefix}:{self.item_id}, amount={self.amount}, chance={self.chance})"
