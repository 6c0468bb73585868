"""Preset rewards and their resolution into a concrete outcome."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from blockregen.drops.items import DropItem, RolledDrop
from blockregen.model.context import Context
from blockregen.values.number import Fixed, NumberValue


@dataclass
class RewardOutcome:
    """What one block break yields. Command templates are not expanded here."""

    drops: list[RolledDrop] = field(default_factory=list)
    money: float = 0.0
    console_commands: list[str] = field(default_factory=list)
    player_commands: list[str] = field(default_factory=list)

    @property
    def experience(self) -> int:
        return sum(d.experience for d in self.drops)

    def merge(self, other: RewardOutcome) -> None:
        self.drops.extend(other.drops)
        self.money += other.money
        self.console_commands.extend(other.console_commands)
        self.player_commands.extend(other.player_commands)


@dataclass
class PresetRewards:
    drops: list[DropItem] = field(default_factory=list)
    console_commands: list[str] = field(default_factory=list)
    player_commands: list[str] = field(default_factory=list)
    money: NumberValue = field(default_factory=lambda: Fixed(0))

    def roll(self, context: Context | None = None, rng: random.Random | None = None) -> RewardOutcome:
        """Roll every drop as an independent trial, then evaluate money."""
        rng = rng or random.Random()
        rolled = []
        for drop in self.drops:
            result = drop.roll(context, rng)
            if result is not None:
                rolled.append(result)
        return RewardOutcome(
            drops=rolled,
            money=max(0.0, self.money.get(context, rng)),
            console_commands=list(self.console_commands),
            player_commands=list(self.player_commands),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.drops or self.console_commands or self.player_commands) and self.money == Fixed(0)
