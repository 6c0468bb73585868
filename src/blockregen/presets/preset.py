"""BlockPreset: a named rule bundling a target, a guard condition and rewards."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from blockregen.conditions.tree import Condition
from blockregen.drops.items import RolledDrop
from blockregen.drops.rewards import PresetRewards, RewardOutcome
from blockregen.model.context import Context
from blockregen.model.material import PlacementMaterial, TargetMaterial
from blockregen.presets.event import PresetEvent
from blockregen.values.number import Fixed, NumberValue


def _split_requirement(raw: str) -> tuple[str, int]:
    """Split ``NAME``, ``NAME;level`` or ``NAME:level``."""
    for sep in (";", ":"):
        if sep in raw:
            name, _, level = raw.partition(sep)
            return name.strip().upper(), int(level.strip())
    return raw.strip().upper(), 0


@dataclass
class PresetConditions:
    """Legacy shorthand requirements (``tool-required``, ``enchant-required``, ``jobs-check``).

    Tools and enchants are any-of lists; every job requirement must hold.
    The context supplies ``tool`` (material name), ``enchants`` (name -> level)
    and ``jobs`` (name -> level).
    """

    tools_required: list[str] = field(default_factory=list)
    enchants_required: list[tuple[str, int]] = field(default_factory=list)
    jobs_required: list[tuple[str, int]] = field(default_factory=list)

    @staticmethod
    def parse_list(raw: str) -> list[str]:
        return [part.strip() for part in raw.split(",") if part.strip()]

    def set_tools_required(self, raw: str) -> None:
        self.tools_required = [t.upper() for t in self.parse_list(raw)]

    def set_enchants_required(self, raw: str) -> None:
        self.enchants_required = [_split_requirement(e) for e in self.parse_list(raw)]

    def set_jobs_required(self, raw: str) -> None:
        self.jobs_required = [_split_requirement(j) for j in self.parse_list(raw)]

    def check(self, context: Context) -> bool:
        if self.tools_required and context.get_string("tool").upper() not in self.tools_required:
            return False

        if self.enchants_required:
            enchants = context.get_levels("enchants")
            if not any(enchants.get(name, 0) >= max(level, 1) for name, level in self.enchants_required):
                return False

        if self.jobs_required:
            jobs = context.get_levels("jobs")
            if not all(name in jobs and jobs[name] >= level for name, level in self.jobs_required):
                return False
        return True


@dataclass
class BlockPreset:
    name: str
    target_material: TargetMaterial | None = None
    replace_material: PlacementMaterial | None = None
    regen_material: PlacementMaterial | None = None
    delay: NumberValue = field(default_factory=lambda: Fixed(3))

    natural_break: bool = True
    disable_physics: bool = False
    apply_fortune: bool = True
    drop_naturally: bool = True
    handle_crops: bool = True
    check_solid_ground: bool = True
    regenerate_whole: bool = False

    sound: str | None = None
    particle: str | None = None
    regeneration_particle: str | None = None

    conditions: PresetConditions = field(default_factory=PresetConditions)
    condition: Condition = field(default_factory=Condition.true)
    rewards: PresetRewards = field(default_factory=PresetRewards)

    def can_break(self, context: Context) -> bool:
        """True when both the shorthand requirements and the condition tree pass."""
        return self.conditions.check(context) and self.condition.matches(context)

    def resolve(
        self,
        context: Context,
        rng: random.Random | None = None,
        event: PresetEvent | None = None,
    ) -> RewardOutcome | None:
        """Evaluate the guard and roll rewards; ``None`` when the guard fails.

        An active *event* doubles drop amounts and experience when
        configured, adds its own rewards, and may add its custom item with a
        one-in-``item_rarity`` roll.
        """
        if not self.can_break(context):
            return None
        rng = rng or random.Random()
        outcome = self.rewards.roll(context, rng)

        if event is None or not event.active:
            return outcome

        if event.double_drops or event.double_experience:
            outcome.drops = [
                RolledDrop(
                    d.item,
                    d.amount * 2 if event.double_drops else d.amount,
                    d.experience * 2 if event.double_experience else d.experience,
                )
                for d in outcome.drops
            ]

        if event.item is not None:
            rarity = max(1, event.item_rarity.get_int(context, rng))
            if rng.randint(1, rarity) == 1:
                rolled = event.item.roll(context, rng)
                if rolled is not None:
                    outcome.drops.append(rolled)

        outcome.merge(event.rewards.roll(context, rng))
        return outcome
