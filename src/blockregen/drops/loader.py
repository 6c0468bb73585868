"""Load rewards and drop descriptors from a preset's config subsection.

Every descriptor is parsed on its own: a bad external reference or a
missing material skips that one drop and the remaining ones still load.
Optional descriptor fields (lore, enchants, flags, ...) are best-effort.
"""

from __future__ import annotations

import re

from blockregen.config.section import ConfigSection
from blockregen.drops.items import (
    DropItem,
    Enchant,
    ExperienceDrop,
    ExternalDropItem,
    ItemFlag,
    MaterialDropItem,
)
from blockregen.drops.providers import ItemProviderRegistry
from blockregen.drops.rewards import PresetRewards
from blockregen.errors import ParseError
from blockregen.model.material import MaterialResolver
from blockregen.values.fields import FieldReader, join_path
from blockregen.values.number import Fixed

__all__ = ["DropLoader"]

_ITEM_MODEL_RE = re.compile(r"^[a-z0-9_.\-]+:[a-z0-9_.\-/]+$")

CONSOLE_COMMAND_KEYS = ("console-commands", "console-command", "commands", "command")
PLAYER_COMMAND_KEYS = ("player-commands", "player-command")


class DropLoader:
    """Builds :class:`PresetRewards` and :class:`DropItem` objects for one preset."""

    def __init__(
        self,
        reader: FieldReader,
        materials: MaterialResolver,
        items: ItemProviderRegistry,
    ) -> None:
        self._reader = reader
        self._materials = materials
        self._items = items

    def load_rewards(
        self, section: ConfigSection | None, drop_naturally: bool, base: str = "rewards"
    ) -> PresetRewards:
        if section is None:
            return PresetRewards()

        rewards = PresetRewards(
            console_commands=section.first_string_list(*CONSOLE_COMMAND_KEYS),
            player_commands=section.first_string_list(*PLAYER_COMMAND_KEYS),
            money=self._reader.number(section, "money", Fixed(0), base),
        )

        drop_section = section.get_section("drop-item")
        if drop_section is None:
            if section.is_set("drop-item"):
                self._reader.warning("'drop-item' must be a section", join_path(base, "drop-item"))
            return rewards

        drops_base = join_path(base, "drop-item")
        if drop_section.contains("material") or drop_section.contains("item"):
            self._try_add(rewards, drop_section, drop_naturally, drops_base)
        else:
            for name, child in drop_section.children():
                path = join_path(drops_base, name)
                if child is None:
                    self._reader.warning(f"Drop '{name}' is not a section, skipped", path)
                    continue
                self._try_add(rewards, child, drop_naturally, path)
        return rewards

    def _try_add(
        self, rewards: PresetRewards, section: ConfigSection, drop_naturally: bool, path: str
    ) -> None:
        try:
            drop = self.load_drop(section, drop_naturally, path)
        except ParseError as exc:
            self._reader.warning(f"Failed to load drop item: {exc}", path)
            return
        if drop is not None:
            rewards.drops.append(drop)

    def load_drop(
        self, section: ConfigSection | None, drop_naturally: bool, base: str = ""
    ) -> DropItem | None:
        """Build one descriptor; raises :class:`ParseError` when it cannot exist."""
        if section is None:
            return None

        if section.contains("item"):
            return self._load_external(section, drop_naturally, base)
        return self._load_material(section, drop_naturally, base)

    def _common(self, section: ConfigSection, drop_naturally: bool, base: str) -> dict:
        return {
            "chance": self._reader.number(section, "chance", Fixed(100), base),
            "amount": self._reader.number(section, "amount", Fixed(1), base),
            "drop_naturally": section.get_bool("drop-naturally", drop_naturally),
        }

    def _load_external(
        self, section: ConfigSection, drop_naturally: bool, base: str
    ) -> ExternalDropItem | None:
        reference = section.get_string("item")
        if reference is None:
            return None

        prefix, sep, item_id = reference.partition(":")
        if not sep or not prefix or not item_id:
            raise ParseError(f"Invalid item reference '{reference}', expected 'prefix:id'")

        provider = self._items.get_provider(prefix)
        if provider is None:
            raise ParseError(f"Invalid prefix '{prefix}'")

        if not provider.exists(item_id):
            raise ParseError(f"External item '{item_id}' doesn't exist with the providing plugin.")

        return ExternalDropItem(
            provider=provider,
            item_id=item_id,
            prefix=prefix.lower(),
            **self._common(section, drop_naturally, base),
        )

    def _load_material(
        self, section: ConfigSection, drop_naturally: bool, base: str
    ) -> MaterialDropItem:
        raw = section.get_string("material")
        if raw is None:
            raise ParseError("Material is missing.")
        try:
            material = self._materials.normalize(raw)
        except ValueError as exc:
            raise ParseError(f"Material is invalid: {exc}") from exc

        drop = MaterialDropItem(
            material=material,
            display_name=section.get_string("name"),
            lore=section.first_string_list("lores", "lore"),
            **self._common(section, drop_naturally, base),
        )

        for raw_enchant in section.get_string_list("enchants"):
            try:
                drop.enchants.append(Enchant.parse(raw_enchant))
            except ValueError as exc:
                self._reader.warning(str(exc), join_path(base, "enchants"))

        for raw_flag in section.get_string_list("flags"):
            try:
                drop.item_flags.add(ItemFlag(raw_flag.strip().upper()))
            except ValueError:
                self._reader.warning(
                    f"Could not parse item flag from '{raw_flag}'", join_path(base, "flags")
                )

        exp_section = section.get_section("exp")
        if exp_section is not None:
            exp_base = join_path(base, "exp")
            drop.experience = ExperienceDrop(
                amount=self._reader.number(exp_section, "amount", Fixed(0), exp_base),
                drop_naturally=exp_section.get_bool("drop-naturally", drop.drop_naturally),
            )

        model_data = section.get_string("custom-model-data")
        if model_data is not None:
            try:
                drop.custom_model_data = int(model_data)
            except ValueError:
                self._reader.warning(
                    f"Invalid custom model data '{model_data}'", join_path(base, "custom-model-data")
                )

        item_model = section.get_string("item-model")
        if item_model is not None:
            key = item_model.strip().lower()
            if ":" not in key:
                key = f"minecraft:{key}"
            if _ITEM_MODEL_RE.match(key):
                drop.item_model = key
            else:
                self._reader.warning(
                    f"Invalid item model key '{item_model}'", join_path(base, "item-model")
                )
        return drop
