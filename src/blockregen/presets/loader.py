"""Assemble a BlockPreset (and its optional event) from one config subsection.

Failure policy:

* target material invalid, conditions unparsable -> the preset is dropped
  (``ParseError`` propagates to the caller);
* event without ``event-name`` -> only the event is dropped;
* a bad drop descriptor -> only that drop is dropped;
* any other malformed optional field -> warning, default used.
"""

from __future__ import annotations

import logging

from blockregen.conditions.builder import from_node_multiple
from blockregen.conditions.builtin import create_default_registry
from blockregen.conditions.registry import ConditionProviderRegistry
from blockregen.conditions.tree import Condition, Relation
from blockregen.config.section import ConfigSection
from blockregen.config.settings import LoaderSettings
from blockregen.drops.loader import DropLoader
from blockregen.drops.providers import ItemProviderRegistry
from blockregen.errors import ParseError
from blockregen.model.diagnostic import DiagnosticLog
from blockregen.model.material import MaterialResolver, parse_sound
from blockregen.presets.event import BOSS_BAR_COLORS, BOSS_BAR_STYLES, EventBossBar, PresetEvent
from blockregen.presets.preset import BlockPreset, PresetConditions
from blockregen.values.fields import FieldReader
from blockregen.values.number import Fixed

__all__ = ["PresetLoader"]

logger = logging.getLogger(__name__)

# config key -> (BlockPreset attribute, default)
_FLAGS: dict[str, tuple[str, bool]] = {
    "natural-break": ("natural_break", True),
    "disable-physics": ("disable_physics", False),
    "apply-fortune": ("apply_fortune", True),
    "drop-naturally": ("drop_naturally", True),
    "handle-crops": ("handle_crops", True),
    "check-solid-ground": ("check_solid_ground", True),
    "regenerate-whole": ("regenerate_whole", False),
}


class PresetLoader:
    """Builds presets using a shared condition registry and item providers."""

    def __init__(
        self,
        conditions: ConditionProviderRegistry | None = None,
        *,
        materials: MaterialResolver | None = None,
        items: ItemProviderRegistry | None = None,
        settings: LoaderSettings | None = None,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        self.conditions = conditions if conditions is not None else create_default_registry()
        self.materials = materials or MaterialResolver()
        self.items = items or ItemProviderRegistry()
        self.settings = settings or LoaderSettings()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog(logger)

    def load(self, name: str, section: ConfigSection) -> tuple[BlockPreset, PresetEvent | None]:
        """Build the preset called *name*.

        Raises :class:`ParseError` when a mandatory part is invalid.
        """
        reader = FieldReader(name, self.diagnostics, strict=self.settings.strict)
        preset = BlockPreset(name)

        target = section.get_string("target-material", name) or name
        try:
            preset.target_material = self.materials.parse_target_material(target)
        except ValueError as exc:
            raise ParseError(f"Invalid target material '{target}': {exc}", path="target-material") from exc
        logger.debug("%s target-material: %s", name, preset.target_material)

        for key, attr in (("replace-block", "replace_material"), ("regenerate-into", "regen_material")):
            raw = section.get_string(key)
            if not raw:
                continue
            try:
                setattr(preset, attr, self.materials.parse_placement_material(raw))
            except ValueError as exc:
                reader.warning(f"Dynamic material ( {raw} ) in '{key}' is invalid: {exc}", key)

        preset.delay = reader.number(section, "regen-delay", Fixed(3))

        for key, (attr, default) in _FLAGS.items():
            setattr(preset, attr, section.get_bool(key, default))

        sound = section.get_string("sound")
        if sound:
            try:
                preset.sound = parse_sound(sound)
            except ValueError:
                reader.warning(f"Sound '{sound}' is invalid.", "sound")

        preset.particle = section.get_string("particles") or None
        preset.regeneration_particle = section.get_string("regeneration-particles") or None

        preset.conditions = self._load_preset_conditions(section, reader)
        preset.condition = self._load_conditions(section)

        drops = DropLoader(reader, self.materials, self.items)
        preset.rewards = drops.load_rewards(
            section.get_section("rewards"), preset.drop_naturally, "rewards"
        )

        event: PresetEvent | None = None
        try:
            event = self._load_event(section.get_section("event"), preset, reader, drops)
        except ParseError as exc:
            self.diagnostics.error(name, f"Failed to load event: {exc}", path="event")

        logger.debug("Loaded preset %s", preset)
        return preset, event

    def _load_preset_conditions(self, section: ConfigSection, reader: FieldReader) -> PresetConditions:
        conditions = PresetConditions()
        setters = [
            ("tool-required", conditions.set_tools_required),
            ("enchant-required", conditions.set_enchants_required),
        ]
        if self.settings.jobs_enabled:
            setters.append(("jobs-check", conditions.set_jobs_required))

        for key, setter in setters:
            raw = section.get_string(key)
            if not raw:
                continue
            try:
                setter(raw)
            except ValueError as exc:
                reader.warning(f"Invalid '{key}' value '{raw}': {exc}", key)
        return conditions

    def _load_conditions(self, section: ConfigSection) -> Condition:
        node = section.get("conditions")
        try:
            return from_node_multiple(node, Relation.AND, self.conditions)
        except ParseError as exc:
            raise ParseError(f"Failed to parse 'conditions': {exc}", path="conditions") from exc

    def _load_event(
        self,
        section: ConfigSection | None,
        preset: BlockPreset,
        reader: FieldReader,
        drops: DropLoader,
    ) -> PresetEvent | None:
        if section is None:
            return None

        display_name = section.get_string("event-name")
        if display_name is None:
            raise ParseError("Event name is missing.", path="event.event-name")

        event = PresetEvent(
            preset_name=preset.name,
            display_name=display_name,
            double_drops=section.get_bool("double-drops", False),
            double_experience=section.get_bool("double-exp", False),
        )

        if self.settings.boss_bars:
            event.boss_bar = self._load_boss_bar(section.get_section("bossbar"), display_name, reader)

        try:
            event.item = drops.load_drop(
                section.get_section("custom-item"), preset.drop_naturally, "event.custom-item"
            )
        except ParseError as exc:
            reader.warning(f"Failed to load event item: {exc}", "event.custom-item")

        event.item_rarity = reader.number(section, "custom-item.rarity", Fixed(1), "event")
        event.rewards = drops.load_rewards(section, preset.drop_naturally, "event")
        return event

    def _load_boss_bar(
        self, section: ConfigSection | None, display_name: str, reader: FieldReader
    ) -> EventBossBar:
        default_text = f"&eEvent &6{display_name} &eis active!"
        if section is None:
            return EventBossBar(default_text)

        color = (section.get_string("color") or "YELLOW").upper()
        if color not in BOSS_BAR_COLORS:
            reader.warning(f"Invalid boss bar color '{color}'", "event.bossbar.color")
            color = "YELLOW"

        style = (section.get_string("style") or "SOLID").upper()
        if style not in BOSS_BAR_STYLES:
            reader.warning(f"Invalid boss bar style '{style}'", "event.bossbar.style")
            style = "SOLID"

        return EventBossBar(section.get_string("name") or default_text, color, style)
