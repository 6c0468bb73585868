"""PresetManager: holds the loaded preset collection and rebuilds it on reload."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Protocol

from blockregen.config.section import ConfigSection
from blockregen.errors import ParseError
from blockregen.presets.event import PresetEvent
from blockregen.presets.loader import PresetLoader
from blockregen.presets.preset import BlockPreset

__all__ = ["PresetManager", "RegenerationArea"]

logger = logging.getLogger(__name__)


class RegenerationArea(Protocol):
    """A region that restricts which presets apply inside it."""

    def has_preset(self, name: str) -> bool: ...


class PresetManager:
    """Owns the preset snapshot.

    :meth:`load` builds a complete new collection and swaps it in at the
    end; readers holding the previous :attr:`presets` mapping keep a
    consistent view. Reloads must not run concurrently with each other.
    """

    def __init__(self, loader: PresetLoader | None = None) -> None:
        self.loader = loader or PresetLoader()
        self._presets: dict[str, BlockPreset] = {}
        self._events: dict[str, PresetEvent] = {}

    # --- lookup ---------------------------------------------------------------

    @property
    def presets(self) -> Mapping[str, BlockPreset]:
        return MappingProxyType(self._presets)

    @property
    def events(self) -> Mapping[str, PresetEvent]:
        return MappingProxyType(self._events)

    def get_preset(self, name: str | None) -> BlockPreset | None:
        if name is None:
            return None
        return self._presets.get(name)

    def get_event(self, preset_name: str) -> PresetEvent | None:
        return self._events.get(preset_name)

    def find_preset(self, material: str, area: RegenerationArea | None = None) -> BlockPreset | None:
        """Return the first preset targeting *material* (and allowed in *area*)."""
        for preset in self._presets.values():
            if preset.target_material is None or not preset.target_material.matches(material):
                continue
            if area is None or area.has_preset(preset.name):
                return preset
        return None

    # --- loading --------------------------------------------------------------

    def load(self, root: ConfigSection) -> None:
        """Rebuild every preset from the ``Blocks`` section of *root*.

        A preset that fails to load is reported and skipped; the others
        still load.
        """
        self.loader.diagnostics.clear()
        presets: dict[str, BlockPreset] = {}
        events: dict[str, PresetEvent] = {}

        blocks = root.get_section(self.loader.settings.root_key)
        if blocks is None:
            logger.warning("No '%s' section found", self.loader.settings.root_key)
        else:
            for name, section in blocks.children():
                if section is None:
                    self.loader.diagnostics.error(name, "Preset is not a section")
                    continue
                try:
                    preset, event = self.loader.load(name, section)
                except Exception as exc:
                    self.loader.diagnostics.error(
                        name,
                        f"Could not load preset '{name}': {exc}",
                        path=getattr(exc, "path", None),
                        exc=None if isinstance(exc, ParseError) else exc,
                    )
                    continue
                presets[name] = preset
                if event is not None:
                    events[name] = event

        self._presets = presets
        self._events = events
        logger.info("Loaded %d block preset(s)...", len(presets))
        logger.info("Added %d event(s)...", len(events))

    def load_preset(self, name: str, section: ConfigSection) -> BlockPreset:
        """Load (or replace) a single preset. Raises :class:`ParseError` on failure."""
        preset, event = self.loader.load(name, section)
        presets = dict(self._presets)
        presets[name] = preset
        events = dict(self._events)
        events.pop(name, None)
        if event is not None:
            events[name] = event
        self._presets = presets
        self._events = events
        return preset
