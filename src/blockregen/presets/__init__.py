"""Presets: the model, the per-section loader and the reloadable collection."""

from blockregen.presets.event import EventBossBar, PresetEvent
from blockregen.presets.preset import BlockPreset, PresetConditions
from blockregen.presets.loader import PresetLoader
from blockregen.presets.manager import PresetManager, RegenerationArea

__all__ = [
    "BlockPreset",
    "EventBossBar",
    "PresetConditions",
    "PresetEvent",
    "PresetLoader",
    "PresetManager",
    "RegenerationArea",
]
