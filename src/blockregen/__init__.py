"""Blockregen - config-driven block presets with condition trees and weighted rewards."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from blockregen.conditions import (  # noqa: E402
    Condition,
    ConditionProviderRegistry,
    NodeKind,
    ProviderEntry,
    Relation,
    create_default_registry,
)
from blockregen.config import ConfigSection, LoaderSettings, load_yaml_file  # noqa: E402
from blockregen.errors import FormulaError, ParseError  # noqa: E402
from blockregen.model import Context  # noqa: E402
from blockregen.presets import BlockPreset, PresetLoader, PresetManager  # noqa: E402
from blockregen.values import Fixed, Formula, LoadResult, NumberValue, Range  # noqa: E402

__all__ = [
    "__version__",
    "BlockPreset",
    "Condition",
    "ConditionProviderRegistry",
    "ConfigSection",
    "Context",
    "Fixed",
    "Formula",
    "FormulaError",
    "LoadResult",
    "LoaderSettings",
    "NodeKind",
    "NumberValue",
    "ParseError",
    "PresetLoader",
    "PresetManager",
    "ProviderEntry",
    "Range",
    "Relation",
    "create_default_registry",
    "load_yaml_file",
]
