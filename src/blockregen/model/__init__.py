"""Blockregen model layer -- leaf types shared by every other package."""

from blockregen.model.context import Context
from blockregen.model.diagnostic import DiagnosticLog, LoadDiagnostic, Severity
from blockregen.model.material import (
    MaterialResolver,
    PlacementMaterial,
    TargetMaterial,
    parse_sound,
)

__all__ = [
    # context
    "Context",
    # diagnostic
    "Severity",
    "LoadDiagnostic",
    "DiagnosticLog",
    # material
    "MaterialResolver",
    "PlacementMaterial",
    "TargetMaterial",
    "parse_sound",
]
