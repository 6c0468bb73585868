"""Material names, target selectors and weighted placement materials.

The concrete game material registry is external; :class:`MaterialResolver`
only normalizes names and, when given a known set, checks membership.

Syntax::

    target-material: STONE;COBBLESTONE      # any of
    replace-block: STONE:30;COBBLESTONE:70  # weighted pick
"""

from __future__ import annotations

import random
import re
from collections.abc import Iterable
from dataclasses import dataclass

__all__ = [
    "MaterialResolver",
    "PlacementMaterial",
    "TargetMaterial",
    "parse_sound",
]

_NAME_RE = re.compile(r"^[A-Z0-9_]+$")
_SOUND_RE = re.compile(r"^[A-Z0-9_]+(?:\.[A-Z0-9_]+)*$")


class MaterialResolver:
    """Validates and normalizes material names."""

    def __init__(self, known: Iterable[str] | None = None) -> None:
        self._known = frozenset(n.upper() for n in known) if known is not None else None

    def normalize(self, raw: str) -> str:
        name = raw.strip()
        if ":" in name:
            namespace, _, rest = name.partition(":")
            if namespace.lower() != "minecraft":
                raise ValueError(f"Unsupported material namespace '{namespace}' in '{raw}'")
            name = rest
        name = name.upper().replace(" ", "_").replace("-", "_")
        if not name or not _NAME_RE.match(name):
            raise ValueError(f"Invalid material name '{raw}'")
        if self._known is not None and name not in self._known:
            raise ValueError(f"Unknown material '{raw}'")
        return name

    def parse_target_material(self, raw: str) -> TargetMaterial:
        parts = [p for p in re.split(r"[;,]", raw) if p.strip()]
        if not parts:
            raise ValueError("Target material is empty")
        return TargetMaterial(frozenset(self.normalize(p) for p in parts))

    def parse_placement_material(self, raw: str) -> PlacementMaterial:
        """Parse ``A:30;B`` style input; entries without a weight share the remainder."""
        weighted: list[tuple[str, float | None]] = []
        for part in (p.strip() for p in raw.split(";")):
            if not part:
                continue
            name, sep, weight = part.rpartition(":")
            if sep and _is_number(weight):
                weighted.append((self.normalize(name), float(weight)))
            else:
                weighted.append((self.normalize(part), None))
        if not weighted:
            raise ValueError("Placement material is empty")

        explicit = sum(w for _, w in weighted if w is not None)
        if explicit > 100:
            raise ValueError(f"Weights in '{raw}' add up to more than 100")
        unweighted = [name for name, w in weighted if w is None]
        share = (100 - explicit) / len(unweighted) if unweighted else 0.0

        choices = tuple((name, w if w is not None else share) for name, w in weighted)
        if all(w <= 0 for _, w in choices):
            raise ValueError(f"No positive weights in '{raw}'")
        return PlacementMaterial(choices)


def _is_number(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class TargetMaterial:
    materials: frozenset[str]

    def matches(self, material: str) -> bool:
        return material.upper() in self.materials

    def __str__(self) -> str:
        return ";".join(sorted(self.materials))


@dataclass(frozen=True)
class PlacementMaterial:
    choices: tuple[tuple[str, float], ...]

    def pick(self, rng: random.Random | None = None) -> str:
        rng = rng or random.Random()
        names = [name for name, _ in self.choices]
        weights = [weight for _, weight in self.choices]
        return rng.choices(names, weights=weights, k=1)[0]

    def __str__(self) -> str:
        return ";".join(f"{name}:{weight:g}" for name, weight in self.choices)


def parse_sound(raw: str) -> str:
    """Normalize a sound identifier (``block.stone.break`` or ``BLOCK_STONE_BREAK``)."""
    name = raw.strip().upper()
    if not name or not _SOUND_RE.match(name):
        raise ValueError(f"Invalid sound '{raw}'")
    return name
