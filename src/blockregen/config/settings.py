from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LoaderSettings:
    root_key: str = "Blocks"
    strict: bool = False  # malformed numbers abort the preset instead of defaulting
    jobs_enabled: bool = False
    boss_bars: bool = True
