"""Evaluation context passed to conditions, formulas and reward rolls."""

from __future__ import annotations

import threading
from collections.abc import Collection, Mapping
from typing import Any


class Context:
    """Thread-safe key-value store describing one block break.

    Typical keys are ``player``, ``tool``, ``world``, ``permissions`` and
    placeholder names used by formulas (``player_level``). Context
    extenders never mutate the context they receive; they call
    :meth:`derive` to build an augmented copy.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, Any] = dict(initial) if initial else {}

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a value by key, returning *default* if absent."""
        with self._lock:
            return self._data.get(key, default)

    def get_string(self, key: str, default: str = "") -> str:
        value = self.get(key)
        return default if value is None else str(value)

    def has_member(self, key: str, member: str) -> bool:
        """True if the value at *key* is *member* or a collection holding it."""
        value = self.get(key)
        if isinstance(value, str):
            return value == member
        return isinstance(value, Collection) and member in value

    def get_levels(self, key: str) -> dict[str, int]:
        """Read a ``name -> level`` mapping (enchants, jobs) with upper-cased names."""
        value = self.get(key)
        if not isinstance(value, Mapping):
            return {}
        return {str(name).upper(): int(level) for name, level in value.items()}

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    # --- derived contexts -----------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._data)

    def derive(self, updates: Mapping[str, Any] | None = None) -> Context:
        """Return a new context holding this one's data merged with *updates*."""
        data = self.snapshot()
        if updates:
            data.update(updates)
        return Context(data)

    def __repr__(self) -> str:
        return f"Context(keys={list(self.snapshot())})"
