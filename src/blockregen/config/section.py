"""Read-only view over a parsed configuration tree.

Nodes are plain Python data as produced by ``yaml.safe_load``: mappings,
lists and scalars. Paths use ``.`` as the separator (``custom-item.rarity``).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml

from blockregen.errors import ParseError

__all__ = ["ConfigSection", "load_yaml_file"]

_MISSING = object()

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})


class ConfigSection:
    """A named mapping node with path-based accessors."""

    def __init__(self, data: Mapping[str, Any] | None = None, name: str = "") -> None:
        self._data: Mapping[str, Any] = data if data is not None else {}
        self.name = name

    @classmethod
    def from_yaml(cls, source: str, name: str = "") -> ConfigSection:
        try:
            data = yaml.safe_load(source)
        except yaml.YAMLError as exc:
            raise ParseError(f"Invalid YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ParseError(
                f"Expected a mapping at the document root, got {type(data).__name__}"
            )
        return cls(data, name=name)

    # --- raw access -----------------------------------------------------------

    def _lookup(self, path: str) -> Any:
        node: Any = self._data
        for part in path.split("."):
            node = _child(node, part)
            if node is _MISSING:
                return _MISSING
        return node

    def contains(self, path: str) -> bool:
        """True if *path* exists, even when its value is null."""
        return self._lookup(path) is not _MISSING

    def is_set(self, path: str) -> bool:
        """True if *path* exists and holds a non-null value."""
        return self.get(path) is not None

    def __contains__(self, path: str) -> bool:
        return self.contains(path)

    def get(self, path: str, default: Any = None) -> Any:
        value = self._lookup(path)
        if value is _MISSING or value is None:
            return default
        return value

    def keys(self) -> list[str]:
        return [str(k) for k in self._data.keys()]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._data)

    def children(self) -> Iterator[tuple[str, ConfigSection | None]]:
        """Yield each direct child key with its section, or ``None`` for a non-mapping value."""
        for key, value in self._data.items():
            name = str(key)
            yield name, ConfigSection(value, name=name) if isinstance(value, Mapping) else None

    # --- introspection --------------------------------------------------------

    def is_list(self, path: str) -> bool:
        return isinstance(self.get(path), list)

    def is_string(self, path: str) -> bool:
        return isinstance(self.get(path), str)

    def is_section(self, path: str) -> bool:
        return isinstance(self.get(path), Mapping)

    # --- typed getters --------------------------------------------------------

    def get_string(self, path: str, default: str | None = None) -> str | None:
        """Return the value as a string; lists and mappings are not strings."""
        value = self.get(path)
        if value is None or isinstance(value, (list, Mapping)):
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_bool(self, path: str, default: bool = False) -> bool:
        value = self.get(path)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        return default

    def get_string_list(self, path: str) -> list[str]:
        """Return a list of strings, accepting a single scalar as a one-item list."""
        value = self.get(path)
        if value is None or isinstance(value, Mapping):
            return []
        if isinstance(value, list):
            return [
                str(item) for item in value
                if item is not None and not isinstance(item, (list, Mapping))
            ]
        return [str(value)]

    def get_section(self, path: str) -> ConfigSection | None:
        value = self.get(path)
        if not isinstance(value, Mapping):
            return None
        return ConfigSection(value, name=path.rsplit(".", 1)[-1])

    def first_string_list(self, *paths: str) -> list[str]:
        """Return the string list of the first of *paths* that holds a string or list."""
        for path in paths:
            value = self.get(path)
            if isinstance(value, list):
                return self.get_string_list(path)
            if isinstance(value, str):
                return [value]
        return []

    def __repr__(self) -> str:
        return f"ConfigSection(name={self.name!r}, keys={self.keys()})"


def load_yaml_file(path: str | Path) -> ConfigSection:
    """Read a YAML file into a root :class:`ConfigSection`."""
    file_path = Path(path)
    return ConfigSection.from_yaml(file_path.read_text(encoding="utf-8"), name=file_path.stem)


def _child(node: Any, part: str) -> Any:
    # YAML keys such as ``100:`` load as ints; paths address them as strings.
    if not isinstance(node, Mapping):
        return _MISSING
    if part in node:
        return node[part]
    for key, value in node.items():
        if str(key) == part:
            return value
    return _MISSING
