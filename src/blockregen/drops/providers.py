"""External item providers, looked up by the prefix of ``prefix:id`` references."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol


class ItemProvider(Protocol):
    """An external item source (another plugin's item registry)."""

    def exists(self, item_id: str) -> bool: ...


class StaticItemProvider:
    """Provider backed by a fixed set of item ids."""

    def __init__(self, item_ids: Iterable[str]) -> None:
        self._ids = frozenset(item_ids)

    def exists(self, item_id: str) -> bool:
        return item_id in self._ids

    def __repr__(self) -> str:
        return f"StaticItemProvider(items={len(self._ids)})"


class ItemProviderRegistry:
    """Maps lower-case prefixes to item providers. Latest-wins on collision."""

    def __init__(self) -> None:
        self._providers: dict[str, ItemProvider] = {}

    def register(self, prefix: str, provider: ItemProvider) -> None:
        self._providers[prefix.lower()] = provider

    def unregister(self, prefix: str) -> None:
        """Remove a provider by prefix. No-op if not found."""
        self._providers.pop(prefix.lower(), None)

    def get_provider(self, prefix: str) -> ItemProvider | None:
        return self._providers.get(prefix.lower())

    def prefixes(self) -> list[str]:
        return list(self._providers.keys())
