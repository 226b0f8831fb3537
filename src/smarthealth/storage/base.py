"""
Abstract key-value store.

A string-to-string persistent store with an async interface, the same
shape as the device store the mobile app persists its session into.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract base class for key-value backends."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """Return the stored string, or None when the key is absent."""

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    async def remove_item(self, key: str) -> bool:
        """Delete a key. Returns True if deleted, False if it didn't exist."""

    async def has_item(self, key: str) -> bool:
        return await self.get_item(key) is not None


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None, **config):
        super().__init__(**config)
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove_item(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)
