"""Flat string key/value substrates for the storage backend."""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Minimal async key/value contract: no enumeration, no transactions."""

    async def connect(self) -> None:
        """Open any underlying connection. No-op by default."""

    async def disconnect(self) -> None:
        """Release any underlying connection. No-op by default."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get the value stored at ``key`` or None."""

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Store ``value`` at ``key``.

        Returns:
            True if the value was written
        """

    @abstractmethod
    async def delete(self, key: str) -> int:
        """Delete ``key``.

        Returns:
            Number of keys deleted
        """


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local dict substrate. Contents are lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    async def delete(self, key: str) -> int:
        return 1 if self._data.pop(key, None) is not None else 0

    def keys(self) -> list[str]:
        """Snapshot of stored keys, for inspection in tests and tooling."""
        return list(self._data)
