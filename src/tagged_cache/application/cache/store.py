"""Application cache – KeyValueStore port and in-memory implementation."""
from __future__ import annotations

import dataclasses
from typing import Any, AsyncIterator, Protocol, runtime_checkable

from tagged_cache.kernel.time import Clock, SystemClock

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "ScanningKeyValueStore",
]


@runtime_checkable
class KeyValueStore(Protocol):
    """Port: the primary store the tag index is layered on.

    ``get`` returns ``None`` for a missing or expired key and raises only on
    genuine I/O failure. ``ttl`` is in seconds; ``None`` means no expiry.
    """

    async def get(self, key: str) -> Any: ...
    async def set(self, key: str, value: Any, ttl: float | None = None) -> None: ...
    async def delete(self, key: str) -> bool: ...
    async def clear(self) -> None: ...


@runtime_checkable
class ScanningKeyValueStore(KeyValueStore, Protocol):
    """A store that can also enumerate its live keys by prefix."""

    def scan(self, prefix: str = "") -> AsyncIterator[str]: ...


@dataclasses.dataclass(slots=True)
class _Entry:
    value: Any
    expires_at: float | None = None


class InMemoryKeyValueStore:
    """Dict-backed :class:`ScanningKeyValueStore` with TTL enforcement.

    Expired entries are treated as absent and dropped lazily the next time
    they are read or scanned. Time comes from *clock* so tests can expire
    entries deterministically.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock or SystemClock()
        self._data: dict[str, _Entry] = {}

    def _live(self, key: str) -> _Entry | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock.timestamp():
            del self._data[key]
            return None
        return entry

    async def get(self, key: str) -> Any:
        entry = self._live(key)
        return entry.value if entry is not None else None

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        expires_at = self._clock.timestamp() + ttl if ttl is not None else None
        self._data[key] = _Entry(value, expires_at)

    async def delete(self, key: str) -> bool:
        entry = self._live(key)
        if entry is None:
            return False
        del self._data[key]
        return True

    async def clear(self) -> None:
        self._data.clear()

    async def scan(self, prefix: str = "") -> AsyncIterator[str]:
        for key in list(self._data):
            if key.startswith(prefix) and self._live(key) is not None:
                yield key

    def __len__(self) -> int:
        return sum(1 for key in list(self._data) if self._live(key) is not None)
