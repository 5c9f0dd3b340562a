"""Testing chaos – LatencyInjector and SlowKeyValueStore."""
from __future__ import annotations

import asyncio
import inspect
import random
from typing import Any, AsyncIterator

from tagged_cache.application.cache.store import KeyValueStore


class LatencyInjector:
    """Inject random artificial latency into async calls."""

    def __init__(self, min_ms: float = 0.0, max_ms: float = 5.0) -> None:
        self._min = min_ms / 1000
        self._max = max_ms / 1000

    async def sleep(self) -> None:
        await asyncio.sleep(random.uniform(self._min, self._max))  # noqa: S311

    async def call(self, coro: object) -> object:
        await self.sleep()
        if inspect.isawaitable(coro):
            return await coro
        return coro


class SlowKeyValueStore:
    """:class:`KeyValueStore` wrapper that yields to the event loop on every call.

    Forces interleaving between concurrent operations that would otherwise
    run to completion without suspending.
    """

    def __init__(self, inner: KeyValueStore, latency: LatencyInjector | None = None) -> None:
        self.inner = inner
        self._latency = latency or LatencyInjector()

    async def get(self, key: str) -> Any:
        return await self._latency.call(self.inner.get(key))

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        await self._latency.call(self.inner.set(key, value, ttl))

    async def delete(self, key: str) -> bool:
        return bool(await self._latency.call(self.inner.delete(key)))

    async def clear(self) -> None:
        await self._latency.call(self.inner.clear())

    async def scan(self, prefix: str = "") -> AsyncIterator[str]:
        await self._latency.sleep()
        async for key in self.inner.scan(prefix):  # type: ignore[attr-defined]
            yield key


__all__ = ["LatencyInjector", "SlowKeyValueStore"]
