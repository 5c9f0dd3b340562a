"""Application cache – KeyedMutex (per-key exclusion slots)."""
from __future__ import annotations

import asyncio
import contextlib
from typing import AsyncIterator

__all__ = ["KeyedMutex"]


class KeyedMutex:
    """Serialises coroutines that touch the same key.

    Each key maps to the completion signal of the last operation queued on
    it. A new holder registers its own signal before waiting on the previous
    one, so holders run strictly in arrival order. The entry is removed once
    the last holder settles; idle keys cost nothing.

    There is no timeout. A holder cancelled while waiting keeps its place in
    the chain until its predecessor finishes.
    """

    def __init__(self) -> None:
        self._tails: dict[str, asyncio.Future[None]] = {}

    def __len__(self) -> int:
        return len(self._tails)

    def is_locked(self, key: str) -> bool:
        return key in self._tails

    @contextlib.asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        previous = self._tails.get(key)
        done: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._tails[key] = done
        try:
            if previous is not None:
                await asyncio.shield(previous)
            yield
        finally:
            if previous is not None and not previous.done():
                previous.add_done_callback(lambda _: self._release(key, done))
            else:
                self._release(key, done)

    def _release(self, key: str, done: asyncio.Future[None]) -> None:
        if not done.done():
            done.set_result(None)
        if self._tails.get(key) is done:
            del self._tails[key]
