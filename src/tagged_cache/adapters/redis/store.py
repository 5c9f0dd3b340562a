"""Redis adapter – RedisKeyValueStore."""
from __future__ import annotations

import json
import re
from typing import Any, AsyncIterator

from tagged_cache.kernel.errors import SerializationError

_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("Install 'tagged-cache[redis]' to use the Redis adapter") from exc


class RedisKeyValueStore:
    """Async Redis-backed :class:`ScanningKeyValueStore`.

    Values are JSON-encoded, so index records and payloads round-trip as
    plain lists, dicts, strings and numbers. TTLs are sent as ``PX``
    milliseconds.
    """

    def __init__(self, url: str, *, scan_count: int = 500, **kwargs: Any) -> None:
        aioredis = _require_redis()
        self._client = aioredis.from_url(url, **kwargs)
        self._scan_count = scan_count

    @staticmethod
    def _encode(key: str, value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Value for key '{key}' is not JSON-serialisable",
                payload_type=type(value).__name__,
                cause=exc,
            ) from exc

    @staticmethod
    def _decode(key: str, raw: bytes | str) -> Any:
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise SerializationError(f"Stored value for key '{key}' is not valid JSON", cause=exc) from exc

    async def get(self, key: str) -> Any:
        raw = await self._client.get(key)
        if raw is None:
            return None
        return self._decode(key, raw)

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        px = max(1, int(ttl * 1000)) if ttl is not None else None
        await self._client.set(key, self._encode(key, value), px=px)

    async def delete(self, key: str) -> bool:
        return bool(await self._client.delete(key))

    async def clear(self) -> None:
        await self._client.flushdb()

    async def scan(self, prefix: str = "") -> AsyncIterator[str]:
        pattern = _GLOB_SPECIALS.sub(r"\\\1", prefix) + "*"
        async for raw in self._client.scan_iter(match=pattern, count=self._scan_count):
            yield raw.decode() if isinstance(raw, bytes) else raw

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisKeyValueStore"]
