"""Application cache – build a TaggedCache from settings."""
from __future__ import annotations

from typing import Any

from tagged_cache.application.cache.index import StoreTagIndex
from tagged_cache.application.cache.store import InMemoryKeyValueStore, KeyValueStore
from tagged_cache.application.cache.tagged import TaggedCache
from tagged_cache.config.settings import EnvSettingsLoader, TaggedCacheSettings
from tagged_cache.kernel.time import Clock

__all__ = ["build_tagged_cache"]


def build_tagged_cache(
    settings: TaggedCacheSettings | None = None,
    *,
    clock: Clock | None = None,
    **redis_kwargs: Any,
) -> TaggedCache:
    """Wire a store, a :class:`StoreTagIndex` and a :class:`TaggedCache`.

    Settings are read from the environment when not given. A non-empty
    ``redis_url`` selects :class:`RedisKeyValueStore`; otherwise entries live
    in process memory.
    """
    settings = settings or EnvSettingsLoader().load(TaggedCacheSettings)
    store: KeyValueStore
    if settings.redis_url:
        from tagged_cache.adapters.redis import RedisKeyValueStore

        store = RedisKeyValueStore(settings.redis_url, **redis_kwargs)
    else:
        store = InMemoryKeyValueStore(clock=clock)
    return TaggedCache(store, StoreTagIndex(store, settings=settings), settings=settings)
