"""Redis adapter – primary store backed by Redis."""
from tagged_cache.adapters.redis.store import RedisKeyValueStore

__all__ = ["RedisKeyValueStore"]
