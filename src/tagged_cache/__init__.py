"""
tagged_cache – tag-indexing overlay for async key-value caches.

Import path convention::

    from tagged_cache.application.cache import TaggedCache, StoreTagIndex
    from tagged_cache.kernel.errors import InfrastructureError
    from tagged_cache.adapters.redis import RedisKeyValueStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
