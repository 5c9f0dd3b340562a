"""Application cache – tag index, per-key locking and the TaggedCache facade."""
from tagged_cache.application.cache.errors import (
    BulkOperationError,
    GlobalCompactionNotImplementedError,
    StoreOperationError,
    TagIndexError,
)
from tagged_cache.application.cache.factory import build_tagged_cache
from tagged_cache.application.cache.index import StoreTagIndex, TagIndex, is_string_list
from tagged_cache.application.cache.locks import KeyedMutex
from tagged_cache.application.cache.options import SetOptions, TagPageRequest
from tagged_cache.application.cache.store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    ScanningKeyValueStore,
)
from tagged_cache.application.cache.tagged import TaggedCache

__all__ = [
    "BulkOperationError",
    "GlobalCompactionNotImplementedError",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "KeyedMutex",
    "ScanningKeyValueStore",
    "SetOptions",
    "StoreOperationError",
    "StoreTagIndex",
    "TagIndex",
    "TagIndexError",
    "TagPageRequest",
    "TaggedCache",
    "build_tagged_cache",
    "is_string_list",
]
