"""Application cache – TaggedCache.

Wraps a primary :class:`KeyValueStore` and a :class:`TagIndex` and keeps the
two consistent on a best-effort basis:

* ``set`` and ``delete`` on the same key are serialised through a
  :class:`KeyedMutex`; reads and tag sweeps are not.
* A failed tag update inside ``set`` removes the payload and any partial
  index entries before the error is raised.
* Bulk operations attempt every item and report failures together.
* Keys whose payload has gone (expired, evicted, deleted behind the
  cache's back) are filtered out of tag queries and trigger compaction of
  that tag.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, overload

from tagged_cache.application.cache.errors import (
    BulkOperationError,
    GlobalCompactionNotImplementedError,
    StoreOperationError,
    TagIndexError,
)
from tagged_cache.application.cache.index import StoreTagIndex, TagIndex
from tagged_cache.application.cache.locks import KeyedMutex
from tagged_cache.application.cache.options import SetOptions, TagPageRequest, resolve_set_arguments
from tagged_cache.application.cache.store import InMemoryKeyValueStore, KeyValueStore
from tagged_cache.config.settings import TaggedCacheSettings
from tagged_cache.kernel.errors import ValidationError, describe
from tagged_cache.observability.logging import get_logger

__all__ = ["TaggedCache"]

logger = get_logger(__name__)


class TaggedCache:
    """Key-value cache with tag-based bulk invalidation and lookup."""

    def __init__(
        self,
        store: KeyValueStore | None = None,
        index: TagIndex | None = None,
        *,
        settings: TaggedCacheSettings | None = None,
    ) -> None:
        self._settings = settings or TaggedCacheSettings()
        self._store: KeyValueStore = store if store is not None else InMemoryKeyValueStore()
        self._index: TagIndex = index if index is not None else StoreTagIndex(self._store, settings=self._settings)
        self._locks = KeyedMutex()

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def index(self) -> TagIndex:
        return self._index

    @property
    def locks(self) -> KeyedMutex:
        return self._locks

    # ------------------------------------------------------------------
    # Single-key operations
    # ------------------------------------------------------------------

    @overload
    async def set(self, key: str, value: Any, ttl: float | None = None, tags: Sequence[str] | None = None) -> None: ...

    @overload
    async def set(self, key: str, value: Any, ttl: SetOptions | Mapping[str, Any]) -> None: ...

    async def set(
        self,
        key: str,
        value: Any,
        ttl: float | SetOptions | Mapping[str, Any] | None = None,
        tags: Sequence[str] | None = None,
    ) -> None:
        """Store *value* under *key* and tag it with *tags*.

        Tags are only replaced when a non-empty list is given; without tags
        the key keeps whatever tags it already had.

        The third argument is either a TTL in seconds (with *tags* as the
        fourth) or a :class:`SetOptions` / ``{"ttl": ..., "tags": ...}``
        mapping. On failure the key is left absent and untagged.
        """
        ttl_seconds, tag_list = resolve_set_arguments(ttl, tags)
        async with self._locks.hold(key):
            try:
                await self._store.set(key, value, ttl_seconds)
            except Exception as exc:
                raise StoreOperationError("set", key, exc) from exc

            if not tag_list:
                return
            try:
                await self._index.set_tags_for_key(key, tag_list)
            except Exception as exc:
                await self._cleanup_failed_set(key)
                raise TagIndexError(key, exc) from exc

    async def _cleanup_failed_set(self, key: str) -> None:
        try:
            await self._store.delete(key)
            await self._index.delete_key_from_all_tags(key)
        except Exception as exc:  # noqa: BLE001 - must not mask the tag failure
            logger.error("tagged_cache.cleanup_failed", key=key, error=describe(exc))

    async def get(self, key: str) -> Any:
        try:
            return await self._store.get(key)
        except Exception as exc:
            raise StoreOperationError("get", key, exc) from exc

    async def has(self, key: str) -> bool:
        try:
            return await self._store.get(key) is not None
        except Exception as exc:
            raise StoreOperationError("check if exists", key, exc) from exc

    async def delete(self, key: str) -> bool:
        """Detach *key* from its tags, then delete its payload.

        Returns whether a payload existed. A failing tag cleanup is logged and
        does not stop the payload deletion.
        """
        async with self._locks.hold(key):
            try:
                await self._index.delete_key_from_all_tags(key)
            except Exception as exc:  # noqa: BLE001
                logger.error("tagged_cache.tag_cleanup_failed", key=key, error=describe(exc))
            try:
                return bool(await self._store.delete(key))
            except Exception as exc:
                raise StoreOperationError("delete", key, exc) from exc

    async def clear(self) -> None:
        try:
            await self._store.clear()
            await self._index.clear()
        except Exception as exc:
            raise StoreOperationError("clear", None, exc, subject="cache") from exc

    # ------------------------------------------------------------------
    # Tag operations
    # ------------------------------------------------------------------

    async def invalidate_tag(self, tag: str) -> None:
        """Delete every entry tagged *tag*, then the tag itself.

        Only the initial key lookup can make this fail; individual delete
        failures are logged.
        """
        try:
            keys = await self._index.get_keys_for_tag(tag)
        except Exception as exc:
            raise StoreOperationError("invalidate", tag, exc, subject="tag") from exc
        if not keys:
            return

        errors: list[str] = []
        for key in keys:
            try:
                await self._store.delete(key)
            except Exception as exc:  # noqa: BLE001
                errors.append(f"Failed to delete key '{key}' for tag '{tag}': {describe(exc)}")
        try:
            await self._index.delete_tag(tag)
        except Exception as exc:  # noqa: BLE001
            errors.append(f"Failed to delete tag metadata for '{tag}': {describe(exc)}")

        if errors:
            logger.error("tagged_cache.invalidate_partial_failure", tag=tag, errors=errors)
        else:
            logger.debug("tagged_cache.tag_invalidated", tag=tag, keys=len(keys))

    async def invalidate_tags(self, tags: Iterable[str]) -> None:
        errors: list[BaseException] = []
        for tag in tags:
            try:
                await self.invalidate_tag(tag)
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)
        if errors:
            raise BulkOperationError("Failed to invalidate some tags", errors)

    async def get_by_tag(
        self,
        tag: str,
        *,
        page: int = 1,
        limit: int | None = None,
    ) -> list[tuple[str, Any]]:
        """Return ``(key, value)`` pairs for one page of *tag*'s keys.

        Pages are 1-based, in tag insertion order; ``page`` below 1 reads the
        first page and a page past the end is empty. Keys whose payload is
        gone are skipped and cause the tag to be compacted.
        """
        try:
            all_keys = await self._index.get_keys_for_tag(tag)
        except Exception as exc:
            raise StoreOperationError("get entries for", tag, exc, subject="tag") from exc
        request = TagPageRequest(page=page, limit=limit if limit is not None else self._settings.default_page_limit)
        keys = request.slice(all_keys)
        if not keys:
            return []

        results: list[tuple[str, Any]] = []
        dead_keys = 0
        for key in keys:
            try:
                value = await self._store.get(key)
            except Exception as exc:  # noqa: BLE001
                logger.warning("tagged_cache.get_by_tag_read_failed", tag=tag, key=key, error=describe(exc))
                continue
            if value is None:
                dead_keys += 1
            else:
                results.append((key, value))

        if dead_keys:
            try:
                await self._index.compact([tag])
            except Exception as exc:  # noqa: BLE001
                logger.error("tagged_cache.compaction_failed", tag=tag, error=describe(exc))
        return results

    async def compact_tags(self, tags: Sequence[str] | None = None) -> None:
        try:
            await self._index.compact(tags)
        except GlobalCompactionNotImplementedError:
            raise
        except Exception as exc:
            raise StoreOperationError("compact", None, exc, subject="tags") from exc

    async def get_all_tags(self) -> list[str]:
        try:
            return await self._index.get_all_tags()
        except Exception as exc:
            raise StoreOperationError("list", None, exc, subject="tags") from exc

    async def get_tags_for_key(self, key: str) -> list[str]:
        try:
            return await self._index.get_tags_for_key(key)
        except Exception as exc:
            raise StoreOperationError("get tags for", key, exc) from exc

    # ------------------------------------------------------------------
    # Bulk writes
    # ------------------------------------------------------------------

    async def set_many(self, entries: Iterable[Sequence[Any]]) -> None:
        """Apply :meth:`set` to each ``(key, value)`` or ``(key, value, tags)``."""
        errors: list[BaseException] = []
        for entry in entries:
            try:
                if len(entry) not in (2, 3):
                    raise ValidationError(f"set_many entries must be (key, value[, tags]), got {len(entry)} items")
                key, value, *rest = entry
                await self.set(key, value, None, rest[0] if rest else None)
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)
        if errors:
            raise BulkOperationError("Failed to set some entries", errors)
