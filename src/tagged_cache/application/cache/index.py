"""Application cache – TagIndex port and the store-backed default implementation.

The index is two families of records kept inside a key-value store:

* ``<tag_prefix><tag>``       -> ordered list of keys carrying that tag
* ``<key_tags_prefix><key>``  -> list of distinct tags carried by that key

Neither family is updated atomically with the other. Records read back in an
unexpected shape are treated as absent, so tampering or schema drift degrades
to "untagged" instead of failing.
"""
from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence, runtime_checkable

from tagged_cache.application.cache.errors import GlobalCompactionNotImplementedError
from tagged_cache.application.cache.store import KeyValueStore, ScanningKeyValueStore
from tagged_cache.config.settings import TaggedCacheSettings
from tagged_cache.kernel.errors import SerializationError, UnsupportedOperationError
from tagged_cache.observability.logging import get_logger

__all__ = ["StoreTagIndex", "TagIndex", "is_string_list"]

logger = get_logger(__name__)


def is_string_list(value: Any) -> bool:
    """Return ``True`` when *value* is a list/tuple made only of strings."""
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


@runtime_checkable
class TagIndex(Protocol):
    """Port: bidirectional key <-> tag index.

    Every method is a coroutine that may raise whatever I/O error the
    underlying storage raises.
    """

    async def add_key_to_tag(self, key: str, tag: str) -> None: ...
    async def remove_key_from_tag(self, key: str, tag: str) -> None: ...
    async def get_keys_for_tag(self, tag: str) -> list[str]: ...
    async def get_tags_for_key(self, key: str) -> list[str]: ...
    async def set_tags_for_key(self, key: str, tags: Sequence[str]) -> None: ...
    async def delete_tag(self, tag: str) -> None: ...
    async def delete_key_from_all_tags(self, key: str) -> None: ...
    async def clear(self) -> None: ...
    async def compact(self, tags: Sequence[str] | None = None) -> None: ...
    async def get_all_tags(self) -> list[str]: ...


class StoreTagIndex:
    """:class:`TagIndex` persisted as prefixed records in a key-value store.

    By default the records share *store* with the payloads they index. Pass
    a separate *payload_store* to keep the index elsewhere; compaction then
    probes *payload_store* for liveness and :meth:`clear` only empties the
    index's own store.
    """

    def __init__(
        self,
        store: KeyValueStore,
        payload_store: KeyValueStore | None = None,
        *,
        settings: TaggedCacheSettings | None = None,
    ) -> None:
        settings = settings or TaggedCacheSettings()
        self._store = store
        self._payload_store = payload_store if payload_store is not None else store
        self._tag_prefix = settings.tag_prefix
        self._key_tags_prefix = settings.key_tags_prefix

    # ------------------------------------------------------------------
    # Record helpers
    # ------------------------------------------------------------------

    def tag_record_key(self, tag: str) -> str:
        return f"{self._tag_prefix}{tag}"

    def key_record_key(self, key: str) -> str:
        return f"{self._key_tags_prefix}{key}"

    async def _read(self, record_key: str) -> list[str] | None:
        try:
            raw = await self._store.get(record_key)
        except SerializationError as exc:
            logger.warning("tag_index.malformed_record", record=record_key, error=exc.message)
            return None
        if not is_string_list(raw):
            if raw is not None:
                logger.warning("tag_index.malformed_record", record=record_key, type=type(raw).__name__)
            return None
        return list(raw)

    async def _write_or_delete(self, record_key: str, items: list[str]) -> None:
        if items:
            await self._store.set(record_key, items)
        else:
            await self._store.delete(record_key)

    # ------------------------------------------------------------------
    # TagIndex
    # ------------------------------------------------------------------

    async def add_key_to_tag(self, key: str, tag: str) -> None:
        record_key = self.tag_record_key(tag)
        keys = await self._read(record_key) or []
        if key not in keys:
            keys.append(key)
            await self._store.set(record_key, keys)

    async def remove_key_from_tag(self, key: str, tag: str) -> None:
        record_key = self.tag_record_key(tag)
        keys = await self._read(record_key)
        if keys is None:
            return
        await self._write_or_delete(record_key, [k for k in keys if k != key])

    async def get_keys_for_tag(self, tag: str) -> list[str]:
        return await self._read(self.tag_record_key(tag)) or []

    async def get_tags_for_key(self, key: str) -> list[str]:
        return await self._read(self.key_record_key(key)) or []

    async def set_tags_for_key(self, key: str, tags: Sequence[str]) -> None:
        """Replace the tag set of *key*.

        Not atomic: the key is first detached from every tag it had, then
        attached to each new tag in turn. A failure part way leaves a subset
        of old or new associations behind.
        """
        new_tags = _unique(tags)
        await self.delete_key_from_all_tags(key)
        if not new_tags:
            await self._store.delete(self.key_record_key(key))
            return
        await self._store.set(self.key_record_key(key), new_tags)
        for tag in new_tags:
            await self.add_key_to_tag(key, tag)

    async def delete_tag(self, tag: str) -> None:
        record_key = self.tag_record_key(tag)
        keys = await self._read(record_key)
        for key in _unique(keys or []):
            remaining = [t for t in await self.get_tags_for_key(key) if t != tag]
            await self._write_or_delete(self.key_record_key(key), remaining)
        await self._store.delete(record_key)

    async def delete_key_from_all_tags(self, key: str) -> None:
        record_key = self.key_record_key(key)
        tags = await self._read(record_key)
        if tags is None:
            return
        for tag in tags:
            await self.remove_key_from_tag(key, tag)
        await self._store.delete(record_key)

    async def clear(self) -> None:
        await self._store.clear()

    async def compact(self, tags: Sequence[str] | None = None) -> None:
        """Drop duplicate and dead keys from each of *tags*.

        A key is dead when the payload store no longer holds a value for it.
        An empty result deletes the tag record. Compacting every tag at once
        is not supported.
        """
        if not tags:
            raise GlobalCompactionNotImplementedError()
        for tag in tags:
            await self._compact_tag(tag)

    async def _compact_tag(self, tag: str) -> None:
        record_key = self.tag_record_key(tag)
        keys = await self._read(record_key)
        if keys is None:
            return

        live: list[str] = []
        for key in _unique(keys):
            if await self._payload_store.get(key) is not None:
                live.append(key)

        if len(live) != len(keys):
            logger.debug("tag_index.compacted", tag=tag, before=len(keys), after=len(live))
            await self._write_or_delete(record_key, live)

    async def get_all_tags(self) -> list[str]:
        if not isinstance(self._store, ScanningKeyValueStore):
            raise UnsupportedOperationError(
                f"{type(self._store).__name__} cannot enumerate keys; get_all_tags needs a scanning store"
            )
        tags: set[str] = set()
        async for record_key in self._store.scan(self._tag_prefix):
            if await self._read(record_key):
                tags.add(record_key[len(self._tag_prefix):])
        return sorted(tags)
