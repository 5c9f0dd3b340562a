"""Config settings – TaggedCacheSettings."""
from __future__ import annotations

import dataclasses

from tagged_cache.config.settings.base import Settings
from tagged_cache.config.validation import InvalidSettingValueError

DEFAULT_TAG_PREFIX = "__tag__:"
DEFAULT_KEY_TAGS_PREFIX = "__tags__:"
DEFAULT_PAGE_LIMIT = 50


@dataclasses.dataclass
class TaggedCacheSettings(Settings):
    """Settings for the tag index and the cache that owns it.

    ``tag_prefix`` and ``key_tags_prefix`` name the two index namespaces
    inside the primary store; they must be non-empty and distinct. An empty
    ``redis_url`` selects the in-memory store.
    """

    _prefix: dataclasses.ClassVar[str] = "TAGGED_CACHE"

    tag_prefix: str = DEFAULT_TAG_PREFIX
    key_tags_prefix: str = DEFAULT_KEY_TAGS_PREFIX
    default_page_limit: int = DEFAULT_PAGE_LIMIT
    redis_url: str = ""

    def _validate(self) -> None:
        if not self.tag_prefix:
            raise InvalidSettingValueError("tag_prefix", self.tag_prefix, "must not be empty")
        if not self.key_tags_prefix:
            raise InvalidSettingValueError("key_tags_prefix", self.key_tags_prefix, "must not be empty")
        if self.tag_prefix.startswith(self.key_tags_prefix) or self.key_tags_prefix.startswith(self.tag_prefix):
            raise InvalidSettingValueError(
                "key_tags_prefix",
                self.key_tags_prefix,
                f"namespace overlaps tag_prefix {self.tag_prefix!r}",
            )
        if self.default_page_limit < 1:
            raise InvalidSettingValueError("default_page_limit", self.default_page_limit, "must be >= 1")


__all__ = [
    "DEFAULT_KEY_TAGS_PREFIX",
    "DEFAULT_PAGE_LIMIT",
    "DEFAULT_TAG_PREFIX",
    "TaggedCacheSettings",
]
