"""Application cache – SetOptions and TagPageRequest."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Sequence

from tagged_cache.kernel.errors import ValidationError

__all__ = ["SetOptions", "TagPageRequest", "resolve_set_arguments"]


@dataclasses.dataclass(frozen=True)
class SetOptions:
    """Structured form of the optional ``set`` arguments."""
    ttl: float | None = None
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(_check_tags(self.tags)))
        _check_ttl(self.ttl)


def _check_ttl(ttl: Any) -> float | None:
    if ttl is None:
        return None
    if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
        raise ValidationError(f"ttl must be a number of seconds, got {type(ttl).__name__}")
    if ttl <= 0:
        raise ValidationError(f"ttl must be > 0, got {ttl!r}")
    return ttl


def _check_tags(tags: Any) -> list[str]:
    if tags is None:
        return []
    if isinstance(tags, (str, bytes)) or not isinstance(tags, Sequence):
        raise ValidationError("tags must be a sequence of strings")
    bad = [t for t in tags if not isinstance(t, str)]
    if bad:
        raise ValidationError(
            "tags must be a sequence of strings",
            errors=[{"field": "tags", "value": repr(t)} for t in bad],
        )
    return list(tags)


def resolve_set_arguments(
    ttl_or_options: float | SetOptions | Mapping[str, Any] | None,
    tags: Sequence[str] | None,
) -> tuple[float | None, list[str]]:
    """Normalise the legacy ``(ttl, tags)`` and structured forms of ``set``."""
    if isinstance(ttl_or_options, SetOptions):
        return ttl_or_options.ttl, list(ttl_or_options.tags)
    if isinstance(ttl_or_options, Mapping):
        unknown = set(ttl_or_options) - {"ttl", "tags"}
        if unknown:
            raise ValidationError(f"Unknown set options: {sorted(unknown)}")
        opts = SetOptions(ttl=ttl_or_options.get("ttl"), tags=tuple(_check_tags(ttl_or_options.get("tags"))))
        return opts.ttl, list(opts.tags)
    return _check_ttl(ttl_or_options), _check_tags(tags)


@dataclasses.dataclass(frozen=True)
class TagPageRequest:
    """Offset pagination over a tag's key list.

    ``page`` below 1 is clamped to 1 rather than rejected.
    """
    page: int = 1
    limit: int = 50

    def __post_init__(self) -> None:
        object.__setattr__(self, "page", max(1, self.page))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def slice(self, keys: Sequence[str]) -> list[str]:
        if self.limit < 1:
            return []
        return list(keys[self.offset:self.offset + self.limit])
