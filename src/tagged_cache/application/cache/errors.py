"""Application cache – error types raised by the tag index and TaggedCache."""
from __future__ import annotations

from typing import Any, Sequence

from tagged_cache.kernel.errors import ApplicationError, InfrastructureError, describe


class StoreOperationError(InfrastructureError):
    """A store operation failed; carries the operation name and key."""

    default_code = "store_operation_failed"

    def __init__(
        self,
        operation: str,
        key: str | None,
        cause: BaseException,
        *,
        subject: str = "key",
        **kwargs: Any,
    ) -> None:
        target = f"{subject} '{key}'" if key is not None else subject
        super().__init__(
            f"Failed to {operation} {target}: {describe(cause)}",
            cause=cause,
            detail={"operation": operation, "key": key},
            **kwargs,
        )
        self.operation = operation
        self.key = key


class TagIndexError(InfrastructureError):
    """Updating the tag index for a key failed after its payload was written."""

    default_code = "tag_index_failed"

    def __init__(self, key: str, cause: BaseException, **kwargs: Any) -> None:
        super().__init__(
            f"Failed to set tags for key '{key}': {describe(cause)}",
            cause=cause,
            detail={"key": key},
            **kwargs,
        )
        self.key = key


class BulkOperationError(ApplicationError):
    """One or more items of a bulk operation failed.

    Every item was still attempted; ``errors`` keeps the individual failures
    in the order they happened.
    """

    default_code = "bulk_operation_failed"

    def __init__(self, summary: str, errors: Sequence[BaseException], **kwargs: Any) -> None:
        self.errors: list[BaseException] = list(errors)
        joined = ", ".join(describe(e) for e in self.errors)
        super().__init__(
            f"{summary}: {joined}",
            detail={"failures": len(self.errors)},
            **kwargs,
        )


class GlobalCompactionNotImplementedError(ApplicationError):
    """Compaction was requested without an explicit list of tags."""

    default_code = "global_compaction_not_implemented"

    def __init__(self) -> None:
        super().__init__(
            "Global tag compaction not implemented. Please specify tags to compact."
        )


__all__ = [
    "BulkOperationError",
    "GlobalCompactionNotImplementedError",
    "StoreOperationError",
    "TagIndexError",
]
