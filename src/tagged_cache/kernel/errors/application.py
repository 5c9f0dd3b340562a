"""Application-layer errors: failures at the level of a whole use case."""

from __future__ import annotations

from tagged_cache.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class UnsupportedOperationError(ApplicationError):
    """The configured backend does not provide the requested capability."""

    default_code = "unsupported_operation"


__all__ = ["ApplicationError", "UnsupportedOperationError"]
