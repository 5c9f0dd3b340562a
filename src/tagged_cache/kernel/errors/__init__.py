"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   └── ValidationError
    ├── ApplicationError     (application.py)
    │   └── UnsupportedOperationError
    └── InfrastructureError  (infrastructure.py)
        ├── ConnectionError
        └── SerializationError

Cache-specific errors live in :mod:`tagged_cache.application.cache.errors`.
"""

from tagged_cache.kernel.errors.application import ApplicationError, UnsupportedOperationError
from tagged_cache.kernel.errors.base import BaseError, describe
from tagged_cache.kernel.errors.domain import DomainError, ValidationError
from tagged_cache.kernel.errors.infrastructure import (
    ConnectionError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConnectionError",
    "DomainError",
    "InfrastructureError",
    "SerializationError",
    "UnsupportedOperationError",
    "ValidationError",
    "describe",
]
