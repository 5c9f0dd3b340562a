"""Observability – structured logging helpers."""
from tagged_cache.observability.logging.factory import JsonLoggerFactory
from tagged_cache.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
