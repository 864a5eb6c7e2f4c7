"""Cache Infrastructure - in-process stream cache."""

from .memory_cache import CachedEntry, MemoryStreamCache

__all__ = [
    "CachedEntry",
    "MemoryStreamCache",
]
