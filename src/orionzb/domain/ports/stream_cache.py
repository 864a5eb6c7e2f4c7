"""Stream cache port - bridges search results to later details/get calls."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from orionzb.domain.entities.orionoid import StreamRecord


@runtime_checkable
class StreamCachePort(Protocol):
    """Synchronous key-value store with read-time TTL eviction.

    Implementations must be safe to call from the event loop without
    awaiting: no suspension point exists between the expiry check and
    the eviction of a stale entry.
    """

    def set(self, key: str, record: StreamRecord) -> None:
        """Store record under key (overwrites), expiry = now + TTL."""
        ...

    def get(self, key: str) -> StreamRecord | None:
        """Return record, or None when absent/expired (expired entries are removed)."""
        ...

    def store(self, record: StreamRecord) -> None:
        """Register record under its id and (if set) its file hash."""
        ...
