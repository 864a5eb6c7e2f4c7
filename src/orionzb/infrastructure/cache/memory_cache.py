"""In-process stream cache with lazy (read-time) TTL eviction."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from orionzb.domain.entities.orionoid import StreamRecord

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CachedEntry:
    record: StreamRecord
    expires_at: float


class MemoryStreamCache:
    """Dict-backed StreamCachePort implementation.

    There is no background sweep: an entry is only removed when a read
    finds it expired. ``get`` and ``set`` never await, so under asyncio
    the check-then-delete sequence cannot interleave with another request.

    Args:
        ttl_seconds: Lifetime of every entry, measured from insertion.
        clock: Monotonic time source (seconds). Injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CachedEntry] = {}

    def set(self, key: str, record: StreamRecord) -> None:
        self._entries[key] = CachedEntry(
            record=record, expires_at=self._clock() + self.ttl_seconds
        )

    def get(self, key: str) -> StreamRecord | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() >= entry.expires_at:
            del self._entries[key]
            log.debug("stream_cache_expired", key=key)
            return None

        return entry.record

    def store(self, record: StreamRecord) -> None:
        """Register a record under its id and, when present, its file hash.

        Both entries share one insertion time but are independent: reading
        (and evicting) one never touches the other.
        """
        now = self._clock()
        entry = CachedEntry(record=record, expires_at=now + self.ttl_seconds)
        self._entries[record.id] = entry
        if record.file.hash:
            self._entries[record.file.hash] = CachedEntry(
                record=record, expires_at=now + self.ttl_seconds
            )

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
