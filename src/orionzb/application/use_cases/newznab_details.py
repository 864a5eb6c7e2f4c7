from __future__ import annotations

import structlog

from orionzb.domain.entities import NewznabItem, NewznabItemNotFound, NewznabMissingParameter
from orionzb.domain.ports import StreamCachePort
from orionzb.infrastructure.newznab.transformer import transform_stream

log = structlog.get_logger(__name__)

CACHE_MISS_MESSAGE = "Item not found in cache. Please search again."


def stream_id_from_guid(guid: str) -> str:
    """Accept a bare id or a details URL (``.../details/{id}``)."""
    return guid.rstrip("/").rsplit("/", 1)[-1]


class NewznabDetailsUseCase:
    """Resolves a GUID from a previous search into a single Newznab item."""

    def __init__(self, *, cache: StreamCachePort, base_url: str) -> None:
        self._cache = cache
        self._base_url = base_url

    def execute(self, guid: str | None) -> NewznabItem:
        if not guid:
            raise NewznabMissingParameter("Missing guid parameter")

        stream_id = stream_id_from_guid(guid)
        record = self._cache.get(stream_id)
        if record is None:
            log.info("stream_cache_miss", operation="details", stream_id=stream_id)
            raise NewznabItemNotFound(CACHE_MISS_MESSAGE)

        return transform_stream(record, record.content_type, self._base_url)
