"""Newznab ``t=get`` use case: cached stream -> container bytes."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from orionzb.domain.entities import NewznabItemNotFound, NewznabMissingParameter, StreamRecord
from orionzb.domain.ports import OrionoidClientPort, StreamCachePort
from orionzb.application.use_cases.newznab_details import CACHE_MISS_MESSAGE

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DownloadResult:
    payload: bytes
    filename: str


def container_id_for(record: StreamRecord, requested_id: str) -> str:
    """File hash, else the first raw link, else the requested id."""
    if record.file.hash:
        return record.file.hash
    if record.links:
        return record.links[0]
    return requested_id


class NewznabDownloadUseCase:
    """Fetches the NZB for a stream surfaced by an earlier search.

    A single attempt is made; upstream failures propagate as
    ``UpstreamError`` for the router to render.
    """

    def __init__(self, *, client: OrionoidClientPort, cache: StreamCachePort) -> None:
        self._client = client
        self._cache = cache

    async def execute(self, stream_id: str | None, name: str | None = None) -> DownloadResult:
        if not stream_id:
            raise NewznabMissingParameter("Missing id parameter")

        record = self._cache.get(stream_id)
        if record is None:
            log.info("stream_cache_miss", operation="get", stream_id=stream_id)
            raise NewznabItemNotFound(CACHE_MISS_MESSAGE)

        container_id = container_id_for(record, stream_id)
        log.info(
            "newznab_download_started",
            stream_id=stream_id,
            container_id=container_id,
            direct=container_id.startswith(("http://", "https://")),
        )

        if container_id.startswith(("http://", "https://")):
            payload = await self._client.download_link(container_id)
        else:
            payload = await self._client.download_container(container_id)

        filename = f"{name or record.file.name or stream_id}.nzb"
        return DownloadResult(payload=payload, filename=filename)
