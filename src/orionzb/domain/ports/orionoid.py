"""Port for the Orionoid content-search API."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from orionzb.domain.entities.orionoid import StreamSearchRequest, StreamSearchResponse


@runtime_checkable
class OrionoidClientPort(Protocol):
    """Async interface for stream search and container download."""

    async def search_streams(
        self, request: StreamSearchRequest
    ) -> StreamSearchResponse:
        """Retrieve streams for one content type.

        Raises:
            UpstreamAuthExpired: Credentials rejected by Orionoid.
            UpstreamError: Any other upstream or transport failure.
        """
        ...

    async def download_container(self, container_id: str) -> bytes:
        """Download the NZB/torrent container for a hash or stream id."""
        ...

    async def download_link(self, url: str) -> bytes:
        """Fetch a container directly from an external link."""
        ...
