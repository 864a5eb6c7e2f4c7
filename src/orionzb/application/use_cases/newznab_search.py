"""Newznab search use case: Orionoid fan-out, merge, filter, paginate."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from orionzb.domain.entities import (
    ContentType,
    NewznabItem,
    NewznabQuery,
    NewznabSearchResult,
    StreamRecord,
    StreamSearchRequest,
    StreamSearchResponse,
)
from orionzb.domain.entities.newznab import NewznabAttribute, NewznabEnclosure
from orionzb.domain.ports import OrionoidClientPort, StreamCachePort
from orionzb.infrastructure.newznab.categories import map_categories, matches_category
from orionzb.infrastructure.newznab.transformer import (
    details_url,
    download_url,
    transform_stream,
)

log = structlog.get_logger(__name__)

# Indexer managers (e.g. NZBHydra) probe new indexers with this query.
MOCK_QUERY = "mp3"
MOCK_GUID = "mock-mp3"
_MOCK_SIZE = 5_000_000
_MOCK_PUB_DATE = datetime(2025, 1, 31, 12, 0, tzinfo=timezone.utc)

_TYPES_BY_FUNCTION: dict[str, tuple[ContentType, ...]] = {
    "movie": ("movie",),
    "tvsearch": ("show",),
    "search": ("movie", "show"),
}


@dataclass(frozen=True)
class TypeSearchOutcome:
    """Result of one content type's upstream query. Exactly one field is set."""

    content_type: ContentType
    response: StreamSearchResponse | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.response is not None


def mock_item(base_url: str) -> NewznabItem:
    """Canned item answered for the liveness probe query."""
    link = details_url(base_url, MOCK_GUID)
    return NewznabItem(
        title="Test Audio MP3 320kbps",
        guid=MOCK_GUID,
        link=link,
        comments=link,
        pub_date=_MOCK_PUB_DATE,
        category="Audio > MP3",
        description="Mock audio item for connection check",
        enclosure=NewznabEnclosure(
            url=download_url(base_url, MOCK_GUID), length=_MOCK_SIZE
        ),
        attributes=(
            NewznabAttribute(name="category", value="3010"),
            NewznabAttribute(name="size", value=str(_MOCK_SIZE)),
        ),
    )


def _strip_prefix(value: str | None, prefix: str) -> str | None:
    if not value:
        return None
    if value.lower().startswith(prefix.lower()):
        value = value[len(prefix) :]
    return value or None


def _to_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class NewznabSearchUseCase:
    """Executes Newznab search/tvsearch/movie queries against Orionoid.

    Flow:
        1. Liveness probe short-circuit (``q=mp3``), no upstream call
        2. Resolve content types (generic search fans out to both)
        3. Query Orionoid concurrently, one request per type
        4. Register every returned stream in the stream cache
        5. Merge, filter by category, transform, sort newest first
        6. Slice by client offset/limit
    """

    def __init__(
        self,
        *,
        client: OrionoidClientPort,
        cache: StreamCachePort,
        base_url: str,
        upstream_limit: int = 20,
        stream_type: str | None = "usenet",
        preferred_languages: str | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._base_url = base_url
        self._upstream_limit = upstream_limit
        self._stream_type = stream_type
        self._preferred_languages = preferred_languages

    async def execute(self, q: NewznabQuery) -> NewznabSearchResult:
        if q.query == MOCK_QUERY:
            log.info("newznab_mock_probe")
            return NewznabSearchResult(items=[mock_item(self._base_url)], offset=0, total=1)

        content_types = _TYPES_BY_FUNCTION.get(q.function, ("movie", "show"))
        outcomes = await asyncio.gather(
            *(self._search_type(q, ct) for ct in content_types)
        )

        merged: list[tuple[StreamRecord, StreamSearchResponse]] = []
        total = 0
        for outcome in outcomes:
            if outcome.response is None:
                continue
            for record in outcome.response.streams:
                self._cache.store(record)
                merged.append((record, outcome.response))
            # Per-type totals may overlap; the sum is an approximation.
            total += outcome.response.total

        items = [
            transform_stream(
                record,
                response.content_type,
                self._base_url,
                imdb_id=response.imdb_id,
                tvdb_id=response.tvdb_id,
            )
            for record, response in merged
            if matches_category(
                map_categories(record, response.content_type), q.categories
            )
        ]
        # sorted() is stable, ties keep merge order.
        items = sorted(items, key=lambda item: item.pub_date, reverse=True)
        page = items[q.offset : q.offset + q.limit]

        log.info(
            "newznab_search_completed",
            function=q.function,
            query=q.query,
            types=list(content_types),
            failed=[o.content_type for o in outcomes if not o.ok],
            merged=len(merged),
            returned=len(page),
            total=total,
        )
        return NewznabSearchResult(items=page, offset=q.offset, total=total)

    def build_request(self, q: NewznabQuery, content_type: ContentType) -> StreamSearchRequest:
        """Translate a Newznab query into Orionoid vocabulary for one type."""
        return StreamSearchRequest(
            content_type=content_type,
            query=q.query or None,
            imdb_id=_strip_prefix(q.imdb_id, "tt"),
            tvdb_id=q.tvdb_id or None,
            tmdb_id=q.tmdb_id or None,
            trakt_id=q.trakt_id or None,
            tvrage_id=q.tvrage_id or None,
            season=_to_int(_strip_prefix(q.season, "S")),
            episode=_to_int(_strip_prefix(q.episode, "E")),
            limit=self._upstream_limit,
            stream_type=self._stream_type,
            sort_languages=self._preferred_languages,
        )

    async def _search_type(self, q: NewznabQuery, content_type: ContentType) -> TypeSearchOutcome:
        """Query one type; failures become an outcome value, never an exception."""
        request = self.build_request(q, content_type)
        try:
            response = await self._client.search_streams(request)
        except Exception as exc:
            log.warning(
                "orionoid_search_failed",
                content_type=content_type,
                query=q.query,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return TypeSearchOutcome(content_type=content_type, error=exc)
        return TypeSearchOutcome(content_type=content_type, response=response)
