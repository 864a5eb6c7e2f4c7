"""Domain entities for Orionoid stream records.

Pure value objects with no framework dependencies and no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ContentType = Literal["movie", "show"]
StreamKind = Literal["torrent", "usenet", "hoster"]


@dataclass(frozen=True)
class StreamTime:
    added: int = 0  # epoch seconds
    updated: int = 0


@dataclass(frozen=True)
class StreamInfo:
    type: StreamKind = "usenet"
    source: str = ""
    hoster: str | None = None
    seeds: int = 0
    time: int = 0


@dataclass(frozen=True)
class StreamFile:
    hash: str = ""
    name: str = ""
    size: int = 0
    pack: bool = False


@dataclass(frozen=True)
class StreamMeta:
    release: str | None = None
    uploader: str | None = None
    edition: str | None = None


@dataclass(frozen=True)
class StreamVideo:
    quality: str = ""
    codec: str = ""
    is_3d: bool = False


@dataclass(frozen=True)
class StreamAudio:
    type: str = ""
    channels: int = 0
    system: str | None = None
    codec: str | None = None
    languages: tuple[str, ...] = ()


@dataclass(frozen=True)
class StreamSubtitle:
    type: str | None = None
    languages: tuple[str, ...] = ()


@dataclass(frozen=True)
class StreamPopularity:
    count: int = 0
    percent: float = 0.0


@dataclass(frozen=True)
class StreamRecord:
    """One playable/downloadable result returned by Orionoid."""

    id: str
    content_type: ContentType = "movie"
    time: StreamTime = field(default_factory=StreamTime)
    links: tuple[str, ...] = ()
    stream: StreamInfo = field(default_factory=StreamInfo)
    file: StreamFile = field(default_factory=StreamFile)
    meta: StreamMeta = field(default_factory=StreamMeta)
    video: StreamVideo = field(default_factory=StreamVideo)
    audio: StreamAudio = field(default_factory=StreamAudio)
    subtitle: StreamSubtitle = field(default_factory=StreamSubtitle)
    popularity: StreamPopularity = field(default_factory=StreamPopularity)


@dataclass(frozen=True)
class StreamSearchRequest:
    """Upstream query for a single content type (Orionoid vocabulary)."""

    content_type: ContentType
    query: str | None = None
    imdb_id: str | None = None  # without "tt" prefix
    tvdb_id: str | None = None
    tmdb_id: str | None = None
    trakt_id: str | None = None
    tvrage_id: str | None = None
    season: int | None = None
    episode: int | None = None
    limit: int = 20
    stream_type: str | None = "usenet"
    sort_languages: str | None = None


@dataclass(frozen=True)
class StreamSearchResponse:
    """Streams plus per-title metadata for one content type."""

    content_type: ContentType
    streams: list[StreamRecord] = field(default_factory=list)
    total: int = 0
    imdb_id: str | None = None
    tvdb_id: str | None = None
    missing: bool = False  # upstream reported "no streams found"


class UpstreamError(Exception):
    """Network / parsing / API errors reported by Orionoid."""


class UpstreamAuthExpired(UpstreamError):
    """Orionoid rejected the configured credentials (expired or invalid)."""
