"""Shared test fixtures for the orionzb test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from orionzb.domain.entities.orionoid import (
    StreamAudio,
    StreamFile,
    StreamInfo,
    StreamMeta,
    StreamPopularity,
    StreamRecord,
    StreamSearchResponse,
    StreamSubtitle,
    StreamTime,
    StreamVideo,
)

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


def build_stream(
    stream_id: str = "a" * 32,
    *,
    content_type: str = "movie",
    name: str = "Iron.Man.2008.1080p.BluRay.x264-SPARKS",
    file_hash: str = "",
    size: int = 0,
    added: int = 1_700_000_000,
    kind: str = "usenet",
    seeds: int = 0,
    quality: str = "",
    codec: str = "",
    is_3d: bool = False,
    release: str | None = None,
    channels: int = 0,
    languages: tuple[str, ...] = (),
    subtitles: tuple[str, ...] = (),
    grabs: int = 0,
    links: tuple[str, ...] = (),
) -> StreamRecord:
    """Convenience factory for StreamRecord with keyword overrides."""
    return StreamRecord(
        id=stream_id,
        content_type=content_type,  # type: ignore[arg-type]
        time=StreamTime(added=added, updated=added),
        links=links,
        stream=StreamInfo(type=kind, seeds=seeds),  # type: ignore[arg-type]
        file=StreamFile(hash=file_hash, name=name, size=size),
        meta=StreamMeta(release=release),
        video=StreamVideo(quality=quality, codec=codec, is_3d=is_3d),
        audio=StreamAudio(channels=channels, languages=languages),
        subtitle=StreamSubtitle(languages=subtitles),
        popularity=StreamPopularity(count=grabs),
    )


@pytest.fixture()
def make_stream() -> Callable[..., StreamRecord]:
    return build_stream


@pytest.fixture()
def stream_record() -> StreamRecord:
    """Fully populated usenet movie stream."""
    return build_stream(
        "s" * 32,
        name="Iron.Man.2008.2160p.UHD.BluRay.x265-GROUP.mkv",
        file_hash="h" * 40,
        size=1_610_612_736,
        quality="hd4k",
        codec="h265",
        release="bluray",
        channels=6,
        languages=("en",),
        subtitles=("en", "de"),
        grabs=12,
    )


def search_response(
    content_type: str = "movie",
    streams: list[StreamRecord] | None = None,
    *,
    total: int | None = None,
    imdb_id: str | None = None,
    tvdb_id: str | None = None,
) -> StreamSearchResponse:
    streams = streams or []
    return StreamSearchResponse(
        content_type=content_type,  # type: ignore[arg-type]
        streams=streams,
        total=len(streams) if total is None else total,
        imdb_id=imdb_id,
        tvdb_id=tvdb_id,
    )


@pytest.fixture()
def make_response() -> Callable[..., StreamSearchResponse]:
    return search_response


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_orionoid() -> AsyncMock:
    """Mock OrionoidClientPort."""
    client = AsyncMock()
    client.search_streams = AsyncMock(return_value=search_response())
    client.download_container = AsyncMock(return_value=b"<nzb/>")
    client.download_link = AsyncMock(return_value=b"<nzb/>")
    return client


@pytest.fixture()
def mock_stream_cache() -> MagicMock:
    """Mock StreamCachePort (synchronous methods)."""
    cache = MagicMock()
    cache.get.return_value = None
    return cache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


def stream_payload(**overrides: Any) -> dict[str, Any]:
    """One Orionoid ``data.streams[]`` entry as returned by the API."""
    payload: dict[str, Any] = {
        "id": "0123456789abcdef0123456789abcdef",
        "time": {"added": 1_700_000_000, "updated": 1_700_000_100},
        "links": ["https://nzb.example/file.nzb"],
        "stream": {"type": "usenet", "source": "nzbgeek", "hoster": None, "seeds": 0},
        "file": {
            "hash": "f" * 40,
            "name": "Iron.Man.2008.1080p.BluRay.x264-SPARKS.mkv",
            "size": 8_000_000_000,
            "pack": False,
        },
        "meta": {"release": "bluray", "uploader": "SPARKS", "edition": None},
        "video": {"quality": "hd1080", "codec": "h264", "3d": False},
        "audio": {
            "type": "standard",
            "channels": 6,
            "system": "dolby",
            "codec": "dd",
            "languages": ["en"],
        },
        "subtitle": {"type": None, "languages": []},
        "popularity": {"count": 42, "percent": 0.5},
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_payload() -> Callable[..., dict[str, Any]]:
    return stream_payload
