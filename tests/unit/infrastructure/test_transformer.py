"""Tests for the stream -> Newznab item transformer."""

from __future__ import annotations

from datetime import datetime, timezone

from orionzb.infrastructure.newznab.transformer import (
    audio_layout,
    build_description,
    details_url,
    download_url,
    transform_stream,
)

_BASE = "http://indexer.local:3000"


class TestUrls:
    def test_details_url(self) -> None:
        assert details_url(_BASE + "/", "abc") == f"{_BASE}/details/abc"

    def test_download_url_encodes_name(self) -> None:
        url = download_url(_BASE, "h" * 40, "Movie (2020) [1080p]")
        assert url == f"{_BASE}/api?t=get&id={'h' * 40}&name=Movie%20(2020)%20%5B1080p%5D"

    def test_download_url_without_name(self) -> None:
        assert download_url(_BASE, "mock-mp3") == f"{_BASE}/api?t=get&id=mock-mp3"


class TestDescription:
    def test_size_in_gib(self, make_stream) -> None:
        record = make_stream(size=1_610_612_736)
        assert build_description(record) == "Size: 1.50 GB"

    def test_fragment_order(self, make_stream) -> None:
        record = make_stream(
            quality="hd1080",
            codec="h264",
            channels=6,
            languages=("en", "de"),
            size=1024**3,
            release="bluray",
            kind="torrent",
            seeds=5,
        )
        assert build_description(record) == (
            "Quality: hd1080 | Codec: h264 | Audio: 5.1 | Language: en, de"
            " | Size: 1.00 GB | Release: bluray | Seeds: 5"
        )

    def test_seeds_only_for_torrents(self, make_stream) -> None:
        assert build_description(make_stream(kind="usenet", seeds=5)) == ""

    def test_audio_layouts(self) -> None:
        assert audio_layout(2) == "Stereo"
        assert audio_layout(6) == "5.1"
        assert audio_layout(8) == "7.1"
        assert audio_layout(1) == "1ch"


class TestTransformStream:
    def test_derived_fields(self, stream_record) -> None:
        item = transform_stream(stream_record, "movie", _BASE, imdb_id="0371746")

        assert item.title == stream_record.file.name
        assert item.guid == stream_record.id
        assert item.link == f"{_BASE}/details/{stream_record.id}"
        assert item.comments == item.link
        assert item.category == "Movies"
        assert item.pub_date == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
        assert item.enclosure.length == 1_610_612_736
        assert item.enclosure.type == "application/x-nzb"
        assert f"id={stream_record.file.hash}" in item.enclosure.url

    def test_enclosure_falls_back_to_id(self, make_stream) -> None:
        item = transform_stream(make_stream("sid", file_hash="", size=0), "movie", _BASE)
        assert "id=sid&" in item.enclosure.url
        assert item.enclosure.length == 0

    def test_unknown_title(self, make_stream) -> None:
        item = transform_stream(make_stream(name=""), "show", _BASE)
        assert item.title == "Unknown"
        assert item.category == "TV"

    def test_category_attributes_come_first(self, stream_record) -> None:
        item = transform_stream(stream_record, "movie", _BASE)
        leading = [a.value for a in item.attributes[:3]]
        assert leading == ["2000", "2045", "2050"]

    def test_deterministic(self, stream_record) -> None:
        first = transform_stream(stream_record, "movie", _BASE, imdb_id="1")
        second = transform_stream(stream_record, "movie", _BASE, imdb_id="1")
        assert first == second
