"""Tests for Newznab attribute mapping."""

from __future__ import annotations

from orionzb.infrastructure.newznab.attributes import DEFAULT_USENET_GROUP, map_attributes
from orionzb.infrastructure.newznab.release_parser import ReleaseInfo


def _names(attrs) -> list[str]:
    return [a.name for a in attrs]


def _as_dict(attrs) -> dict[str, str]:
    return {a.name: a.value for a in attrs}


class TestOrdering:
    def test_show_full_emission_order(self, make_stream) -> None:
        record = make_stream(
            content_type="show",
            size=1000,
            grabs=3,
            quality="hd1080",
            codec="h264",
            channels=6,
            languages=("en",),
            subtitles=("de",),
        )
        release = ReleaseInfo(season=1, episode=2, group="NTb")

        attrs = map_attributes(
            record,
            ["5000", "5040"],
            "show",
            imdb_id="0944947",
            tvdb_id="121361",
            release=release,
        )

        assert _names(attrs) == [
            "category",
            "category",
            "size",
            "season",
            "episode",
            "tvdbid",
            "imdb",
            "grabs",
            "usenetdate",
            "group",
            "video",
            "codec",
            "audio",
            "language",
            "subs",
        ]

    def test_torrent_seeders_and_peers(self, make_stream) -> None:
        record = make_stream(kind="torrent", seeds=7)

        attrs = _as_dict(map_attributes(record, ["2000"], "movie", release=ReleaseInfo()))

        assert attrs["seeders"] == "7"
        assert attrs["peers"] == "14"
        assert "usenetdate" not in attrs
        assert "group" not in attrs

    def test_movie_has_no_show_fields(self, make_stream) -> None:
        attrs = _as_dict(
            map_attributes(
                make_stream(), ["2000"], "movie", tvdb_id="1", release=ReleaseInfo(season=1)
            )
        )
        assert "season" not in attrs
        assert "tvdbid" not in attrs


class TestPrecedence:
    def test_filename_codec_beats_provider_codec(self, make_stream) -> None:
        record = make_stream(codec="h264")
        attrs = _as_dict(
            map_attributes(record, ["2000"], "movie", release=ReleaseInfo(codec="x265"))
        )
        assert attrs["codec"] == "x265"

    def test_codec_from_real_filename(self, make_stream) -> None:
        record = make_stream(name="Movie.2020.2160p.BluRay.x265-GROUP.mkv", codec="h264")
        attrs = _as_dict(map_attributes(record, ["2000"], "movie"))
        assert attrs["codec"] == "x265"

    def test_provider_values_are_fallback(self, make_stream) -> None:
        record = make_stream(quality="hd720", codec="h264", channels=2, languages=("fr", "en"))
        attrs = _as_dict(map_attributes(record, ["2000"], "movie", release=ReleaseInfo()))

        assert attrs["video"] == "hd720"
        assert attrs["codec"] == "h264"
        assert attrs["audio"] == "2"
        assert attrs["language"] == "fr,en"

    def test_filename_values_win(self, make_stream) -> None:
        record = make_stream(quality="hd720", channels=2, languages=("fr",))
        release = ReleaseInfo(resolution="1080p", audio_channels="5.1", languages=("en",))

        attrs = _as_dict(map_attributes(record, ["2000"], "movie", release=release))

        assert attrs["video"] == "1080p"
        assert attrs["audio"] == "5.1"
        assert attrs["language"] == "en"


class TestOmission:
    def test_unknown_values_emit_nothing(self, make_stream) -> None:
        record = make_stream(size=0, added=0, grabs=0)
        attrs = map_attributes(record, ["2000", "2020"], "movie", release=ReleaseInfo())

        assert _names(attrs) == ["category", "category", "group"]

    def test_default_group(self, make_stream) -> None:
        attrs = _as_dict(map_attributes(make_stream(), ["2000"], "movie", release=ReleaseInfo()))
        assert attrs["group"] == DEFAULT_USENET_GROUP

    def test_usenetdate_is_rfc2822(self, make_stream) -> None:
        record = make_stream(added=86_400)
        attrs = _as_dict(map_attributes(record, ["2000"], "movie", release=ReleaseInfo()))
        assert attrs["usenetdate"] == "Fri, 02 Jan 1970 00:00:00 +0000"
