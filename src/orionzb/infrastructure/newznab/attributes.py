"""Orionoid stream -> Newznab ``<newznab:attr>`` mapping."""

from __future__ import annotations

from orionzb.domain.entities.newznab import NewznabAttribute
from orionzb.domain.entities.orionoid import ContentType, StreamRecord
from orionzb.infrastructure.newznab.dates import format_rfc2822, from_epoch
from orionzb.infrastructure.newznab.release_parser import ReleaseInfo, parse_release

DEFAULT_USENET_GROUP = "alt.binaries.orion"


def map_attributes(
    record: StreamRecord,
    categories: list[str],
    content_type: ContentType,
    *,
    imdb_id: str | None = None,
    tvdb_id: str | None = None,
    release: ReleaseInfo | None = None,
) -> list[NewznabAttribute]:
    """Build the ordered attribute list for one stream.

    For video, codec, audio and language the filename-parsed value wins;
    Orionoid's own metadata is the fallback. Unknown values emit nothing.

    Args:
        record: Stream as returned by Orionoid.
        categories: Output of ``map_categories`` for the same stream.
        content_type: "movie" or "show".
        imdb_id: Title-level IMDb id from the search response.
        tvdb_id: Title-level TVDB id (shows only).
        release: Pre-parsed file name; parsed on demand when omitted.
    """
    if release is None:
        release = parse_release(record.file.name, content_type)

    attrs: list[NewznabAttribute] = []

    def add(name: str, value: object) -> None:
        attrs.append(NewznabAttribute(name=name, value=str(value)))

    for category in categories:
        add("category", category)

    if record.file.size:
        add("size", record.file.size)

    if content_type == "show":
        if release.season is not None:
            add("season", release.season)
        if release.episode is not None:
            add("episode", release.episode)
        if tvdb_id:
            add("tvdbid", tvdb_id)

    if imdb_id:
        add("imdb", imdb_id)

    if record.popularity.count:
        add("grabs", record.popularity.count)

    if record.stream.type == "torrent" and record.stream.seeds:
        add("seeders", record.stream.seeds)
        # No peer figure upstream; estimated as twice the seeds.
        add("peers", record.stream.seeds * 2)

    if record.stream.type == "usenet":
        if record.time.added:
            add("usenetdate", format_rfc2822(from_epoch(record.time.added)))
        add("group", release.group or DEFAULT_USENET_GROUP)

    video = release.resolution or record.video.quality
    if video:
        add("video", video)

    codec = release.codec or record.video.codec
    if codec:
        add("codec", codec)

    if release.audio_channels:
        add("audio", release.audio_channels)
    elif record.audio.channels:
        add("audio", record.audio.channels)

    languages = release.languages or record.audio.languages
    if languages:
        add("language", ",".join(languages))

    if record.subtitle.languages:
        add("subs", ",".join(record.subtitle.languages))

    return attrs
