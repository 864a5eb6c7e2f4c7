"""Orionoid JSON payload -> domain entities."""

from __future__ import annotations

from typing import Any

from orionzb.domain.entities.orionoid import (
    ContentType,
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


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _float(value: Any) -> float:
    try:
        return float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0


def _str(value: Any) -> str:
    return str(value) if value is not None else ""


def _opt_str(value: Any) -> str | None:
    return str(value) if value else None


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value if v)


def parse_stream(data: dict[str, Any], content_type: ContentType) -> StreamRecord:
    """Build a StreamRecord from one entry of ``data.streams``."""
    time = _section(data, "time")
    stream = _section(data, "stream")
    file = _section(data, "file")
    meta = _section(data, "meta")
    video = _section(data, "video")
    audio = _section(data, "audio")
    subtitle = _section(data, "subtitle")
    popularity = _section(data, "popularity")

    stream_type = stream.get("type")
    if stream_type not in ("torrent", "usenet", "hoster"):
        stream_type = "usenet"

    return StreamRecord(
        id=_str(data.get("id")),
        content_type=content_type,
        time=StreamTime(added=_int(time.get("added")), updated=_int(time.get("updated"))),
        links=_strings(data.get("links")),
        stream=StreamInfo(
            type=stream_type,
            source=_str(stream.get("source")),
            hoster=_opt_str(stream.get("hoster")),
            seeds=_int(stream.get("seeds")),
            time=_int(stream.get("time")),
        ),
        file=StreamFile(
            hash=_str(file.get("hash")),
            name=_str(file.get("name")),
            size=_int(file.get("size")),
            pack=bool(file.get("pack")),
        ),
        meta=StreamMeta(
            release=_opt_str(meta.get("release")),
            uploader=_opt_str(meta.get("uploader")),
            edition=_opt_str(meta.get("edition")),
        ),
        video=StreamVideo(
            quality=_str(video.get("quality")),
            codec=_str(video.get("codec")),
            is_3d=bool(video.get("3d")),
        ),
        audio=StreamAudio(
            type=_str(audio.get("type")),
            channels=_int(audio.get("channels")),
            system=_opt_str(audio.get("system")),
            codec=_opt_str(audio.get("codec")),
            languages=_strings(audio.get("languages")),
        ),
        subtitle=StreamSubtitle(
            type=_opt_str(subtitle.get("type")),
            languages=_strings(subtitle.get("languages")),
        ),
        popularity=StreamPopularity(
            count=_int(popularity.get("count")),
            percent=_float(popularity.get("percent")),
        ),
    )


def parse_search_response(
    payload: dict[str, Any], content_type: ContentType
) -> StreamSearchResponse:
    """Build a StreamSearchResponse from a successful ``stream/retrieve`` payload."""
    data = _section(payload, "data")
    title_ids = _section(_section(data, "movie" if content_type == "movie" else "show"), "id")
    streams = [
        parse_stream(s, content_type)
        for s in data.get("streams") or []
        if isinstance(s, dict) and s.get("id")
    ]
    return StreamSearchResponse(
        content_type=content_type,
        streams=streams,
        total=_int(_section(data, "count").get("total")),
        imdb_id=_opt_str(title_ids.get("imdb")),
        tvdb_id=_opt_str(title_ids.get("tvdb")) if content_type == "show" else None,
    )
