"""Compose category/attribute mappers into a Newznab item.

Pure functions: no I/O, no cache access, no clock.
"""

from __future__ import annotations

from urllib.parse import quote

from orionzb.domain.entities.newznab import NewznabEnclosure, NewznabItem
from orionzb.domain.entities.orionoid import ContentType, StreamRecord
from orionzb.infrastructure.newznab.attributes import map_attributes
from orionzb.infrastructure.newznab.categories import label_for, map_categories
from orionzb.infrastructure.newznab.dates import from_epoch

_GIB = 1024**3

# Same unreserved set as JavaScript's encodeURIComponent.
_URI_SAFE = "!*'()"

_CHANNEL_LAYOUTS: dict[int, str] = {2: "Stereo", 6: "5.1", 8: "7.1"}


def details_url(base_url: str, stream_id: str) -> str:
    return f"{base_url.rstrip('/')}/details/{stream_id}"


def download_url(base_url: str, download_id: str, name: str | None = None) -> str:
    url = f"{base_url.rstrip('/')}/api?t=get&id={quote(download_id, safe=_URI_SAFE)}"
    if name is not None:
        url += f"&name={quote(name, safe=_URI_SAFE)}"
    return url


def audio_layout(channels: int) -> str:
    return _CHANNEL_LAYOUTS.get(channels, f"{channels}ch")


def build_description(record: StreamRecord) -> str:
    """Pipe-joined summary; fragments with unknown values are left out."""
    parts: list[str] = []

    if record.video.quality:
        parts.append(f"Quality: {record.video.quality}")
    if record.video.codec:
        parts.append(f"Codec: {record.video.codec}")
    if record.audio.channels:
        parts.append(f"Audio: {audio_layout(record.audio.channels)}")
    if record.audio.languages:
        parts.append(f"Language: {', '.join(record.audio.languages)}")
    if record.file.size:
        parts.append(f"Size: {record.file.size / _GIB:.2f} GB")
    if record.meta.release:
        parts.append(f"Release: {record.meta.release}")
    if record.stream.type == "torrent" and record.stream.seeds:
        parts.append(f"Seeds: {record.stream.seeds}")

    return " | ".join(parts)


def transform_stream(
    record: StreamRecord,
    content_type: ContentType,
    base_url: str,
    *,
    imdb_id: str | None = None,
    tvdb_id: str | None = None,
) -> NewznabItem:
    """Build the Newznab item for one Orionoid stream.

    The GUID is the Orionoid stream id (details lookups go by id), while the
    enclosure prefers the file hash, which resolves more reliably when the
    container is fetched. ``name`` on the enclosure only carries the file
    name for the client; it is never used for lookup.
    """
    categories = map_categories(record, content_type)
    title = record.file.name or "Unknown"
    link = details_url(base_url, record.id)

    return NewznabItem(
        title=title,
        guid=record.id,
        link=link,
        comments=link,
        pub_date=from_epoch(record.time.added),
        category=label_for(content_type),
        description=build_description(record),
        enclosure=NewznabEnclosure(
            url=download_url(base_url, record.file.hash or record.id, title),
            length=record.file.size or 0,
        ),
        attributes=tuple(
            map_attributes(
                record,
                categories,
                content_type,
                imdb_id=imdb_id,
                tvdb_id=tvdb_id,
            )
        ),
    )
