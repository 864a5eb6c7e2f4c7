"""Orionoid stream -> Newznab category mapping."""

from __future__ import annotations

from collections.abc import Iterable

from orionzb.domain.entities import newznab as cat
from orionzb.domain.entities.newznab import NewznabCategory
from orionzb.domain.entities.orionoid import ContentType, StreamRecord

# Ordered quality probes: first tier with any matching substring wins.
_QUALITY_TIERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("8k", "hd8k"), "uhd"),
    (("6k", "hd6k"), "uhd"),
    (("4k", "hd4k", "2160p"), "uhd"),
    (("2k", "hd2k"), "hd"),
    (("1080", "hd1080"), "hd"),
    (("720", "hd720"), "hd"),
    (("sd",), "sd"),
)

_QUALITY_CHILDREN: dict[ContentType, dict[str, str]] = {
    "movie": {"uhd": cat.MOVIES_UHD, "hd": cat.MOVIES_HD, "sd": cat.MOVIES_SD},
    "show": {"uhd": cat.TV_UHD, "hd": cat.TV_HD, "sd": cat.TV_SD},
}

_ROOTS: dict[ContentType, str] = {"movie": cat.MOVIES, "show": cat.TV}
_OTHER: dict[ContentType, str] = {"movie": cat.MOVIES_OTHER, "show": cat.TV_OTHER}

_BLURAY_MARKERS = ("bluray", "bdrip", "bdrmx")

CATEGORY_TREE: tuple[NewznabCategory, ...] = (
    NewznabCategory(
        id=cat.MOVIES,
        name="Movies",
        subcategories=(
            NewznabCategory(cat.MOVIES_FOREIGN, "Foreign"),
            NewznabCategory(cat.MOVIES_OTHER, "Other"),
            NewznabCategory(cat.MOVIES_SD, "SD"),
            NewznabCategory(cat.MOVIES_HD, "HD"),
            NewznabCategory(cat.MOVIES_UHD, "UHD"),
            NewznabCategory(cat.MOVIES_BLURAY, "BluRay"),
            NewznabCategory(cat.MOVIES_3D, "3D"),
        ),
    ),
    NewznabCategory(
        id=cat.TV,
        name="TV",
        subcategories=(
            NewznabCategory(cat.TV_FOREIGN, "Foreign"),
            NewznabCategory(cat.TV_SD, "SD"),
            NewznabCategory(cat.TV_HD, "HD"),
            NewznabCategory(cat.TV_UHD, "UHD"),
            NewznabCategory(cat.TV_OTHER, "Other"),
            NewznabCategory(cat.TV_SPORT, "Sport"),
            NewznabCategory(cat.TV_ANIME, "Anime"),
            NewznabCategory(cat.TV_DOCUMENTARY, "Documentary"),
        ),
    ),
)


def _quality_tier(quality: str) -> str | None:
    q = quality.lower()
    for needles, tier in _QUALITY_TIERS:
        if any(needle in q for needle in needles):
            return tier
    return None


def map_categories(record: StreamRecord, content_type: ContentType) -> list[str]:
    """Map a stream to Newznab category ids.

    Result is always ``[root, quality child, *extras]``. The quality child
    falls back to the content type's "Other" category; the movie-only
    BluRay/3D children are appended after it, never instead of it.
    """
    categories = [_ROOTS[content_type]]

    tier = _quality_tier(record.video.quality or "")
    if tier is not None:
        categories.append(_QUALITY_CHILDREN[content_type][tier])
    else:
        categories.append(_OTHER[content_type])

    if content_type == "movie":
        release = (record.meta.release or "").lower()
        if any(marker in release for marker in _BLURAY_MARKERS):
            categories.append(cat.MOVIES_BLURAY)
        if record.video.is_3d:
            categories.append(cat.MOVIES_3D)

    return categories


def matches_category(produced: Iterable[str], requested: Iterable[str]) -> bool:
    """OR-semantics filter: empty request matches everything."""
    wanted = set(requested)
    if not wanted:
        return True
    return not wanted.isdisjoint(produced)


def label_for(content_type: ContentType) -> str:
    return "Movies" if content_type == "movie" else "TV"
