"""Release name parser using guessit for filename-derived stream facts."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from guessit import guessit

from orionzb.domain.entities.orionoid import ContentType

# guessit normalises codecs to standard names; indexers expect scene tokens.
_CODEC_TOKENS: dict[str, str] = {
    "H.264": "x264",
    "H.265": "x265",
    "Xvid": "xvid",
    "DivX": "divx",
    "MPEG-2": "mpeg2",
    "VC-1": "vc1",
    "VP7": "vp7",
    "VP8": "vp8",
    "VP9": "vp9",
    "AV1": "av1",
}


@dataclass(frozen=True)
class ReleaseInfo:
    """Facts guessed from a release/file name. Empty values mean unknown."""

    resolution: str = ""
    codec: str = ""
    audio_channels: str = ""
    languages: tuple[str, ...] = ()
    season: int | None = None
    episode: int | None = None
    group: str = ""


def _first(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _language_code(lang_obj: object) -> str | None:
    """Extract a 2-letter (else 3-letter) code from a guessit Language object."""
    alpha2 = getattr(lang_obj, "alpha2", None)
    if alpha2:
        return str(alpha2)
    alpha3 = getattr(lang_obj, "alpha3", None)
    if alpha3:
        return str(alpha3)
    return None


def _languages(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    objs = value if isinstance(value, list) else [value]
    codes: list[str] = []
    for obj in objs:
        code = _language_code(obj)
        if code and code not in codes:
            codes.append(code)
    return tuple(codes)


def _codec_token(codec: Any) -> str:
    if not codec:
        return ""
    text = str(_first(codec))
    return _CODEC_TOKENS.get(text, text.lower())


def _int_or_none(value: Any) -> int | None:
    value = _first(value)
    if isinstance(value, int):
        return value
    return None


@lru_cache(maxsize=2048)
def parse_release(name: str, content_type: ContentType | None = None) -> ReleaseInfo:
    """Guess resolution, codec, audio, languages, season/episode and group.

    Results are memoised: the same file name is parsed for every search
    that surfaces it.
    """
    if not name or not name.strip():
        return ReleaseInfo()

    options: dict[str, Any] = {}
    if content_type == "show":
        options["type"] = "episode"
    elif content_type == "movie":
        options["type"] = "movie"

    guess = guessit(name, options)

    return ReleaseInfo(
        resolution=str(guess.get("screen_size") or ""),
        codec=_codec_token(guess.get("video_codec")),
        audio_channels=str(_first(guess.get("audio_channels")) or ""),
        languages=_languages(guess.get("language")),
        season=_int_or_none(guess.get("season")),
        episode=_int_or_none(guess.get("episode")),
        group=str(_first(guess.get("release_group")) or ""),
    )
