from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

NewznabSearchFunction = Literal["search", "tvsearch", "movie"]

# Standard Newznab category IDs
MOVIES = "2000"
MOVIES_FOREIGN = "2010"
MOVIES_OTHER = "2020"
MOVIES_SD = "2030"
MOVIES_HD = "2040"
MOVIES_UHD = "2045"
MOVIES_BLURAY = "2050"
MOVIES_3D = "2060"

TV = "5000"
TV_FOREIGN = "5020"
TV_SD = "5030"
TV_HD = "5040"
TV_UHD = "5045"
TV_OTHER = "5050"
TV_SPORT = "5060"
TV_ANIME = "5070"
TV_DOCUMENTARY = "5080"

# Newznab error codes
INCORRECT_USER_CREDENTIALS = "100"
ACCOUNT_SUSPENDED = "101"
INSUFFICIENT_PRIVILEGES = "102"
REGISTRATION_DENIED = "103"
REGISTRATIONS_CLOSED = "104"
INVALID_EMAIL = "105"
MISSING_PARAMETER = "200"
INCORRECT_PARAMETER = "201"
API_ERROR = "202"
FUNCTION_NOT_AVAILABLE = "203"
NO_SUCH_ITEM = "300"
ITEM_ALREADY_EXISTS = "301"


@dataclass(frozen=True)
class NewznabQuery:
    function: NewznabSearchFunction
    query: str | None = None
    categories: tuple[str, ...] = ()

    limit: int = 50
    offset: int = 0

    # External ids / episode addressing
    imdb_id: str | None = None
    tvdb_id: str | None = None
    tmdb_id: str | None = None
    trakt_id: str | None = None
    tvrage_id: str | None = None
    season: str | None = None
    episode: str | None = None


@dataclass(frozen=True)
class NewznabAttribute:
    name: str
    value: str


@dataclass(frozen=True)
class NewznabEnclosure:
    url: str
    length: int = 0
    type: str = "application/x-nzb"


@dataclass(frozen=True)
class NewznabItem:
    title: str
    guid: str
    link: str
    comments: str
    pub_date: datetime
    category: str  # Human-readable label ("Movies", "TV")
    enclosure: NewznabEnclosure
    description: str = ""
    attributes: tuple[NewznabAttribute, ...] = ()


@dataclass(frozen=True)
class NewznabCategory:
    id: str
    name: str
    subcategories: tuple[NewznabCategory, ...] = ()


@dataclass(frozen=True)
class NewznabSearchMode:
    available: bool
    supported_params: str


@dataclass(frozen=True)
class NewznabCaps:
    server_title: str
    server_strapline: str
    server_url: str
    server_version: str = "1.0"
    server_email: str = ""
    server_image: str = ""
    limits_max: int = 100
    limits_default: int = 50
    retention_days: int = 3000
    registration_available: bool = False
    registration_open: bool = False
    search: NewznabSearchMode | None = None
    tv_search: NewznabSearchMode | None = None
    movie_search: NewznabSearchMode | None = None
    categories: tuple[NewznabCategory, ...] = ()


@dataclass(frozen=True)
class NewznabSearchResult:
    """One page of merged search results plus the headline total."""

    items: list[NewznabItem] = field(default_factory=list)
    offset: int = 0
    total: int = 0


class NewznabError(Exception):
    """Base error for Newznab domain/usecases.

    ``code`` is the Newznab error code rendered in the ``<error>`` envelope.
    """

    code: str = API_ERROR


class NewznabAuthError(NewznabError):
    code = INCORRECT_USER_CREDENTIALS


class NewznabMissingParameter(NewznabError):
    code = MISSING_PARAMETER


class NewznabIncorrectParameter(NewznabError):
    code = INCORRECT_PARAMETER


class NewznabItemNotFound(NewznabError):
    """Requested id was never surfaced by a search, or its cache entry expired."""

    code = API_ERROR


class NewznabFunctionNotAvailable(NewznabError):
    code = FUNCTION_NOT_AVAILABLE
