from .newznab import (
    NewznabAttribute,
    NewznabAuthError,
    NewznabCaps,
    NewznabCategory,
    NewznabEnclosure,
    NewznabError,
    NewznabFunctionNotAvailable,
    NewznabIncorrectParameter,
    NewznabItem,
    NewznabItemNotFound,
    NewznabMissingParameter,
    NewznabQuery,
    NewznabSearchMode,
    NewznabSearchResult,
)
from .orionoid import (
    ContentType,
    StreamRecord,
    StreamSearchRequest,
    StreamSearchResponse,
    UpstreamAuthExpired,
    UpstreamError,
)

__all__ = [
    "ContentType",
    "NewznabAttribute",
    "NewznabAuthError",
    "NewznabCaps",
    "NewznabCategory",
    "NewznabEnclosure",
    "NewznabError",
    "NewznabFunctionNotAvailable",
    "NewznabIncorrectParameter",
    "NewznabItem",
    "NewznabItemNotFound",
    "NewznabMissingParameter",
    "NewznabQuery",
    "NewznabSearchMode",
    "NewznabSearchResult",
    "StreamRecord",
    "StreamSearchRequest",
    "StreamSearchResponse",
    "UpstreamAuthExpired",
    "UpstreamError",
]
