from __future__ import annotations

from typing import cast
from urllib.parse import quote, urlencode

import structlog
from fastapi import APIRouter, Request, Response
from fastapi.responses import RedirectResponse
from starlette.datastructures import QueryParams

from orionzb.application.use_cases import (
    NewznabCapsUseCase,
    NewznabDetailsUseCase,
    NewznabDownloadUseCase,
    NewznabSearchUseCase,
)
from orionzb.domain.entities import (
    NewznabAuthError,
    NewznabError,
    NewznabFunctionNotAvailable,
    NewznabIncorrectParameter,
    NewznabMissingParameter,
    NewznabQuery,
    UpstreamAuthExpired,
    UpstreamError,
)
from orionzb.domain.entities.newznab import API_ERROR, NewznabSearchFunction
from orionzb.interfaces.api.newznab.presenter import (
    render_caps_xml,
    render_details_xml,
    render_error_xml,
    render_rss_xml,
)
from orionzb.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["newznab"])

SEARCH_FUNCTIONS: tuple[NewznabSearchFunction, ...] = ("search", "tvsearch", "movie")

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _xml(payload: bytes) -> Response:
    # Newznab clients expect HTTP 200 even for error envelopes.
    return Response(content=payload, media_type="application/xml", status_code=200)


def _error(code: str, description: str) -> Response:
    return _xml(render_error_xml(code, description).payload)


def _content_disposition(filename: str) -> str:
    """Attachment header that survives non-Latin-1 and quoted names.

    Header values must be Latin-1, so the plain ``filename`` is reduced to
    ASCII and the full name goes into the RFC 5987 ``filename*`` form.
    """
    fallback = filename.replace("\\", "_").replace('"', "'")
    fallback = fallback.encode("ascii", "ignore").decode("ascii") or "download.nzb"
    header = f'attachment; filename="{fallback}"'
    encoded = quote(filename, safe="")
    if encoded != filename:
        header += f"; filename*=utf-8''{encoded}"
    return header


def _check_api_key(state: AppState, params: QueryParams) -> None:
    if params.get("apikey") != state.config.newznab.api_key:
        raise NewznabAuthError("Invalid API key")


def _non_negative_int(params: QueryParams, name: str, default: int) -> int:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise NewznabIncorrectParameter(f"Invalid {name} parameter: {raw!r}") from e
    if value < 0:
        raise NewznabIncorrectParameter(f"Invalid {name} parameter: {raw!r}")
    return value


def parse_search_query(
    function: NewznabSearchFunction,
    params: QueryParams,
    *,
    default_limit: int,
    max_limit: int,
) -> NewznabQuery:
    """Build a NewznabQuery from raw query parameters.

    ``limit`` falls back to the configured default and is capped at the
    configured maximum. Unparseable or negative paging values raise
    NewznabIncorrectParameter (201).
    """
    limit = min(_non_negative_int(params, "limit", default_limit), max_limit)
    offset = _non_negative_int(params, "offset", 0)
    categories = tuple(c.strip() for c in (params.get("cat") or "").split(",") if c.strip())

    return NewznabQuery(
        function=function,
        query=params.get("q") or None,
        categories=categories,
        limit=limit,
        offset=offset,
        imdb_id=params.get("imdbid") or None,
        tvdb_id=params.get("tvdbid") or None,
        tmdb_id=params.get("tmdbid") or None,
        trakt_id=params.get("traktid") or None,
        tvrage_id=params.get("rid") or None,
        season=params.get("season") or None,
        episode=params.get("ep") or None,
    )


async def _handle_caps(state: AppState) -> Response:
    config = state.config
    uc = NewznabCapsUseCase(
        server_name=config.newznab.server_name,
        server_description=config.newznab.server_description,
        base_url=config.base_url,
        max_results=config.features.max_results,
        default_results=config.features.default_results,
    )
    return _xml(render_caps_xml(uc.execute()).payload)


async def _handle_search(
    state: AppState, function: NewznabSearchFunction, params: QueryParams
) -> Response:
    config = state.config
    _check_api_key(state, params)
    query = parse_search_query(
        function,
        params,
        default_limit=config.features.default_results,
        max_limit=config.features.max_results,
    )
    uc = NewznabSearchUseCase(
        client=state.orionoid,
        cache=state.stream_cache,
        base_url=config.base_url,
        upstream_limit=config.features.upstream_limit,
        stream_type=config.features.stream_type,
        preferred_languages=config.features.preferred_languages,
    )
    result = await uc.execute(query)
    rendered = render_rss_xml(
        title=config.newznab.server_name,
        items=result.items,
        offset=result.offset,
        total=result.total,
        base_url=config.base_url,
    )
    return _xml(rendered.payload)


async def _handle_details(state: AppState, params: QueryParams) -> Response:
    _check_api_key(state, params)
    uc = NewznabDetailsUseCase(cache=state.stream_cache, base_url=state.config.base_url)
    item = uc.execute(params.get("guid"))
    rendered = render_details_xml(title=state.config.newznab.server_name, item=item)
    return _xml(rendered.payload)


async def _handle_get(state: AppState, params: QueryParams) -> Response:
    uc = NewznabDownloadUseCase(client=state.orionoid, cache=state.stream_cache)
    result = await uc.execute(params.get("id"), params.get("name") or None)
    return Response(
        content=result.payload,
        media_type="application/x-nzb",
        headers={
            "Content-Disposition": _content_disposition(result.filename),
            **NO_CACHE_HEADERS,
        },
    )


@router.get("/api")
async def newznab_api(request: Request) -> Response:
    """Single Newznab entrypoint, dispatched on ``t``."""
    state = cast(AppState, request.app.state)
    params = request.query_params
    t = params.get("t") or ""

    try:
        if not t:
            raise NewznabMissingParameter("Missing parameter t")
        if t == "caps":
            return await _handle_caps(state)
        if t in SEARCH_FUNCTIONS:
            return await _handle_search(state, cast(NewznabSearchFunction, t), params)
        if t == "details":
            return await _handle_details(state, params)
        if t == "get":
            return await _handle_get(state, params)
        raise NewznabFunctionNotAvailable(
            f"Function not available: {t}. "
            "Use t=caps, t=search, t=tvsearch, t=movie, t=details or t=get"
        )

    except NewznabError as e:
        log.info("newznab_request_rejected", t=t, code=e.code, error=str(e))
        return _error(e.code, str(e))

    except UpstreamAuthExpired as e:
        log.error("orionoid_auth_expired", t=t, error=str(e))
        return _error(API_ERROR, str(e))

    except UpstreamError as e:
        log.warning("orionoid_request_failed", t=t, error=str(e))
        return _error(API_ERROR, str(e))

    except Exception as e:
        log.exception("newznab_unhandled_error", t=t)
        return _error(API_ERROR, str(e) or "Internal server error")


@router.get("/details/{stream_id}")
async def details_redirect(request: Request, stream_id: str) -> RedirectResponse:
    """Browser-facing item link; forwards to ``t=details`` with the server key."""
    state = cast(AppState, request.app.state)
    query = urlencode(
        {"t": "details", "guid": stream_id, "apikey": state.config.newznab.api_key}
    )
    return RedirectResponse(url=f"/api?{query}")
