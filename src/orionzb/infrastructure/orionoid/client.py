"""Orionoid API client (async httpx implementation)."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from orionzb.domain.entities.orionoid import (
    StreamSearchRequest,
    StreamSearchResponse,
    UpstreamAuthExpired,
    UpstreamError,
)
from orionzb.infrastructure.orionoid.parser import parse_search_response

log = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.orionoid.com"

_MISSING_TYPE = "streammissing"
_MISSING_TEXT = "No Streams Found"
_EXPIRED_TYPE = "apitokenexpired"
_EXPIRED_TEXT = "Token Expired"


class HttpxOrionoidClient:
    """Async Orionoid client using a shared httpx.AsyncClient.

    Implements ``OrionoidClientPort`` from domain.ports.orionoid.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        app_key: str | None = None,
        user_key: str | None = None,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
    ) -> None:
        self._http = http_client
        self._app_key = app_key
        self._user_key = user_key
        self._token = token
        self._api_url = api_url

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _auth_params(self) -> dict[str, str]:
        if self._token:
            return {"token": self._token}
        if self._app_key and self._user_key:
            return {"keyapp": self._app_key, "keyuser": self._user_key}
        raise UpstreamError("No valid Orionoid authentication credentials configured")

    @staticmethod
    def _compact(params: dict[str, Any]) -> dict[str, str]:
        """Drop unset values; httpx would otherwise send them as empty strings."""
        return {k: str(v) for k, v in params.items() if v is not None and v != ""}

    @staticmethod
    def _search_params(request: StreamSearchRequest) -> dict[str, Any]:
        return {
            "mode": "stream",
            "action": "retrieve",
            "type": request.content_type,
            "idimdb": request.imdb_id,
            "idtvdb": request.tvdb_id,
            "idtmdb": request.tmdb_id,
            "idtrakt": request.trakt_id,
            "idtvrage": request.tvrage_id,
            "numberseason": request.season,
            "numberepisode": request.episode,
            "query": request.query,
            "limitcount": request.limit,
            "streamtype": request.stream_type,
            "sortLanguages": request.sort_languages,
            "sortvalue": "timeadded",
            "sortorder": "descending",
        }

    @staticmethod
    def _error_result(payload: Any) -> dict[str, Any] | None:
        """Return the ``result`` block when the payload is an Orionoid error."""
        if not isinstance(payload, dict):
            return None
        result = payload.get("result")
        if isinstance(result, dict) and result.get("status") == "error":
            return result
        return None

    # ------------------------------------------------------------------
    # Public API (OrionoidClientPort)
    # ------------------------------------------------------------------

    async def search_streams(self, request: StreamSearchRequest) -> StreamSearchResponse:
        """Retrieve streams for one content type.

        Raises:
            UpstreamAuthExpired: Orionoid rejected the credentials.
            UpstreamError: Any other network, HTTP or API failure.
        """
        params = self._compact({**self._auth_params(), **self._search_params(request)})
        try:
            resp = await self._http.post(self._api_url, params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"Orionoid HTTP error: status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Orionoid request failed: {exc}") from exc
        except ValueError as exc:
            raise UpstreamError("Orionoid returned an invalid JSON body") from exc

        error = self._error_result(payload)
        if error is not None:
            err_type = error.get("type") or ""
            description = error.get("description") or ""
            message = error.get("message") or ""

            if err_type == _MISSING_TYPE or _MISSING_TEXT in description:
                log.debug("orionoid_streams_missing", content_type=request.content_type)
                return StreamSearchResponse(
                    content_type=request.content_type, missing=True
                )

            if err_type == _EXPIRED_TYPE or _EXPIRED_TEXT in description:
                log.error("orionoid_auth_expired", description=description)
                raise UpstreamAuthExpired(
                    f"Orionoid API error: {description} - {message}. "
                    "The configured credentials have expired or are invalid; "
                    "check orionoid.token or orionoid.app_key/orionoid.user_key."
                )

            raise UpstreamError(f"Orionoid API error: {description} - {message}")

        response = parse_search_response(payload, request.content_type)
        log.debug(
            "orionoid_search_ok",
            content_type=request.content_type,
            streams=len(response.streams),
            total=response.total,
        )
        return response

    async def download_container(self, container_id: str) -> bytes:
        """Download an NZB/torrent container through Orionoid."""
        params = {
            **self._auth_params(),
            "mode": "container",
            "action": "download",
            "id": container_id,
        }
        log.info("orionoid_container_download", container_id=container_id)
        try:
            resp = await self._http.get(self._api_url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Container download failed: {exc}") from exc

        if resp.is_error:
            # Body may still be the file; only an explicit error payload fails.
            log.warning(
                "orionoid_container_status", container_id=container_id, status=resp.status_code
            )

        if "application/json" in resp.headers.get("content-type", ""):
            try:
                payload = resp.json()
            except ValueError:
                payload = None
            error = self._error_result(payload)
            if error is not None:
                raise UpstreamError(f"Orionoid error: {error.get('description') or ''}")

        return resp.content

    async def download_link(self, url: str) -> bytes:
        """Fetch a raw external container link."""
        log.info("external_link_download", url=url)
        try:
            resp = await self._http.get(url, follow_redirects=True)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"Link download failed: status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Link download failed: {exc}") from exc
        return resp.content
