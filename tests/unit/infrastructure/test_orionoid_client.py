"""Tests for HttpxOrionoidClient (Orionoid API adapter)."""

from __future__ import annotations

import httpx
import pytest
import respx

from orionzb.domain.entities import StreamSearchRequest, UpstreamAuthExpired, UpstreamError
from orionzb.domain.ports import OrionoidClientPort
from orionzb.infrastructure.orionoid import HttpxOrionoidClient

_API = "https://api.orionoid.com"


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def client(http_client: httpx.AsyncClient) -> HttpxOrionoidClient:
    return HttpxOrionoidClient(http_client=http_client, app_key="APP", user_key="USER")


def _success(streams: list, content_type: str = "movie", **data) -> dict:
    body = {
        "type": content_type,
        "count": {"total": 321, "requested": 20, "retrieved": len(streams)},
        "streams": streams,
    }
    body.update(data)
    return {"name": "Orion", "result": {"status": "success", "type": "streamretrieve"}, "data": body}


def _error(err_type: str, description: str, message: str = "") -> dict:
    return {
        "name": "Orion",
        "result": {
            "status": "error",
            "type": err_type,
            "description": description,
            "message": message,
        },
    }


class TestSearchStreams:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_parses_streams_and_title_ids(
        self, client: HttpxOrionoidClient, make_payload
    ) -> None:
        route = respx.post(_API).respond(
            json=_success([make_payload()], movie={"id": {"imdb": "0371746"}})
        )

        response = await client.search_streams(
            StreamSearchRequest(content_type="movie", imdb_id="0371746", limit=20)
        )

        assert route.called
        assert response.total == 321
        assert response.imdb_id == "0371746"
        assert response.missing is False
        record = response.streams[0]
        assert record.id == "0123456789abcdef0123456789abcdef"
        assert record.content_type == "movie"
        assert record.file.size == 8_000_000_000
        assert record.video.quality == "hd1080"
        assert record.audio.languages == ("en",)
        assert record.links == ("https://nzb.example/file.nzb",)
        assert record.popularity.count == 42

    @respx.mock
    @pytest.mark.asyncio()
    async def test_sends_upstream_vocabulary(self, client: HttpxOrionoidClient) -> None:
        route = respx.post(_API).respond(json=_success([], content_type="show"))

        await client.search_streams(
            StreamSearchRequest(
                content_type="show",
                tvdb_id="121361",
                season=2,
                episode=5,
                limit=20,
                stream_type="usenet",
                sort_languages="en",
            )
        )

        params = route.calls.last.request.url.params
        assert params["mode"] == "stream"
        assert params["action"] == "retrieve"
        assert params["keyapp"] == "APP"
        assert params["keyuser"] == "USER"
        assert params["type"] == "show"
        assert params["idtvdb"] == "121361"
        assert params["numberseason"] == "2"
        assert params["numberepisode"] == "5"
        assert params["limitcount"] == "20"
        assert params["streamtype"] == "usenet"
        assert params["sortLanguages"] == "en"
        assert params["sortvalue"] == "timeadded"
        assert params["sortorder"] == "descending"
        assert "query" not in params
        assert "limitoffset" not in params

    @respx.mock
    @pytest.mark.asyncio()
    async def test_token_auth_preferred(self, http_client: httpx.AsyncClient) -> None:
        client = HttpxOrionoidClient(
            http_client=http_client, app_key="APP", user_key="USER", token="TOKEN"
        )
        route = respx.post(_API).respond(json=_success([]))

        await client.search_streams(StreamSearchRequest(content_type="movie"))

        params = route.calls.last.request.url.params
        assert params["token"] == "TOKEN"
        assert "keyapp" not in params

    @pytest.mark.asyncio()
    async def test_missing_credentials(self, http_client: httpx.AsyncClient) -> None:
        client = HttpxOrionoidClient(http_client=http_client, app_key="APP")
        with pytest.raises(UpstreamError):
            await client.search_streams(StreamSearchRequest(content_type="movie"))

    @respx.mock
    @pytest.mark.asyncio()
    async def test_stream_missing_is_empty_success(self, client: HttpxOrionoidClient) -> None:
        respx.post(_API).respond(json=_error("streammissing", "No Streams Found"))

        response = await client.search_streams(StreamSearchRequest(content_type="movie"))

        assert response.missing is True
        assert response.streams == []
        assert response.total == 0

    @respx.mock
    @pytest.mark.asyncio()
    async def test_token_expired(self, client: HttpxOrionoidClient) -> None:
        respx.post(_API).respond(json=_error("apitokenexpired", "Token Expired", "Renew"))

        with pytest.raises(UpstreamAuthExpired, match="credentials"):
            await client.search_streams(StreamSearchRequest(content_type="movie"))

    @respx.mock
    @pytest.mark.asyncio()
    async def test_other_api_error(self, client: HttpxOrionoidClient) -> None:
        respx.post(_API).respond(json=_error("querylimit", "Limit Reached", "Upgrade"))

        with pytest.raises(UpstreamError, match="Limit Reached") as exc_info:
            await client.search_streams(StreamSearchRequest(content_type="movie"))
        assert not isinstance(exc_info.value, UpstreamAuthExpired)

    @respx.mock
    @pytest.mark.asyncio()
    async def test_http_error(self, client: HttpxOrionoidClient) -> None:
        respx.post(_API).respond(status_code=503)

        with pytest.raises(UpstreamError, match="503"):
            await client.search_streams(StreamSearchRequest(content_type="movie"))

    @respx.mock
    @pytest.mark.asyncio()
    async def test_network_error(self, client: HttpxOrionoidClient) -> None:
        respx.post(_API).mock(side_effect=httpx.ConnectError("boom"))

        with pytest.raises(UpstreamError):
            await client.search_streams(StreamSearchRequest(content_type="movie"))

    @respx.mock
    @pytest.mark.asyncio()
    async def test_skips_entries_without_id(
        self, client: HttpxOrionoidClient, make_payload
    ) -> None:
        respx.post(_API).respond(json=_success([make_payload(id=None), make_payload()]))

        response = await client.search_streams(StreamSearchRequest(content_type="movie"))

        assert len(response.streams) == 1


class TestDownloads:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_container_download(self, client: HttpxOrionoidClient) -> None:
        route = respx.get(_API).respond(
            content=b"<nzb/>", headers={"content-type": "application/x-nzb"}
        )

        payload = await client.download_container("h" * 40)

        assert payload == b"<nzb/>"
        params = route.calls.last.request.url.params
        assert params["mode"] == "container"
        assert params["action"] == "download"
        assert params["id"] == "h" * 40

    @respx.mock
    @pytest.mark.asyncio()
    async def test_container_error_payload(self, client: HttpxOrionoidClient) -> None:
        respx.get(_API).respond(json=_error("containermissing", "Container Missing"))

        with pytest.raises(UpstreamError, match="Container Missing"):
            await client.download_container("h" * 40)

    @respx.mock
    @pytest.mark.asyncio()
    async def test_external_link(self, client: HttpxOrionoidClient) -> None:
        respx.get("https://nzb.example/file.nzb").respond(content=b"<nzb>x</nzb>")

        assert await client.download_link("https://nzb.example/file.nzb") == b"<nzb>x</nzb>"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_external_link_failure(self, client: HttpxOrionoidClient) -> None:
        respx.get("https://nzb.example/file.nzb").respond(status_code=404)

        with pytest.raises(UpstreamError, match="404"):
            await client.download_link("https://nzb.example/file.nzb")


def test_satisfies_port(client: HttpxOrionoidClient) -> None:
    assert isinstance(client, OrionoidClientPort)
