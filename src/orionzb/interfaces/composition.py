"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from orionzb.infrastructure.cache import MemoryStreamCache
from orionzb.infrastructure.orionoid import HttpxOrionoidClient
from orionzb.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Stream cache (process-long, shared by search/details/get)
        2. HTTP client
        3. Orionoid client (uses HTTP client)
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Stream cache
    state.stream_cache = MemoryStreamCache(
        ttl_seconds=config.features.cache_ttl_seconds
    )
    log.info("stream_cache_initialized", ttl_seconds=config.features.cache_ttl_seconds)

    # 2) HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
    )
    log.info("http_client_initialized", timeout_seconds=config.http_timeout_seconds)

    # 3) Orionoid client
    state.orionoid = HttpxOrionoidClient(
        http_client=state.http_client,
        app_key=config.orionoid.app_key,
        user_key=config.orionoid.user_key,
        token=config.orionoid.token,
        api_url=config.orionoid.api_url,
    )
    log.info(
        "orionoid_client_initialized",
        api_url=config.orionoid.api_url,
        auth="token" if config.orionoid.token else "keys",
    )

    log.info("app_startup_complete", base_url=config.base_url)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")
