"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response

from orionzb.infrastructure.config import AppConfig
from orionzb.interfaces.app_state import AppState
from orionzb.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, Orionoid client, stream cache) are created in lifespan().
    """
    app = FastAPI(
        title=config.newznab.server_name,
        description=config.newznab.server_description,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    # Browser-based indexer tools call /api cross-origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    from orionzb.interfaces.api.newznab import router as newznab_router

    app.include_router(newznab_router.router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe; returns 200 as long as the process is running."""
        return {"status": "ok", "service": config.app_name}

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            # apikey stays out of the logs.
            query = "&".join(
                f"{k}={v}" for k, v in request.query_params.multi_items() if k != "apikey"
            )
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=query,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000.0, 2),
                client=request.client.host if request.client else None,
            )

    return app
