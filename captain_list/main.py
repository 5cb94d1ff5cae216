from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .config import Settings, get_settings
from .services.upstream import UpstreamClient, UpstreamError, build_http_client

from .api.captains import router as captains_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    if settings is None:
        settings = get_settings()

    # --- Shared upstream client (one pool for every request) ---
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = build_http_client(settings, transport=transport)
        app.state.upstream = UpstreamClient(client, settings.captain_api_url)
        logger.info(
            "Serving captain list for roomid=%s ruid=%s on %s",
            settings.room_id,
            settings.owner_id,
            settings.local_url,
        )
        try:
            yield
        finally:
            await app.state.upstream.aclose()

    app = FastAPI(title="Captain List", lifespan=lifespan)
    app.state.settings = settings

    # --- Upstream failures -> plain 500 ---
    # Transport, status and decode errors all look the same to the caller.
    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError) -> PlainTextResponse:
        logger.error("Returning internal server error for %s", exc)
        return PlainTextResponse(str(exc), status_code=500)

    app.include_router(captains_router)

    return app


def run() -> None:
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, str(settings.log_level).upper(), logging.INFO))
    import uvicorn

    # The factory re-reads settings through the cached get_settings().
    uvicorn.run(
        "captain_list.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )
