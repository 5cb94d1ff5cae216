from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..models import CaptainEnvelope, CaptainPage, CaptainResponse

logger = logging.getLogger(__name__)

# Largest page size the upstream serves consistently.
PAGE_SIZE = 30


class UpstreamError(Exception):
    """Any failure talking to the roster endpoint."""


class UpstreamTransportError(UpstreamError):
    """The request could not be completed (timeout, connection, DNS)."""


class UpstreamStatusError(UpstreamError):
    """The upstream answered, but refused the request."""


class UpstreamDecodeError(UpstreamError):
    """The response body did not match the expected schema."""


def build_http_client(
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Shared connection pool for all requests.

    `transport` lets callers swap the network layer (httpx.MockTransport in tests).
    """
    return httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.upstream_timeout,
        transport=transport,
    )


class UpstreamClient:
    """Thin wrapper over the guardTab topList endpoint. Holds no per-request state."""

    def __init__(self, client: httpx.AsyncClient, url: str) -> None:
        self._client = client
        self._url = url

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_page(
        self,
        room_id: int,
        owner_id: int,
        page: int,
        page_size: int = PAGE_SIZE,
    ) -> CaptainPage:
        params: Dict[str, Any] = {
            "roomid": str(room_id),
            "ruid": str(owner_id),
            "page": str(page),
            "page_size": str(page_size),
        }

        try:
            r = await self._client.get(self._url, params=params)
        except httpx.RequestError as e:
            # TransportError plus the ones raised while reading the body
            # (DecodingError on a broken gzip stream, TooManyRedirects)
            raise UpstreamTransportError(f"request for page {page} failed: {e!r}") from e

        try:
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamStatusError(
                f"upstream returned HTTP {r.status_code} for page {page}"
            ) from e

        try:
            body = r.json()
            envelope = CaptainEnvelope.model_validate(body)
        except (ValueError, ValidationError) as e:
            # json decode errors are ValueError subclasses
            raise UpstreamDecodeError(f"unexpected response for page {page}: {e}") from e

        # Rejections usually carry "data": null, so check the code before the body.
        if envelope.code != 0:
            raise UpstreamStatusError(
                f"upstream rejected page {page}: code={envelope.code} message={envelope.message!r}"
            )

        try:
            payload = CaptainResponse.model_validate(body)
        except ValidationError as e:
            raise UpstreamDecodeError(f"unexpected response for page {page}: {e}") from e

        result = CaptainPage.from_response(payload)
        logger.debug(
            "Fetched page=%s current_page=%s entries=%s top3=%s",
            page,
            result.current_page,
            len(result.entries),
            "absent" if result.top3 is None else len(result.top3),
        )
        return result
