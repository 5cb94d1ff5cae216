from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from ..config import Settings
from ..services.captains import collect_usernames, filter_usernames
from ..services.upstream import UpstreamClient

router = APIRouter(tags=["captains"])


def get_upstream(request: Request) -> UpstreamClient:
    return request.app.state.upstream


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/", response_class=PlainTextResponse)
async def get_captain_list(
    username: Optional[str] = Query(default=None, description="Keep only usernames containing this text"),
    upstream: UpstreamClient = Depends(get_upstream),
    settings: Settings = Depends(get_app_settings),
) -> PlainTextResponse:
    """
    Full captain roster of the configured room, one username per line.

    Upstream failures are not caught here; the UpstreamError handler in
    captain_list.main turns them into a 500.
    """
    usernames = await collect_usernames(upstream, settings.room_id, settings.owner_id)
    return PlainTextResponse("\n".join(filter_usernames(usernames, username)))
