from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..models import CaptainEntry
from .upstream import UpstreamClient

logger = logging.getLogger(__name__)


async def collect_captains(upstream: UpstreamClient, room_id: int, owner_id: int) -> List[CaptainEntry]:
    """
    Walk every page of the roster and return the entries in upstream order.

    Order: page-1 top3 (if any), then the regular list of page 1, 2, 3, ...
    No de-duplication: a user in both top3 and the regular list appears twice.

    Termination: the upstream reports the highest page that has data in
    `info.page`. We keep requesting pages until the requested page number is
    above that value. There is no "has more" flag or total count, so the loop
    always makes one extra request past the last page with data. That request
    is the stop signal, not an off-by-one; do not remove it.

    Any UpstreamError aborts the whole walk; nothing collected so far is returned.
    """
    res: List[CaptainEntry] = []
    page = 1

    while True:
        result = await upstream.fetch_page(room_id, owner_id, page)

        if result.current_page < page:
            break

        # top3 is only meaningful on the first page
        if page == 1 and result.top3:
            res.extend(result.top3)

        # An empty list on a valid page does not end the walk.
        res.extend(result.entries)
        page += 1

    logger.info(
        "Collected %s captains for roomid=%s ruid=%s over %s page(s)",
        len(res),
        room_id,
        owner_id,
        page - 1,
    )
    return res


async def collect_usernames(upstream: UpstreamClient, room_id: int, owner_id: int) -> List[str]:
    return [e.username for e in await collect_captains(upstream, room_id, owner_id)]


def filter_usernames(usernames: Iterable[str], needle: Optional[str]) -> List[str]:
    """
    Case-sensitive substring filter. `None` keeps everything; so does "".
    """
    if needle is None:
        return list(usernames)
    return [u for u in usernames if needle in u]
