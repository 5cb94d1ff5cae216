"""
Shared test doubles for the roster upstream.
"""
from typing import Callable, Dict, List, Optional

import httpx

from captain_list.models import CaptainEntry, CaptainPage

ROOM_ID = 21452505
OWNER_ID = 434334701


def entries(*names: str) -> List[CaptainEntry]:
    return [CaptainEntry(username=n) for n in names]


def page_payload(current_page: int, names: List[str], top3: Optional[List[str]] = None) -> dict:
    """Body shaped like the real guardTab topList response."""
    data = {
        "info": {"num": 0, "page": current_page, "now": current_page, "achievement_level": 1},
        "list": [{"uid": i, "username": n, "guard_level": 3} for i, n in enumerate(names)],
    }
    if top3 is not None:
        data["top3"] = [{"uid": 1000 + i, "username": n, "guard_level": 2} for i, n in enumerate(top3)]
    return {"code": 0, "message": "0", "ttl": 1, "data": data}


class FakeUpstream:
    """
    Stands in for UpstreamClient. `pages` maps page number to either a
    CaptainPage or an exception to raise. Pages past the last key report
    the last page as current, like the real endpoint.
    """

    def __init__(self, pages: Dict[int, object]) -> None:
        self.pages = pages
        self.calls: List[int] = []

    async def fetch_page(self, room_id, owner_id, page, page_size=30):
        self.calls.append(page)
        result = self.pages.get(page)
        if result is None:
            return CaptainPage(current_page=max(self.pages), entries=[])
        if isinstance(result, Exception):
            raise result
        return result


class RosterUpstream:
    """
    httpx.MockTransport handler serving a roster. `pages` maps page number
    to (names, top3); `status` maps page number to a forced HTTP status.
    """

    def __init__(
        self,
        pages: Dict[int, tuple],
        status: Optional[Dict[int, int]] = None,
        fail: Optional[Callable[[httpx.Request], None]] = None,
    ) -> None:
        self.pages = pages
        self.status = status or {}
        self.fail = fail
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail is not None:
            self.fail(request)

        page = int(request.url.params["page"])
        if page in self.status:
            return httpx.Response(self.status[page], text="blocked")

        last = max(self.pages) if self.pages else 0
        if page not in self.pages:
            return httpx.Response(200, json=page_payload(last, []))

        names, top3 = self.pages[page]
        return httpx.Response(200, json=page_payload(page, names, top3))

