"""
Pytest configuration and fixtures for captain list tests.
"""
import httpx
import pytest

from captain_list.config import Settings
from captain_list.main import create_app
from tests.helpers import OWNER_ID, ROOM_ID


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        LOCAL_URL="127.0.0.1:3000",
        ROOMID=ROOM_ID,
        RUID=OWNER_ID,
        CAPTAIN_API_URL="https://upstream.test/guardTab/topList",
    )


@pytest.fixture
def make_app(settings):
    """Build the app with the given MockTransport handler as the upstream."""

    def _make(handler):
        return create_app(settings, transport=httpx.MockTransport(handler))

    return _make
