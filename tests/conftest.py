import pytest
import requests

from hotel_search.cache import ResponseCache
from hotel_search.clients.feed_api import HotelFeedClient
from hotel_search.clients.static_feed import StaticFeedClient
from hotel_search.search import SearchService
from hotel_search.sources import SourceRegistry

FIXTURE_ROWS = [
    ["Hotel Lisboa Centro", 38.7223, -9.1393, 120.0],
    ["Hotel Ribeira", 41.1407, -8.6110, 95.0],
    ["Hotel Matosinhos", 41.1844, -8.6963, 60.0],
]


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200, body_is_json: bool = True):
        self.payload = payload
        self.status_code = status_code
        self.body_is_json = body_is_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if not self.body_is_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, response=None, exc: Exception = None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def fixture_rows():
    return FIXTURE_ROWS


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> ResponseCache:
    return ResponseCache(clock=clock)


@pytest.fixture
def make_session():
    def _make(payload=None, status_code=200, body_is_json=True, exc=None):
        return FakeSession(FakeResponse(payload, status_code, body_is_json), exc=exc)
    return _make


@pytest.fixture
def feed_session() -> FakeSession:
    return FakeSession(FakeResponse({"success": True, "message": FIXTURE_ROWS}))


@pytest.fixture
def feed_client(feed_session, cache) -> HotelFeedClient:
    return HotelFeedClient(registry=SourceRegistry(), cache=cache, session=feed_session)


@pytest.fixture
def static_service() -> SearchService:
    client = StaticFeedClient({
        "source_1": FIXTURE_ROWS,
        "source_2": [
            ["Free Stay Hostel", 41.1579, -8.6291, 0.0],
            ["Hotel Boavista", 41.1579, -8.6400, 80.0],
        ],
        "extra": [["Extra Hotel", 41.15, -8.62, 50.0]],
    })
    return SearchService(client=client, registry=SourceRegistry())
