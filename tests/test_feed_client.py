import pytest
import requests

from hotel_search.clients.feed_api import HotelFeedClient
from hotel_search.errors import DataSourceError, FetchError, ValidationError
from hotel_search.models import RawHotelRecord
from hotel_search.sources import DEFAULT_SOURCES, SourceRegistry


def test_fetch_parses_records(feed_client, feed_session, fixture_rows):
    records = feed_client.fetch("proximity")

    assert [r.name for r in records] == [row[0] for row in fixture_rows]
    assert records[1] == RawHotelRecord("Hotel Ribeira", 41.1407, -8.6110, 95.0)
    assert feed_session.calls[0]["url"] == DEFAULT_SOURCES["source_1"]
    assert feed_session.calls[0]["timeout"] == 10


def test_second_fetch_is_served_from_cache(feed_client, feed_session):
    first = feed_client.fetch("proximity")
    second = feed_client.fetch("proximity")

    assert first == second
    assert len(feed_session.calls) == 1


def test_expired_cache_refetches(feed_client, feed_session, clock):
    feed_client.fetch("proximity")
    clock.advance(43200)
    feed_client.fetch("proximity")
    assert len(feed_session.calls) == 2


def test_cache_key_includes_source(feed_client, feed_session):
    feed_client.fetch("proximity")
    feed_client.fetch("proximity", SourceRegistry().select_source("source_2"))

    assert [c["url"] for c in feed_session.calls] == [
        DEFAULT_SOURCES["source_1"],
        DEFAULT_SOURCES["source_2"],
    ]


def test_missing_order_raises(feed_client):
    with pytest.raises(ValidationError) as excinfo:
        feed_client.fetch(None)
    assert excinfo.value.message == "Order is required"


@pytest.mark.parametrize(
    "payload",
    [
        {"success": False, "message": []},
        {"message": [["Hotel", 1.0, 2.0, 3.0]]},
        {"success": True, "message": "oops"},
        [],
    ],
)
def test_unsuccessful_feed_raises_no_data(make_session, cache, payload):
    client = HotelFeedClient(cache=cache, session=make_session(payload))
    with pytest.raises(DataSourceError) as excinfo:
        client.fetch("proximity")
    assert excinfo.value.message == "No data found"
    assert len(cache) == 0


def test_non_json_body_raises_no_data(make_session, cache):
    client = HotelFeedClient(cache=cache, session=make_session(body_is_json=False))
    with pytest.raises(DataSourceError):
        client.fetch("proximity")


def test_malformed_row_fails_whole_fetch(make_session, cache):
    payload = {"success": True, "message": [["Hotel A", 41.1, -8.6, 50.0], ["Hotel B", 41.2]]}
    client = HotelFeedClient(cache=cache, session=make_session(payload))
    with pytest.raises(DataSourceError):
        client.fetch("proximity")
    assert len(cache) == 0


def test_transport_error_is_wrapped(make_session, cache):
    exc = requests.ConnectionError("connection refused")
    client = HotelFeedClient(cache=cache, session=make_session(exc=exc))

    with pytest.raises(FetchError) as excinfo:
        client.fetch("proximity")
    assert "connection refused" in excinfo.value.message
    assert excinfo.value.__cause__ is exc


def test_http_error_status_is_wrapped(make_session, cache):
    client = HotelFeedClient(cache=cache, session=make_session({"success": True}, status_code=500))
    with pytest.raises(FetchError):
        client.fetch("proximity")


def test_works_without_cache(make_session, fixture_rows):
    session = make_session({"success": True, "message": fixture_rows})
    client = HotelFeedClient(session=session)
    client.fetch("proximity")
    client.fetch("proximity")
    assert len(session.calls) == 2


@pytest.mark.parametrize(
    "row",
    [
        ["Bad", "inf", -8.6, 50.0],
        ["Bad", 41.1, "-Infinity", 50.0],
        ["Bad", 41.1, -8.6, "nan"],
        ["Bad", 41.1, -8.6, float("nan")],
        ["Bad", float("inf"), -8.6, 50.0],
    ],
)
def test_non_finite_row_fails_whole_fetch(make_session, cache, fixture_rows, row):
    payload = {"success": True, "message": fixture_rows + [row]}
    client = HotelFeedClient(cache=cache, session=make_session(payload))
    with pytest.raises(DataSourceError) as excinfo:
        client.fetch("proximity")
    assert excinfo.value.message == "No data found"
    assert len(cache) == 0
