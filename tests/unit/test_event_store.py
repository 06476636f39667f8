import pytest
from unittest.mock import MagicMock
from postgrest.exceptions import APIError

from indieevent.errors import EventNotFound, InvalidRequest, LookupFailed
from indieevent.events.repository import InMemoryEventStore, SupabaseEventStore, normalize_event


def test_in_memory_get_event_exposes_id_title_price(event_store):
    event = event_store.get_event("event-1")
    assert event["id"] == "event-1"
    assert event["title"] == "Startup Pitch Practice"
    assert event["price"] == 25.0
    assert event["host"]["id"] == "user-1"


def test_in_memory_get_event_not_found(event_store):
    with pytest.raises(EventNotFound):
        event_store.get_event("event-42")


def test_get_event_requires_id(event_store):
    with pytest.raises(InvalidRequest):
        event_store.get_event("")


def test_list_upcoming_sorted_and_limited(event_store):
    items = event_store.list_upcoming()
    assert [e["id"] for e in items] == ["event-1", "event-2", "event-3", "event-4", "event-5"]
    assert [e["id"] for e in event_store.list_upcoming(limit=2)] == ["event-1", "event-2"]


def test_featured_falls_back_to_first_upcoming():
    store = InMemoryEventStore(events=[
        {"id": "b", "title": "B", "startTime": "2030-01-02T00:00:00Z", "status": "upcoming", "price": 5},
        {"id": "a", "title": "A", "startTime": "2030-01-01T00:00:00Z", "status": "upcoming", "price": 5},
    ])
    assert store.get_featured()["id"] == "a"
    assert InMemoryEventStore(events=[]).get_featured() is None


def test_filter_events_by_industry_and_price(event_store):
    business = event_store.filter_events(industry="Business")
    assert {e["id"] for e in business} == {"event-1", "event-5"}
    mid_range = event_store.filter_events(min_price=30, max_price=40)
    assert {e["id"] for e in mid_range} == {"event-3", "event-4", "event-5"}


def test_filter_events_by_dates():
    store = InMemoryEventStore(events=[
        {"id": "jan", "startTime": "2030-01-10T10:00:00Z", "status": "upcoming", "price": 10},
        {"id": "feb", "startTime": "2030-02-10T10:00:00Z", "status": "upcoming", "price": 10},
    ])
    assert [e["id"] for e in store.filter_events(start_date="2030-02-01")] == ["feb"]
    assert [e["id"] for e in store.filter_events(end_date="2030-01-31T23:59:59Z")] == ["jan"]
    with pytest.raises(InvalidRequest):
        store.filter_events(start_date="not-a-date")


def test_list_by_host(event_store):
    assert [e["id"] for e in event_store.list_by_host("user-2")] == ["event-2"]


def test_normalize_supabase_row():
    event = normalize_event({
        "id": 7, "title": "Live Q&A", "price": "19.90", "start_time": "2030-01-01T10:00:00Z",
        "host_id": "h1", "max_attendees": 20, "room_url": "https://rooms.test/abc",
    })
    assert event["id"] == "7"
    assert event["price"] == 19.9
    assert event["startTime"] == "2030-01-01T10:00:00Z"
    assert event["hostId"] == "h1"
    assert event["maxAttendees"] == 20
    assert event["roomUrl"] == "https://rooms.test/abc"
    assert normalize_event({"id": "x", "price": "n/a"})["price"] is None


def _client_returning(rows):
    client = MagicMock()
    query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
    query.execute.return_value = MagicMock(data=rows)
    return client


def test_supabase_get_event():
    client = _client_returning([{"id": "e1", "title": "Remote workshop", "price": 15}])
    store = SupabaseEventStore(client_factory=lambda: client)
    event = store.get_event("e1")
    assert event["title"] == "Remote workshop"
    assert event["price"] == 15.0
    client.table.assert_called_with("events")
    client.table.return_value.select.return_value.eq.assert_called_with("id", "e1")


def test_supabase_no_row_is_not_found():
    store = SupabaseEventStore(client_factory=lambda: _client_returning([]))
    with pytest.raises(EventNotFound):
        store.get_event("missing")


def test_supabase_api_error_is_lookup_failed():
    client = MagicMock()
    client.table.return_value.select.return_value.eq.return_value.limit.return_value.execute.side_effect = APIError(
        {"message": "connection refused", "code": "500", "hint": None, "details": None}
    )
    store = SupabaseEventStore(client_factory=lambda: client)
    with pytest.raises(LookupFailed) as exc:
        store.get_event("e1")
    assert exc.value.status_code == 500


def test_supabase_unconfigured_client_is_lookup_failed():
    def no_client():
        raise RuntimeError("SUPABASE_URL/SUPABASE_KEY manquants pour get_supabase()")

    with pytest.raises(LookupFailed):
        SupabaseEventStore(client_factory=no_client).get_event("e1")
