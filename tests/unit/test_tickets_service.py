import pytest
from unittest.mock import MagicMock

from indieevent.errors import InvalidRequest, LookupFailed, PaymentNotCompleted, ProviderError
from indieevent.payments.gateways import PaymentGateway
from indieevent.tickets.repository import InMemoryTicketStore, SupabaseTicketStore
from indieevent.tickets.service import confirm_purchase, list_event_tickets, list_user_tickets


class StaticGateway(PaymentGateway):
    mode = "live"

    def __init__(self, session):
        self.session = session

    def retrieve_session(self, session_id):
        return dict(self.session, id=session_id)


def _paid(**meta):
    return {"status": "complete", "amount_total": 3500,
            "metadata": meta or {"eventId": "event-3", "userId": "user-9"}}


def test_confirm_issues_ticket_once():
    store = InMemoryTicketStore(tickets=[])
    gw = StaticGateway(_paid())

    first = confirm_purchase("cs_paid", gateway=gw, tickets=store)
    second = confirm_purchase("cs_paid", gateway=gw, tickets=store)

    assert first["created"] is True
    assert second["created"] is False
    assert second["ticket"]["id"] == first["ticket"]["id"]
    ticket = first["ticket"]
    assert ticket["eventId"] == "event-3"
    assert ticket["userId"] == "user-9"
    assert ticket["sessionId"] == "cs_paid"
    assert ticket["price"] == 35.0
    assert ticket["status"] == "confirmed"
    assert len(store.list_by_user("user-9")) == 1


def test_confirm_refuses_open_session():
    gw = StaticGateway({"status": "open", "amount_total": 3500, "metadata": {"eventId": "e", "userId": "u"}})
    with pytest.raises(PaymentNotCompleted) as exc:
        confirm_purchase("cs_open", gateway=gw, tickets=InMemoryTicketStore(tickets=[]))
    assert exc.value.status_code == 409
    assert "status=open" in exc.value.message


def test_confirm_requires_metadata():
    gw = StaticGateway({"status": "complete", "amount_total": 100, "metadata": {}})
    with pytest.raises(ProviderError):
        confirm_purchase("cs_bare", gateway=gw, tickets=InMemoryTicketStore(tickets=[]))


def test_confirm_requires_session_id():
    with pytest.raises(InvalidRequest):
        confirm_purchase("", gateway=StaticGateway(_paid()), tickets=InMemoryTicketStore(tickets=[]))


def test_list_user_tickets_from_sample_data():
    tickets = list_user_tickets("user-1", tickets=InMemoryTicketStore())
    assert [t["id"] for t in tickets] == ["ticket-8", "ticket-4"]
    with pytest.raises(InvalidRequest):
        list_user_tickets(" ", tickets=InMemoryTicketStore())


def test_supabase_ticket_store_create_maps_columns():
    client = MagicMock()
    client.table.return_value.insert.return_value.execute.return_value = MagicMock(data=[{
        "id": 42, "event_id": "event-1", "user_id": "u1", "session_id": "cs_1",
        "price": 25, "status": "confirmed", "purchased_at": "2030-01-01T00:00:00+00:00",
    }])
    store = SupabaseTicketStore(client_factory=lambda: client)
    ticket = store.create({
        "eventId": "event-1", "userId": "u1", "sessionId": "cs_1", "price": 25.0,
        "status": "confirmed", "purchasedAt": "2030-01-01T00:00:00+00:00",
    })
    assert ticket["id"] == "42"
    assert ticket["sessionId"] == "cs_1"
    inserted = client.table.return_value.insert.call_args.args[0]
    assert inserted["event_id"] == "event-1"
    assert inserted["session_id"] == "cs_1"


def test_supabase_ticket_store_errors_are_lookup_failed():
    client = MagicMock()
    client.table.return_value.select.return_value.eq.return_value.order.return_value.execute.side_effect = Exception("timeout")
    with pytest.raises(LookupFailed):
        SupabaseTicketStore(client_factory=lambda: client).list_by_user("u1")


def test_list_event_tickets_from_sample_data():
    tickets = list_event_tickets("event-1", tickets=InMemoryTicketStore())
    assert [t["id"] for t in tickets] == ["ticket-3", "ticket-2", "ticket-1"]
    with pytest.raises(InvalidRequest):
        list_event_tickets("", tickets=InMemoryTicketStore())


def test_supabase_ticket_store_list_by_event():
    client = MagicMock()
    query = client.table.return_value.select.return_value.eq.return_value.order.return_value
    query.execute.return_value = MagicMock(data=[{"id": 7, "event_id": "event-2", "user_id": "u1", "price": 50}])

    tickets = SupabaseTicketStore(client_factory=lambda: client).list_by_event("event-2")

    assert tickets[0]["id"] == "7"
    assert tickets[0]["eventId"] == "event-2"
    client.table.return_value.select.return_value.eq.assert_called_once_with("event_id", "event-2")
