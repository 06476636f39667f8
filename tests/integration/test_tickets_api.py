def _checkout(client, event_id="event-1", price=25):
    res = client.post("/api/checkout", json={"eventId": event_id, "userId": "user-6", "price": price})
    assert res.status_code == 200
    return res.json()["sessionId"]


def test_confirm_issues_ticket_once(client):
    session_id = _checkout(client, "event-2", 50)

    first = client.post("/api/tickets/confirm", params={"session_id": session_id})
    assert first.status_code == 200
    data = first.json()
    assert data["success"] is True
    assert data["created"] is True
    assert data["ticket"]["eventId"] == "event-2"
    assert data["ticket"]["sessionId"] == session_id

    second = client.post("/api/tickets/confirm", json={"session_id": session_id})
    assert second.status_code == 200
    assert second.json()["created"] is False
    assert second.json()["ticket"]["id"] == data["ticket"]["id"]


def test_confirm_requires_session_id(client):
    res = client.post("/api/tickets/confirm")
    assert res.status_code == 400
    assert res.json() == {"error": "Missing session ID"}


def test_list_tickets_for_user(client):
    session_id = _checkout(client)
    client.post("/api/tickets/confirm", params={"session_id": session_id})

    res = client.get("/api/tickets", params={"userId": "user-6"})
    assert res.status_code == 200
    tickets = res.json()["tickets"]
    assert tickets[0]["sessionId"] == session_id
    assert "ticket-3" in [t["id"] for t in tickets]


def test_list_tickets_requires_user(client):
    res = client.get("/api/tickets")
    assert res.status_code == 400
    assert res.json() == {"error": "Missing userId"}


def test_list_tickets_for_event(client):
    res = client.get("/api/tickets", params={"eventId": "event-2"})
    assert res.status_code == 200
    assert [t["id"] for t in res.json()["tickets"]] == ["ticket-5", "ticket-4"]
