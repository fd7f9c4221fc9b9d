# tests/test_tickets.py


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_issue_and_get_ticket(client):
    r = client.post("/tickets/", json={"ticket_type": "SP"})
    assert r.status_code == 201
    number = r.json()["ticket_number"]
    assert number == "251019-SP01"

    r2 = client.get(f"/tickets/{number}")
    assert r2.status_code == 200
    data = r2.json()
    assert data["ticket_type"] == "SP"
    assert data["issue_date"] == "2025-10-19"
    assert data["issue_time"] == "09:30:00"
    assert data["attended"] is False
    assert data["abandoned"] is False
    assert data["counter_number"] is None


def test_three_general_tickets_numbered_in_order(client):
    numbers = [client.post("/tickets/", json={"ticket_type": "SG"}).json()["ticket_number"] for _ in range(3)]
    assert numbers == ["251019-SG01", "251019-SG02", "251019-SG03"]


def test_issue_outside_hours_is_forbidden(client, clock):
    clock.now = clock.now.replace(hour=18)
    r = client.post("/tickets/", json={"ticket_type": "SG"})
    assert r.status_code == 403
    assert r.json()["detail"] == "Outside service hours (7h - 17h)"


def test_issue_validation_errors(client):
    # unknown type
    r1 = client.post("/tickets/", json={"ticket_type": "XX"})
    assert r1.status_code == 422

    # missing type
    r2 = client.post("/tickets/", json={})
    assert r2.status_code == 422


def test_get_not_found_returns_404(client):
    r = client.get("/tickets/251019-SP99")
    assert r.status_code == 404
    assert r.json()["detail"] == "Ticket not found"


def test_list_returns_tickets_of_the_day(client):
    client.post("/tickets/", json={"ticket_type": "SP"})
    client.post("/tickets/", json={"ticket_type": "SE"})

    r = client.get("/tickets/")
    assert r.status_code == 200
    assert [t["ticket_number"] for t in r.json()] == ["251019-SP01", "251019-SE01"]

    r2 = client.get("/tickets/?date=2025-10-18")
    assert r2.status_code == 200
    assert r2.json() == []


def test_pending_counts(client):
    for ticket_type in ("SP", "SG", "SG", "SE"):
        client.post("/tickets/", json={"ticket_type": ticket_type})

    r = client.get("/tickets/pending")
    assert r.status_code == 200
    assert r.json() == {"SP": 1, "SG": 2, "SE": 1, "total": 4}


def test_recent_lists_called_tickets_newest_first(client, clock):
    client.post("/tickets/", json={"ticket_type": "SP"})
    client.post("/tickets/", json={"ticket_type": "SG"})
    client.post("/counters/1")

    client.post("/counters/1/call")
    clock.advance(minutes=3)
    client.post("/counters/1/finish")
    client.post("/counters/1/call")

    r = client.get("/tickets/recent")
    assert r.status_code == 200
    assert [t["ticket_number"] for t in r.json()] == ["251019-SG01", "251019-SP01"]

    r2 = client.get("/tickets/recent?limit=1")
    assert len(r2.json()) == 1


def test_discard_waiting_tickets(client):
    client.post("/tickets/", json={"ticket_type": "SG"})
    client.post("/tickets/", json={"ticket_type": "SE"})

    r = client.post("/tickets/discard")
    assert r.status_code == 200
    assert r.json() == {"date": "2025-10-19", "discarded": 2}

    assert client.get("/tickets/pending").json()["total"] == 0
    assert client.get("/tickets/251019-SG01").json()["abandoned"] is True


def test_issue_reports_position_and_estimated_wait(client):
    first = client.post("/tickets/", json={"ticket_type": "SP"}).json()
    assert first["position"] == 1
    assert first["estimated_wait_minutes"] == 15

    client.post("/tickets/", json={"ticket_type": "SG"})
    second = client.post("/tickets/", json={"ticket_type": "SP"}).json()
    assert second["ticket_number"] == "251019-SP02"
    assert second["position"] == 2
    assert second["estimated_wait_minutes"] == 30


def test_position_moves_up_as_tickets_are_called(client):
    client.post("/tickets/", json={"ticket_type": "SG"})
    client.post("/tickets/", json={"ticket_type": "SG"})
    assert client.get("/tickets/251019-SG02/position").json()["position"] == 2

    client.post("/counters/1")
    client.post("/counters/1/call")

    r = client.get("/tickets/251019-SG02/position")
    assert r.status_code == 200
    assert r.json() == {"ticket_number": "251019-SG02", "position": 1, "estimated_wait_minutes": 5.0}
    assert client.get("/tickets/251019-SG01/position").json()["position"] == 0
    assert client.get("/tickets/251019-SG09/position").status_code == 404


def test_discard_includes_ticket_being_served(client):
    client.post("/tickets/", json={"ticket_type": "SP"})
    client.post("/tickets/", json={"ticket_type": "SG"})
    client.post("/counters/1")
    client.post("/counters/1/call")

    r = client.post("/tickets/discard")
    assert r.json()["discarded"] == 2
    assert client.get("/tickets/251019-SP01").json()["abandoned"] is True
    assert client.get("/counters/1").json()["busy"] is False
