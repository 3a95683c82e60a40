from .conftest import bearer, error_fields

BOOKING = {
    "clientName": "Jane Doe",
    "clientEmail": "jane@example.com",
    "service": "Individual Tax Preparation",
    "appointmentDate": "2025-04-01T14:00:00Z",
}


def book(client, **overrides):
    response = client.post("/api/appointments", json={**BOOKING, **overrides})
    assert response.status_code == 200, response.text
    return response.json()["appointment"]


def test_booking_defaults_to_pending_sixty_minutes_no_agent(client):
    response = client.post("/api/appointments", json=BOOKING)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    appointment = body["appointment"]
    assert appointment["status"] == "pending"
    assert appointment["duration"] == 60
    assert appointment["agentId"] is None
    assert appointment["source"] == "local"
    assert appointment["appointmentDate"].startswith("2025-04-01T14:00:00")


def test_any_agent_means_no_preference(client):
    appointment = book(client, agentId="any")
    assert appointment["agentId"] is None


def test_explicit_status_and_duration_are_kept(client):
    appointment = book(client, status="confirmed", duration=30, agentId="agent-1")
    assert appointment["status"] == "confirmed"
    assert appointment["duration"] == 30
    assert appointment["agentId"] == "agent-1"


def test_booking_requires_valid_email_service_and_date(client):
    response = client.post(
        "/api/appointments",
        json={**BOOKING, "clientEmail": "not-an-email", "service": "  ", "appointmentDate": "soon"},
    )
    assert response.status_code == 400
    assert {"clientEmail", "service", "appointmentDate"} <= error_fields(response)


def test_booking_rejects_unknown_status(client):
    response = client.post("/api/appointments", json={**BOOKING, "status": "archived"})
    assert response.status_code == 400
    assert "status" in error_fields(response)


def test_listing_requires_admin(client):
    assert client.get("/api/appointments").status_code == 401
    assert client.get("/api/appointments", headers=bearer("token-alice")).status_code == 403


def test_admin_lists_appointments_newest_first(admin_client):
    first = book(admin_client, clientName="First")
    second = book(admin_client, clientName="Second")

    response = admin_client.get("/api/appointments")

    assert response.status_code == 200
    ids = [a["id"] for a in response.json()]
    assert ids == [second["id"], first["id"]]


def test_agent_appointments_latest_date_first(admin_client):
    early = book(admin_client, agentId="agent-1", appointmentDate="2025-03-01T09:00:00Z")
    late = book(admin_client, agentId="agent-1", appointmentDate="2025-05-01T09:00:00Z")
    book(admin_client, agentId="agent-2")

    response = admin_client.get("/api/appointments/agent/agent-1")

    assert [a["id"] for a in response.json()] == [late["id"], early["id"]]


def test_status_moves_freely_between_values(admin_client):
    appointment = book(admin_client)

    for status in ["completed", "pending", "cancelled", "confirmed"]:
        response = admin_client.patch(
            f"/api/appointments/{appointment['id']}/status", json={"status": status}
        )
        assert response.status_code == 200
        assert response.json()["status"] == status


def test_status_update_validation_and_missing_ids(admin_client):
    appointment = book(admin_client)

    bad = admin_client.patch(f"/api/appointments/{appointment['id']}/status", json={"status": "done"})
    assert bad.status_code == 400

    missing = admin_client.patch("/api/appointments/nope/status", json={"status": "confirmed"})
    assert missing.status_code == 404


def test_status_update_refuses_calendly_appointments(admin_client):
    appointment = book(admin_client)

    response = admin_client.patch(
        f"/api/appointments/{appointment['id']}/status",
        json={"status": "cancelled", "source": "calendly"},
    )

    assert response.status_code == 400
    listed = admin_client.get("/api/appointments").json()
    assert listed[0]["status"] == "pending"


def test_status_update_requires_admin(client):
    appointment = book(client)
    response = client.patch(
        f"/api/appointments/{appointment['id']}/status", json={"status": "confirmed"}
    )
    assert response.status_code == 401


def test_booking_rejects_blank_email_and_name(client):
    response = client.post(
        "/api/appointments", json={**BOOKING, "clientEmail": "", "clientName": "   "}
    )

    assert response.status_code == 400
    assert {"clientEmail", "clientName"} <= error_fields(response)


def test_booking_stores_trimmed_name(client):
    appointment = book(client, clientName="  Jane Doe  ")
    assert appointment["clientName"] == "Jane Doe"
