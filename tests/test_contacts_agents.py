from fastapi import testclient

from .conftest import error_fields


def test_contact_form_is_public(client):
    response = client.post(
        "/api/contacts",
        json={
            "name": "John Smith",
            "email": "John@Example.com",
            "phone": "555-0100",
            "service": "Business Tax",
            "message": "Need help with quarterly filings.",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["contact"]["email"] == "john@example.com"
    assert body["contact"]["createdAt"]


def test_contact_form_validation(client):
    response = client.post("/api/contacts", json={"name": "", "email": "not-an-email"})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid request data"
    assert {"name", "email"} <= error_fields(response)


def test_contact_list_is_admin_only(client, admin_client):
    client.post("/api/contacts", json={"name": "First", "email": "first@example.com"})
    client.post("/api/contacts", json={"name": "Second", "email": "second@example.com"})

    assert client.get("/api/contacts").status_code == 401

    listed = admin_client.get("/api/contacts").json()
    assert [c["name"] for c in listed] == ["Second", "First"]


def test_agents_are_seeded_in_display_order(client):
    agents = client.get("/api/agents").json()

    assert [a["name"] for a in agents] == ["Sandy", "AI Tax Agent", "Jennifer Constantino"]
    assert agents[0]["imageUrl"].startswith("https://")
    assert "CPA" in agents[0]["credentials"]


def test_agents_are_not_reseeded_on_restart(app, client):
    # Entering a second client runs startup again
    with testclient.TestClient(app) as second:
        assert len(second.get("/api/agents").json()) == 3


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_contact_form_rejects_blank_email_and_name(client):
    response = client.post("/api/contacts", json={"name": "   ", "email": ""})

    assert response.status_code == 400
    assert {"name", "email"} <= error_fields(response)
