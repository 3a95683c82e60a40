from .conftest import error_fields

SUBMISSION = {
    "clientName": "Maria Lopez",
    "clientEmail": "maria@example.com",
    "rating": 5,
    "testimonialText": "Got my refund in record time.",
    "service": "Individual Tax Preparation",
}


def submit(client, **overrides):
    response = client.post("/api/testimonials", json={**SUBMISSION, **overrides})
    assert response.status_code == 200, response.text
    return response.json()["testimonial"]


def test_submission_starts_unapproved_and_unfeatured(client):
    testimonial = submit(client, approved=True, featured=True)
    assert testimonial["approved"] is False
    assert testimonial["featured"] is False


def test_rating_out_of_range_is_rejected(client):
    for rating in (0, 6):
        response = client.post("/api/testimonials", json={**SUBMISSION, "rating": rating})
        assert response.status_code == 400
        assert "rating" in error_fields(response)


def test_public_listing_never_includes_unapproved(client, admin_client):
    pending = submit(client, clientName="Pending")
    approved = submit(client, clientName="Approved")
    admin_client.patch(f"/api/testimonials/{approved['id']}/approve")

    for query in ("", "?approved=false", "?approved=true", "?approved=anything"):
        listed = client.get(f"/api/testimonials{query}").json()
        assert [t["id"] for t in listed] == [approved["id"]]
        assert pending["id"] not in {t["id"] for t in listed}


def test_admin_can_filter_by_approval(client, admin_client):
    pending = submit(client)
    approved = submit(client)
    admin_client.patch(f"/api/testimonials/{approved['id']}/approve")

    assert [t["id"] for t in admin_client.get("/api/testimonials?approved=false").json()] == [
        pending["id"]
    ]
    assert [t["id"] for t in admin_client.get("/api/testimonials?approved=true").json()] == [
        approved["id"]
    ]
    assert len(admin_client.get("/api/testimonials").json()) == 2


def test_feature_flag_is_independent_of_approval(client, admin_client):
    testimonial = submit(client)

    featured = admin_client.patch(
        f"/api/testimonials/{testimonial['id']}/feature", json={"featured": True}
    )
    assert featured.status_code == 200
    assert featured.json()["featured"] is True
    assert featured.json()["approved"] is False

    unfeatured = admin_client.patch(
        f"/api/testimonials/{testimonial['id']}/feature", json={"featured": False}
    )
    assert unfeatured.json()["featured"] is False


def test_moderation_requires_admin_and_existing_ids(client, admin_client):
    testimonial = submit(client)

    assert client.patch(f"/api/testimonials/{testimonial['id']}/approve").status_code == 401
    assert admin_client.patch("/api/testimonials/missing/approve").status_code == 404
    assert (
        admin_client.patch("/api/testimonials/missing/feature", json={"featured": True}).status_code
        == 404
    )


def test_submission_rejects_blank_email_and_name(client):
    response = client.post(
        "/api/testimonials", json={**SUBMISSION, "clientEmail": "", "clientName": "  "}
    )

    assert response.status_code == 400
    assert {"clientEmail", "clientName"} <= error_fields(response)
