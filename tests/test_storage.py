from datetime import datetime, timedelta

from expertax.models import utcnow
from expertax.storage.seed import DEFAULT_AGENTS, seed_agents


def test_seeding_runs_once(storage):
    assert seed_agents(storage) == len(DEFAULT_AGENTS)
    assert seed_agents(storage) == 0
    assert storage.count_agents() == len(DEFAULT_AGENTS)


def test_agents_follow_roster_order_regardless_of_insertion(storage):
    for name in ["Jennifer Constantino", "Newcomer", "Sandy", "AI Tax Agent"]:
        storage.create_agent(
            name=name, title="Agent", bio="Bio", email=f"{name[:3]}@example.com", image_url="https://example.com/a.jpg"
        )

    names = [agent.name for agent in storage.get_agents()]

    assert names == ["Sandy", "AI Tax Agent", "Jennifer Constantino", "Newcomer"]
    assert seed_agents(storage) == 0


def test_sessions_expire(storage):
    storage.create_session("live", {"user_id": "u1"}, utcnow() + timedelta(hours=1))
    storage.create_session("stale", {"user_id": "u2"}, utcnow() - timedelta(seconds=1))

    assert storage.get_session("live") == {"user_id": "u1"}
    assert storage.get_session("stale") is None

    storage.delete_session("live")
    assert storage.get_session("live") is None


def test_appointment_defaults(storage):
    appointment = storage.create_appointment(
        client_name="Jane Doe",
        client_email="jane@example.com",
        service="Individual Tax Preparation",
        appointment_date=datetime(2025, 4, 1, 14, 0),
    )

    assert appointment.duration == 60
    assert appointment.status == "pending"
    assert appointment.agent_id is None
    assert storage.get_appointment(appointment.id).client_name == "Jane Doe"


def test_mutators_return_none_for_unknown_ids(storage):
    assert storage.update_appointment_status("missing", "confirmed") is None
    assert storage.update_document_status("missing", "reviewed") is None
    assert storage.update_blog_post("missing", title="New") is None
    assert storage.publish_blog_post("missing") is None
    assert storage.approve_testimonial("missing") is None
    assert storage.feature_testimonial("missing", True) is None


def test_publish_keeps_first_publication_time(storage):
    post = storage.create_blog_post(
        title="Estimated Taxes 101",
        slug="estimated-taxes-101",
        excerpt="Quarterly payments explained.",
        content="...",
        category="planning",
        published=False,
    )

    first = storage.publish_blog_post(post.id)
    second = storage.publish_blog_post(post.id)

    assert first.published is True
    assert second.published_at == first.published_at
    assert [p.id for p in storage.get_blog_posts(published=True)] == [post.id]
    assert storage.get_blog_posts(published=False) == []


def test_documents_filtered_by_owner(storage):
    for email in ["alice@example.com", "bob@example.com", "alice@example.com"]:
        storage.create_document(
            client_email=email,
            file_name="w2.pdf",
            file_url="key.pdf",
            file_size=10,
            document_type="w2",
        )

    documents = storage.get_documents_by_client("alice@example.com")

    assert len(documents) == 2
    assert all(d.client_email == "alice@example.com" for d in documents)
    assert all(d.status == "uploaded" for d in documents)


def test_testimonial_approval_filter(storage):
    kept = storage.create_testimonial(
        client_name="A", client_email="a@example.com", rating=5, testimonial_text="Great"
    )
    storage.create_testimonial(
        client_name="B", client_email="b@example.com", rating=4, testimonial_text="Good"
    )

    storage.approve_testimonial(kept.id)

    assert [t.id for t in storage.get_testimonials(approved=True)] == [kept.id]
    assert len(storage.get_testimonials(approved=False)) == 1
    assert len(storage.get_testimonials()) == 2


def test_same_timestamp_orders_by_id_in_both_backends(storage, monkeypatch):
    frozen = datetime(2025, 1, 15, 9, 30)
    monkeypatch.setattr("expertax.storage.memory.utcnow", lambda: frozen)
    monkeypatch.setattr("expertax.storage.database.utcnow", lambda: frozen)

    created = [
        storage.create_contact(name=f"Lead {n}", email=f"lead{n}@example.com") for n in range(5)
    ]

    listed = [contact.id for contact in storage.get_contacts()]

    assert listed == sorted((contact.id for contact in created), reverse=True)
