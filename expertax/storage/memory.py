"""In-process storage for running without a provisioned database"""

import logging
from datetime import datetime
from typing import Optional

from ..models import (
    Agent,
    Appointment,
    BlogPost,
    Contact,
    Document,
    Testimonial,
    User,
    generate_id,
    utcnow,
)
from .base import Storage, order_agents

logger = logging.getLogger(__name__)


def _newest_first(records: list, attribute: str = "created_at") -> list:
    # Ties on the timestamp fall back to id, matching the database ordering
    return sorted(records, key=lambda record: (getattr(record, attribute), record.id), reverse=True)


def _find(records: list, record_id: str):
    return next((record for record in records if record.id == record_id), None)


class MemoryStorage(Storage):
    """
    Plain lists per entity. Single-instance development mode only: nothing is
    locked and everything is lost on restart.
    """

    def __init__(self):
        self.users: list[User] = []
        self.sessions: dict[str, tuple[dict, datetime]] = {}
        self.contacts: list[Contact] = []
        self.agents: list[Agent] = []
        self.appointments: list[Appointment] = []
        self.documents: list[Document] = []
        self.blog_posts: list[BlogPost] = []
        self.testimonials: list[Testimonial] = []

    # Users
    def get_user(self, user_id: str) -> Optional[User]:
        return _find(self.users, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users if u.email == email), None)

    def create_user(self, **user_data) -> User:
        now = utcnow()
        user = User(
            id=generate_id(),
            username=user_data["username"],
            email=user_data["email"],
            password=user_data["password"],
            first_name=user_data.get("first_name"),
            last_name=user_data.get("last_name"),
            role=user_data.get("role") or "admin",
            created_at=now,
            updated_at=now,
        )
        self.users.append(user)
        return user

    # Sessions
    def _prune_sessions(self) -> None:
        now = utcnow()
        for sid in [sid for sid, (_, expire) in self.sessions.items() if expire <= now]:
            del self.sessions[sid]

    def create_session(self, sid: str, data: dict, expire: datetime) -> None:
        self._prune_sessions()
        self.sessions[sid] = (dict(data), expire)

    def get_session(self, sid: str) -> Optional[dict]:
        entry = self.sessions.get(sid)
        if not entry:
            return None
        data, expire = entry
        if expire <= utcnow():
            del self.sessions[sid]
            return None
        return dict(data)

    def delete_session(self, sid: str) -> None:
        self.sessions.pop(sid, None)

    # Contacts
    def create_contact(self, **contact_data) -> Contact:
        contact = Contact(
            id=generate_id(),
            name=contact_data["name"],
            email=contact_data["email"],
            phone=contact_data.get("phone"),
            service=contact_data.get("service"),
            message=contact_data.get("message"),
            created_at=utcnow(),
        )
        self.contacts.append(contact)
        return contact

    def get_contacts(self) -> list[Contact]:
        return _newest_first(self.contacts)

    # Agents
    def create_agent(self, **agent_data) -> Agent:
        agent = Agent(
            id=generate_id(),
            name=agent_data["name"],
            title=agent_data["title"],
            bio=agent_data["bio"],
            email=agent_data["email"],
            image_url=agent_data["image_url"],
            credentials=list(agent_data.get("credentials") or []),
            created_at=utcnow(),
        )
        self.agents.append(agent)
        return agent

    def get_agents(self) -> list[Agent]:
        return order_agents(sorted(self.agents, key=lambda agent: (agent.created_at, agent.id)))

    def count_agents(self) -> int:
        return len(self.agents)

    # Appointments
    def create_appointment(self, **appointment_data) -> Appointment:
        appointment = Appointment(
            id=generate_id(),
            client_name=appointment_data["client_name"],
            client_email=appointment_data["client_email"],
            client_phone=appointment_data.get("client_phone"),
            service=appointment_data["service"],
            agent_id=appointment_data.get("agent_id"),
            appointment_date=appointment_data["appointment_date"],
            duration=appointment_data.get("duration") or 60,
            status=appointment_data.get("status") or "pending",
            notes=appointment_data.get("notes"),
            created_at=utcnow(),
        )
        self.appointments.append(appointment)
        return appointment

    def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return _find(self.appointments, appointment_id)

    def get_appointments(self) -> list[Appointment]:
        return _newest_first(self.appointments)

    def get_appointments_by_agent(self, agent_id: str) -> list[Appointment]:
        matching = [a for a in self.appointments if a.agent_id == agent_id]
        return _newest_first(matching, "appointment_date")

    def update_appointment_status(self, appointment_id: str, status: str) -> Optional[Appointment]:
        appointment = _find(self.appointments, appointment_id)
        if appointment:
            appointment.status = status
        return appointment

    # Documents
    def create_document(self, **document_data) -> Document:
        document = Document(
            id=generate_id(),
            client_email=document_data["client_email"],
            file_name=document_data["file_name"],
            file_url=document_data["file_url"],
            file_size=document_data["file_size"],
            document_type=document_data["document_type"],
            status=document_data.get("status") or "uploaded",
            uploaded_at=utcnow(),
        )
        self.documents.append(document)
        return document

    def get_document(self, document_id: str) -> Optional[Document]:
        return _find(self.documents, document_id)

    def get_documents_by_client(self, client_email: str) -> list[Document]:
        owned = [d for d in self.documents if d.client_email == client_email]
        return _newest_first(owned, "uploaded_at")

    def update_document_status(self, document_id: str, status: str) -> Optional[Document]:
        document = _find(self.documents, document_id)
        if document:
            document.status = status
        return document

    # Blog
    def create_blog_post(self, **post_data) -> BlogPost:
        now = utcnow()
        post = BlogPost(
            id=generate_id(),
            title=post_data["title"],
            slug=post_data["slug"],
            excerpt=post_data["excerpt"],
            content=post_data["content"],
            category=post_data["category"],
            author_id=post_data.get("author_id"),
            published=bool(post_data.get("published", False)),
            published_at=post_data.get("published_at"),
            created_at=now,
            updated_at=now,
        )
        self.blog_posts.append(post)
        return post

    def get_blog_post(self, post_id: str) -> Optional[BlogPost]:
        return _find(self.blog_posts, post_id)

    def get_blog_posts(self, published: Optional[bool] = None) -> list[BlogPost]:
        posts = self.blog_posts
        if published is not None:
            posts = [p for p in posts if p.published == published]
        return _newest_first(posts)

    def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        return next((p for p in self.blog_posts if p.slug == slug), None)

    def update_blog_post(self, post_id: str, **updates) -> Optional[BlogPost]:
        post = _find(self.blog_posts, post_id)
        if not post:
            return None
        for key, value in updates.items():
            setattr(post, key, value)
        post.updated_at = utcnow()
        return post

    def publish_blog_post(self, post_id: str) -> Optional[BlogPost]:
        post = _find(self.blog_posts, post_id)
        if not post:
            return None
        now = utcnow()
        if post.published_at is None:
            post.published_at = now
        post.published = True
        post.updated_at = now
        return post

    # Testimonials
    def create_testimonial(self, **testimonial_data) -> Testimonial:
        testimonial = Testimonial(
            id=generate_id(),
            client_name=testimonial_data["client_name"],
            client_email=testimonial_data["client_email"],
            rating=testimonial_data["rating"],
            testimonial_text=testimonial_data["testimonial_text"],
            service=testimonial_data.get("service"),
            approved=bool(testimonial_data.get("approved", False)),
            featured=bool(testimonial_data.get("featured", False)),
            created_at=utcnow(),
        )
        self.testimonials.append(testimonial)
        return testimonial

    def get_testimonial(self, testimonial_id: str) -> Optional[Testimonial]:
        return _find(self.testimonials, testimonial_id)

    def get_testimonials(self, approved: Optional[bool] = None) -> list[Testimonial]:
        testimonials = self.testimonials
        if approved is not None:
            testimonials = [t for t in testimonials if t.approved == approved]
        return _newest_first(testimonials)

    def approve_testimonial(self, testimonial_id: str) -> Optional[Testimonial]:
        testimonial = _find(self.testimonials, testimonial_id)
        if testimonial:
            testimonial.approved = True
        return testimonial

    def feature_testimonial(self, testimonial_id: str, featured: bool) -> Optional[Testimonial]:
        testimonial = _find(self.testimonials, testimonial_id)
        if testimonial:
            testimonial.featured = featured
        return testimonial
