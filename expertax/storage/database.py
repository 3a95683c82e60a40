"""SQLAlchemy-backed storage"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ..database import Base, create_session_factory
from ..models import (
    Agent,
    Appointment,
    BlogPost,
    Contact,
    Document,
    SessionRecord,
    Testimonial,
    User,
    generate_id,
    utcnow,
)
from .base import Storage, order_agents

logger = logging.getLogger(__name__)


class DatabaseStorage(Storage):
    """Storage backed by a relational database; one short session per call"""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = create_session_factory(engine)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine, checkfirst=True)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _add(self, record):
        with self._session() as db:
            db.add(record)
            db.commit()
            db.refresh(record)
            return record

    def _update(self, model, record_id: str, **updates):
        with self._session() as db:
            record = db.get(model, record_id)
            if not record:
                return None
            for key, value in updates.items():
                setattr(record, key, value)
            db.commit()
            db.refresh(record)
            return record

    def _get(self, model, record_id: str):
        with self._session() as db:
            return db.get(model, record_id)

    # Users
    def get_user(self, user_id: str) -> Optional[User]:
        return self._get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            return db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as db:
            return db.query(User).filter(User.email == email).first()

    def create_user(self, **user_data) -> User:
        now = utcnow()
        user_data.setdefault("role", "admin")
        return self._add(User(id=generate_id(), created_at=now, updated_at=now, **user_data))

    # Sessions
    def create_session(self, sid: str, data: dict, expire: datetime) -> None:
        with self._session() as db:
            db.merge(SessionRecord(sid=sid, sess=data, expire=expire))
            db.commit()

    def get_session(self, sid: str) -> Optional[dict]:
        with self._session() as db:
            record = db.get(SessionRecord, sid)
            if not record:
                return None
            if record.expire <= utcnow():
                db.delete(record)
                db.commit()
                return None
            return dict(record.sess)

    def delete_session(self, sid: str) -> None:
        with self._session() as db:
            db.query(SessionRecord).filter(SessionRecord.sid == sid).delete(synchronize_session=False)
            db.commit()

    # Contacts
    def create_contact(self, **contact_data) -> Contact:
        return self._add(Contact(id=generate_id(), created_at=utcnow(), **contact_data))

    def get_contacts(self) -> list[Contact]:
        with self._session() as db:
            return db.query(Contact).order_by(Contact.created_at.desc(), Contact.id.desc()).all()

    # Agents
    def create_agent(self, **agent_data) -> Agent:
        return self._add(Agent(id=generate_id(), created_at=utcnow(), **agent_data))

    def get_agents(self) -> list[Agent]:
        with self._session() as db:
            agents = db.query(Agent).order_by(Agent.created_at.asc(), Agent.id.asc()).all()
        return order_agents(agents)

    def count_agents(self) -> int:
        with self._session() as db:
            return db.query(func.count(Agent.id)).scalar() or 0

    # Appointments
    def create_appointment(self, **appointment_data) -> Appointment:
        appointment_data.setdefault("duration", 60)
        appointment_data.setdefault("status", "pending")
        return self._add(Appointment(id=generate_id(), created_at=utcnow(), **appointment_data))

    def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return self._get(Appointment, appointment_id)

    def get_appointments(self) -> list[Appointment]:
        with self._session() as db:
            return (
                db.query(Appointment)
                .order_by(Appointment.created_at.desc(), Appointment.id.desc())
                .all()
            )

    def get_appointments_by_agent(self, agent_id: str) -> list[Appointment]:
        with self._session() as db:
            return (
                db.query(Appointment)
                .filter(Appointment.agent_id == agent_id)
                .order_by(Appointment.appointment_date.desc(), Appointment.id.desc())
                .all()
            )

    def update_appointment_status(self, appointment_id: str, status: str) -> Optional[Appointment]:
        return self._update(Appointment, appointment_id, status=status)

    # Documents
    def create_document(self, **document_data) -> Document:
        document_data.setdefault("status", "uploaded")
        return self._add(Document(id=generate_id(), uploaded_at=utcnow(), **document_data))

    def get_document(self, document_id: str) -> Optional[Document]:
        return self._get(Document, document_id)

    def get_documents_by_client(self, client_email: str) -> list[Document]:
        with self._session() as db:
            return (
                db.query(Document)
                .filter(Document.client_email == client_email)
                .order_by(Document.uploaded_at.desc(), Document.id.desc())
                .all()
            )

    def update_document_status(self, document_id: str, status: str) -> Optional[Document]:
        return self._update(Document, document_id, status=status)

    # Blog
    def create_blog_post(self, **post_data) -> BlogPost:
        now = utcnow()
        post_data.setdefault("published", False)
        return self._add(BlogPost(id=generate_id(), created_at=now, updated_at=now, **post_data))

    def get_blog_post(self, post_id: str) -> Optional[BlogPost]:
        return self._get(BlogPost, post_id)

    def get_blog_posts(self, published: Optional[bool] = None) -> list[BlogPost]:
        with self._session() as db:
            query = db.query(BlogPost)
            if published is not None:
                query = query.filter(BlogPost.published == published)
            return query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()

    def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        with self._session() as db:
            return db.query(BlogPost).filter(BlogPost.slug == slug).first()

    def update_blog_post(self, post_id: str, **updates) -> Optional[BlogPost]:
        return self._update(BlogPost, post_id, updated_at=utcnow(), **updates)

    def publish_blog_post(self, post_id: str) -> Optional[BlogPost]:
        with self._session() as db:
            post = db.get(BlogPost, post_id)
            if not post:
                return None
            now = utcnow()
            if post.published_at is None:
                post.published_at = now
            post.published = True
            post.updated_at = now
            db.commit()
            db.refresh(post)
            return post

    # Testimonials
    def create_testimonial(self, **testimonial_data) -> Testimonial:
        testimonial_data.setdefault("approved", False)
        testimonial_data.setdefault("featured", False)
        return self._add(Testimonial(id=generate_id(), created_at=utcnow(), **testimonial_data))

    def get_testimonial(self, testimonial_id: str) -> Optional[Testimonial]:
        return self._get(Testimonial, testimonial_id)

    def get_testimonials(self, approved: Optional[bool] = None) -> list[Testimonial]:
        with self._session() as db:
            query = db.query(Testimonial)
            if approved is not None:
                query = query.filter(Testimonial.approved == approved)
            return query.order_by(Testimonial.created_at.desc(), Testimonial.id.desc()).all()

    def approve_testimonial(self, testimonial_id: str) -> Optional[Testimonial]:
        return self._update(Testimonial, testimonial_id, approved=True)

    def feature_testimonial(self, testimonial_id: str, featured: bool) -> Optional[Testimonial]:
        return self._update(Testimonial, testimonial_id, featured=featured)
