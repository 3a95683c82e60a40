import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from .database import Base


def generate_id():
    """Generate a UUID string primary key"""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.utcnow()


APPOINTMENT_STATUSES = ("pending", "confirmed", "completed", "cancelled")
DOCUMENT_STATUSES = ("uploaded", "processing", "reviewed")
DOCUMENT_TYPES = ("w2", "1099", "receipt", "bank_statement", "tax_return", "other")
BLOG_CATEGORIES = ("tax-tips", "regulatory-updates", "planning")


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    role = Column(String(50), default="admin", nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class SessionRecord(Base):
    __tablename__ = "sessions"

    sid = Column(String(255), primary_key=True)
    sess = Column(JSON, nullable=False)
    expire = Column(DateTime, index=True, nullable=False)


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    service = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)


class Agent(Base):
    __tablename__ = "agents"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False)
    email = Column(String(255), nullable=False)
    image_url = Column(String(500), nullable=False)
    credentials = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    client_name = Column(String(255), nullable=False)
    client_email = Column(String(255), nullable=False)
    client_phone = Column(String(50), nullable=True)
    service = Column(String(255), nullable=False)
    # Weak reference to agents.id; no foreign key so agents can be reseeded freely
    agent_id = Column(String(36), index=True, nullable=True)
    appointment_date = Column(DateTime, nullable=False)
    duration = Column(Integer, default=60, nullable=False)  # minutes
    status = Column(String(20), default="pending", nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=generate_id)
    client_email = Column(String(255), index=True, nullable=False)
    file_name = Column(String(255), nullable=False)  # original name, for downloads
    file_url = Column(String(500), nullable=False)  # storage key, never sent to clients
    file_size = Column(Integer, nullable=False)
    document_type = Column(String(50), nullable=False)
    status = Column(String(20), default="uploaded", nullable=False)
    uploaded_at = Column(DateTime, default=utcnow, nullable=False)


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(200), nullable=False)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    excerpt = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=False)
    author_id = Column(String(36), nullable=True)  # weak reference to agents.id
    published = Column(Boolean, default=False, nullable=False)
    published_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(String(36), primary_key=True, default=generate_id)
    client_name = Column(String(255), nullable=False)
    client_email = Column(String(255), nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5
    testimonial_text = Column(Text, nullable=False)
    service = Column(String(255), nullable=True)
    approved = Column(Boolean, default=False, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
