"""Storage contract shared by the database and in-memory backends"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..models import Agent, Appointment, BlogPost, Contact, Document, Testimonial, User

# Public roster order; agents not listed here follow in insertion order
AGENT_DISPLAY_ORDER = ["Sandy", "AI Tax Agent", "Jennifer Constantino"]


def order_agents(agents: list[Agent]) -> list[Agent]:
    """Sort agents into the fixed roster order (stable for unlisted names)"""

    def position(agent: Agent) -> int:
        try:
            return AGENT_DISPLAY_ORDER.index(agent.name)
        except ValueError:
            return len(AGENT_DISPLAY_ORDER)

    return sorted(agents, key=position)


class Storage(ABC):
    """
    Persistence contract for every entity the API exposes.

    Both backends must behave identically: list operations return newest
    records first, mutators return the updated record or None when the id is
    unknown, and nothing is ever hard-deleted except expired sessions.
    """

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, **user_data) -> User: ...

    # Sessions
    @abstractmethod
    def create_session(self, sid: str, data: dict, expire: datetime) -> None: ...

    @abstractmethod
    def get_session(self, sid: str) -> Optional[dict]:
        """Return session data, or None if the session is missing or expired"""

    @abstractmethod
    def delete_session(self, sid: str) -> None: ...

    # Contacts
    @abstractmethod
    def create_contact(self, **contact_data) -> Contact: ...

    @abstractmethod
    def get_contacts(self) -> list[Contact]: ...

    # Agents
    @abstractmethod
    def create_agent(self, **agent_data) -> Agent: ...

    @abstractmethod
    def get_agents(self) -> list[Agent]: ...

    @abstractmethod
    def count_agents(self) -> int: ...

    # Appointments
    @abstractmethod
    def create_appointment(self, **appointment_data) -> Appointment: ...

    @abstractmethod
    def get_appointment(self, appointment_id: str) -> Optional[Appointment]: ...

    @abstractmethod
    def get_appointments(self) -> list[Appointment]: ...

    @abstractmethod
    def get_appointments_by_agent(self, agent_id: str) -> list[Appointment]:
        """Appointments for one agent, latest appointment date first"""

    @abstractmethod
    def update_appointment_status(self, appointment_id: str, status: str) -> Optional[Appointment]: ...

    # Documents
    @abstractmethod
    def create_document(self, **document_data) -> Document: ...

    @abstractmethod
    def get_document(self, document_id: str) -> Optional[Document]: ...

    @abstractmethod
    def get_documents_by_client(self, client_email: str) -> list[Document]: ...

    @abstractmethod
    def update_document_status(self, document_id: str, status: str) -> Optional[Document]: ...

    # Blog
    @abstractmethod
    def create_blog_post(self, **post_data) -> BlogPost: ...

    @abstractmethod
    def get_blog_post(self, post_id: str) -> Optional[BlogPost]: ...

    @abstractmethod
    def get_blog_posts(self, published: Optional[bool] = None) -> list[BlogPost]: ...

    @abstractmethod
    def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]: ...

    @abstractmethod
    def update_blog_post(self, post_id: str, **updates) -> Optional[BlogPost]: ...

    @abstractmethod
    def publish_blog_post(self, post_id: str) -> Optional[BlogPost]:
        """Mark a post published; publishedAt is only stamped the first time"""

    # Testimonials
    @abstractmethod
    def create_testimonial(self, **testimonial_data) -> Testimonial: ...

    @abstractmethod
    def get_testimonial(self, testimonial_id: str) -> Optional[Testimonial]: ...

    @abstractmethod
    def get_testimonials(self, approved: Optional[bool] = None) -> list[Testimonial]: ...

    @abstractmethod
    def approve_testimonial(self, testimonial_id: str) -> Optional[Testimonial]: ...

    @abstractmethod
    def feature_testimonial(self, testimonial_id: str, featured: bool) -> Optional[Testimonial]: ...
