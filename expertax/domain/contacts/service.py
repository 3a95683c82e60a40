"""Contact service - inbound leads from the contact form"""

import logging

from ...models import Contact
from ...storage import Storage
from .schemas import ContactCreate

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def create_contact(self, data: ContactCreate) -> Contact:
        contact = self.storage.create_contact(
            name=data.name,
            email=data.email,
            phone=data.phone,
            service=data.service,
            message=data.message,
        )
        # E-mail notification is not implemented; the submission is logged instead
        logger.info(
            f"📥 New contact submission: id={contact.id} name={contact.name} "
            f"email={contact.email} service={contact.service}"
        )
        return contact

    def get_contacts(self) -> list[Contact]:
        return self.storage.get_contacts()
