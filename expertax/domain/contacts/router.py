"""Contact router - public contact form and the admin lead list"""

import logging

from fastapi import APIRouter, Depends

from ...auth import Principal, require_admin
from ...models import Contact
from ...storage import Storage, get_storage
from .schemas import ContactCreate, ContactCreated, ContactResponse
from .service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contacts", tags=["Contacts"])


def get_contact_service(storage: Storage = Depends(get_storage)) -> ContactService:
    """Dependency injection for ContactService"""
    return ContactService(storage)


def _to_response(contact: Contact) -> ContactResponse:
    return ContactResponse(
        id=contact.id,
        name=contact.name,
        email=contact.email,
        phone=contact.phone,
        service=contact.service,
        message=contact.message,
        createdAt=contact.created_at,
    )


@router.post("", response_model=ContactCreated)
async def create_contact(
    data: ContactCreate,
    service: ContactService = Depends(get_contact_service),
):
    """Submit the public contact form"""
    contact = service.create_contact(data)
    return ContactCreated(contact=_to_response(contact))


@router.get("", response_model=list[ContactResponse])
async def get_contacts(
    _admin: Principal = Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
):
    """All contact submissions, newest first"""
    return [_to_response(c) for c in service.get_contacts()]
