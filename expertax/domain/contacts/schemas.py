"""Contact domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_required_email, validate_required_text


class ContactCreate(BaseModel):
    """Schema for the public contact form"""

    name: str = Field(min_length=1, max_length=255)
    email: str
    phone: Optional[str] = Field(default=None, max_length=50)
    service: Optional[str] = Field(default=None, max_length=255)
    message: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_required_text(v, "Name")

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_required_email(v)


class ContactResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None
    createdAt: datetime


class ContactCreated(BaseModel):
    success: bool = True
    contact: ContactResponse
