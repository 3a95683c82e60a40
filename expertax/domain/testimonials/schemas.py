"""Testimonial domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_required_email, validate_required_text


class TestimonialCreate(BaseModel):
    """Public submission; moderation flags cannot be set by the submitter"""

    clientName: str = Field(min_length=1, max_length=255)
    clientEmail: str
    rating: int = Field(ge=1, le=5)
    testimonialText: str = Field(min_length=1)
    service: Optional[str] = Field(default=None, max_length=255)

    @field_validator("clientName")
    @classmethod
    def validate_client_name(cls, v: str) -> str:
        return validate_required_text(v, "Name")

    @field_validator("clientEmail")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_required_email(v)


class TestimonialFeatureUpdate(BaseModel):
    featured: bool


class TestimonialResponse(BaseModel):
    id: str
    clientName: str
    clientEmail: str
    rating: int
    testimonialText: str
    service: Optional[str] = None
    approved: bool
    featured: bool
    createdAt: datetime


class TestimonialCreated(BaseModel):
    success: bool = True
    testimonial: TestimonialResponse
