"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import to_naive_utc, validate_required_email, validate_required_text

AppointmentStatus = Literal["pending", "confirmed", "completed", "cancelled"]

# Booking form value meaning "no preference"
ANY_AGENT = "any"


class AppointmentCreate(BaseModel):
    """Schema for the public booking form"""

    clientName: str = Field(min_length=1, max_length=255)
    clientEmail: str
    clientPhone: Optional[str] = Field(default=None, max_length=50)
    service: str = Field(min_length=1, max_length=255)
    agentId: Optional[str] = None
    appointmentDate: datetime
    duration: int = Field(default=60, gt=0, le=24 * 60)
    status: AppointmentStatus = "pending"
    notes: Optional[str] = None

    @field_validator("clientEmail")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_required_email(v)

    @field_validator("clientName")
    @classmethod
    def validate_client_name(cls, v: str) -> str:
        return validate_required_text(v, "Name")

    @field_validator("service")
    @classmethod
    def validate_service(cls, v: str) -> str:
        return validate_required_text(v, "Service")

    @field_validator("agentId")
    @classmethod
    def normalize_agent(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip() or v.strip().lower() == ANY_AGENT:
            return None
        return v.strip()

    @field_validator("appointmentDate")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus
    # Calendar views send the source along so mirrored bookings can be refused
    source: Literal["local", "calendly"] = "local"


class AppointmentBase(BaseModel):
    id: str
    clientName: str
    clientEmail: str
    clientPhone: Optional[str] = None
    service: str
    agentId: Optional[str] = None
    appointmentDate: datetime
    duration: int
    status: str
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None


class LocalAppointment(AppointmentBase):
    """Booked through this site; status is managed here"""

    source: Literal["local"] = "local"


class ExternalAppointment(AppointmentBase):
    """Mirrored from Calendly; display only"""

    source: Literal["calendly"] = "calendly"
    externalUri: str


class AppointmentCreated(BaseModel):
    success: bool = True
    appointment: LocalAppointment
