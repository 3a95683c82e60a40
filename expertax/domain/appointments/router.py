"""Appointment router - public booking and admin calendar endpoints"""

import logging

from fastapi import APIRouter, Depends

from ...auth import Principal, require_admin
from ...models import Appointment
from ...storage import Storage, get_storage
from .schemas import AppointmentCreate, AppointmentCreated, AppointmentStatusUpdate, LocalAppointment
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


def get_appointment_service(storage: Storage = Depends(get_storage)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(storage)


def to_local_appointment(appointment: Appointment) -> LocalAppointment:
    return LocalAppointment(
        id=appointment.id,
        clientName=appointment.client_name,
        clientEmail=appointment.client_email,
        clientPhone=appointment.client_phone,
        service=appointment.service,
        agentId=appointment.agent_id,
        appointmentDate=appointment.appointment_date,
        duration=appointment.duration,
        status=appointment.status,
        notes=appointment.notes,
        createdAt=appointment.created_at,
    )


@router.post("", response_model=AppointmentCreated)
async def create_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book a consultation"""
    appointment = service.create_appointment(data)
    return AppointmentCreated(appointment=to_local_appointment(appointment))


@router.get("", response_model=list[LocalAppointment])
async def get_appointments(
    _admin: Principal = Depends(require_admin),
    service: AppointmentService = Depends(get_appointment_service),
):
    """All locally booked appointments, newest first"""
    return [to_local_appointment(a) for a in service.get_appointments()]


@router.get("/agent/{agent_id}", response_model=list[LocalAppointment])
async def get_agent_appointments(
    agent_id: str,
    _admin: Principal = Depends(require_admin),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointments assigned to one agent, latest appointment date first"""
    return [to_local_appointment(a) for a in service.get_appointments_by_agent(agent_id)]


@router.patch("/{appointment_id}/status", response_model=LocalAppointment)
async def update_appointment_status(
    appointment_id: str,
    data: AppointmentStatusUpdate,
    _admin: Principal = Depends(require_admin),
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.update_status(appointment_id, data)
    return to_local_appointment(appointment)
