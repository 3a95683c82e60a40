"""Appointment service - booking and the admin status workflow"""

import logging

from fastapi import HTTPException

from ...models import Appointment
from ...storage import Storage
from .schemas import AppointmentCreate, AppointmentStatusUpdate

logger = logging.getLogger(__name__)

EXTERNAL_READ_ONLY = "Calendly appointments are read-only here. Manage them in Calendly."


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        logger.info(f"📥 Booking {data.service} for {data.clientEmail} on {data.appointmentDate}")
        return self.storage.create_appointment(
            client_name=data.clientName,
            client_email=data.clientEmail,
            client_phone=data.clientPhone,
            service=data.service,
            agent_id=data.agentId,
            appointment_date=data.appointmentDate,
            duration=data.duration,
            status=data.status,
            notes=data.notes,
        )

    def get_appointments(self) -> list[Appointment]:
        return self.storage.get_appointments()

    def get_appointments_by_agent(self, agent_id: str) -> list[Appointment]:
        return self.storage.get_appointments_by_agent(agent_id)

    def update_status(self, appointment_id: str, data: AppointmentStatusUpdate) -> Appointment:
        """Any status may move to any other status; there are no transition rules"""
        if data.source != "local":
            logger.warning(f"⚠️ Refused status change on external appointment {appointment_id}")
            raise HTTPException(status_code=400, detail=EXTERNAL_READ_ONLY)

        appointment = self.storage.update_appointment_status(appointment_id, data.status)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")

        logger.info(f"✅ Appointment {appointment_id} status -> {data.status}")
        return appointment
