import logging
from typing import Any

import httpx
from fastapi import APIRouter, Depends, HTTPException

from ..auth import Principal, require_admin
from ..config import CALENDLY_API_TOKEN
from ..domain.appointments.schemas import ExternalAppointment
from ..services.calendly_service import CalendlyService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/calendly", tags=["calendly"])


def get_calendly_service() -> CalendlyService:
    return CalendlyService(CALENDLY_API_TOKEN)


@router.get("/user")
async def get_calendly_user(
    _admin: Principal = Depends(require_admin),
    calendly: CalendlyService = Depends(get_calendly_service),
) -> dict[str, Any]:
    try:
        return await calendly.get_user_info()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"❌ Calendly user fetch error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch Calendly user data") from e


@router.get("/events", response_model=list[ExternalAppointment])
async def get_calendly_events(
    _admin: Principal = Depends(require_admin),
    calendly: CalendlyService = Depends(get_calendly_service),
):
    """Calendly bookings in appointment shape, tagged source=calendly (display only)"""
    try:
        return await calendly.list_external_appointments()
    except (httpx.HTTPError, ValueError, KeyError) as e:
        logger.error(f"❌ Calendly events fetch error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch Calendly events") from e


@router.get("/events/{event_id}/invitees")
async def get_calendly_invitees(
    event_id: str,
    _admin: Principal = Depends(require_admin),
    calendly: CalendlyService = Depends(get_calendly_service),
) -> dict[str, Any]:
    try:
        return await calendly.get_event_invitees(event_id)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"❌ Calendly invitees fetch error for {event_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch event invitees") from e
