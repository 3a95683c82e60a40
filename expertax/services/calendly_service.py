import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from ..domain.appointments.schemas import ExternalAppointment
from ..shared.validators import to_naive_utc

logger = logging.getLogger(__name__)

# Calendly does not expose invitee e-mails on the event itself
PLACEHOLDER_EMAIL = "calendly-booking@example.com"


def _parse_timestamp(value: str) -> datetime:
    return to_naive_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def to_external_appointment(event: dict[str, Any]) -> ExternalAppointment:
    """Map a Calendly scheduled event onto the appointment shape"""
    start = _parse_timestamp(event["start_time"])
    end = _parse_timestamp(event["end_time"])
    location = event.get("location") or {}
    event_type = event.get("event_type")
    # event_type is a URI string in the v2 API; older payloads embed an object
    service = event_type.get("name") if isinstance(event_type, dict) else None
    status = event.get("status")

    return ExternalAppointment(
        id=event["uri"].rstrip("/").split("/")[-1],
        externalUri=event["uri"],
        clientName=event.get("name") or "Unknown",
        clientEmail=PLACEHOLDER_EMAIL,
        clientPhone=None,
        service=service or event.get("name") or "Consultation",
        agentId=None,
        appointmentDate=start,
        duration=round((end - start).total_seconds() / 60),
        status="confirmed" if status == "active" else (status or "pending"),
        notes=location.get("join_url") or location.get("location"),
        createdAt=_parse_timestamp(event["created_at"]) if event.get("created_at") else None,
    )


class CalendlyService:
    """Read-only access to the business's Calendly account via a personal access token"""

    BASE_URL = "https://api.calendly.com"

    def __init__(self, api_token: Optional[str], transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_token = api_token
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        if not self.api_token:
            logger.error("CALENDLY_API_TOKEN not configured in environment variables")
            raise ValueError("Calendly API token not configured")
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.BASE_URL, transport=self.transport)

    async def get_user_info(self) -> dict[str, Any]:
        """Get the token owner's user record"""
        async with self._client() as client:
            response = await client.get("/users/me", headers=self._headers())
            if response.status_code != 200:
                logger.error(f"❌ Calendly user fetch failed: {response.status_code}")
            response.raise_for_status()
            return response.json()

    async def get_scheduled_events(self, user_uri: str, count: int = 100) -> dict[str, Any]:
        """Get scheduled events for a user, earliest first"""
        params = {"user": user_uri, "sort": "start_time:asc", "count": count}
        async with self._client() as client:
            response = await client.get("/scheduled_events", headers=self._headers(), params=params)
            if response.status_code != 200:
                logger.error(f"❌ Calendly events fetch failed: {response.status_code}")
            response.raise_for_status()
            return response.json()

    async def get_event_invitees(self, event_uuid: str) -> dict[str, Any]:
        """Get invitees for a scheduled event"""
        async with self._client() as client:
            response = await client.get(
                f"/scheduled_events/{event_uuid}/invitees", headers=self._headers()
            )
            response.raise_for_status()
            return response.json()

    async def list_external_appointments(self) -> list[ExternalAppointment]:
        user_info = await self.get_user_info()
        user_uri = user_info["resource"]["uri"]
        events = await self.get_scheduled_events(user_uri)
        return [to_external_appointment(event) for event in events.get("collection", [])]
