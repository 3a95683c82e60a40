"""Agent roster (read-only; seeded at startup)"""

from fastapi import APIRouter, Depends

from ...models import Agent
from ...storage import Storage, get_storage
from .schemas import AgentResponse

router = APIRouter(prefix="/api/agents", tags=["Agents"])


def _to_response(agent: Agent) -> AgentResponse:
    return AgentResponse(
        id=agent.id,
        name=agent.name,
        title=agent.title,
        bio=agent.bio,
        email=agent.email,
        imageUrl=agent.image_url,
        credentials=list(agent.credentials or []),
    )


@router.get("", response_model=list[AgentResponse])
async def get_agents(storage: Storage = Depends(get_storage)):
    """Public roster in display order"""
    return [_to_response(a) for a in storage.get_agents()]
