from pydantic import BaseModel


class AgentResponse(BaseModel):
    id: str
    name: str
    title: str
    bio: str
    email: str
    imageUrl: str
    credentials: list[str]
