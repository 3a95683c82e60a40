import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field, field_validator

from ..auth import end_session, get_current_user, start_session
from ..config import REGISTRATION_ENABLED
from ..models import User
from ..security_utils import hash_password, verify_password
from ..shared.validators import validate_required_email
from ..storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=255)
    email: str
    password: str = Field(min_length=6)
    firstName: Optional[str] = Field(default=None, min_length=1)
    lastName: Optional[str] = Field(default=None, min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_required_email(v)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    role: str
    createdAt: Optional[datetime] = None


def _to_response(user: User) -> UserResponse:
    # Never include the password hash
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        firstName=user.first_name,
        lastName=user.last_name,
        role=user.role,
        createdAt=user.created_at,
    )


@router.post("/register", response_model=UserResponse)
async def register(
    data: RegisterRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
):
    """Create an admin account and log it in"""
    if not REGISTRATION_ENABLED:
        raise HTTPException(status_code=403, detail="Registration is disabled")

    if storage.get_user_by_username(data.username):
        raise HTTPException(status_code=400, detail="Username already exists")
    if storage.get_user_by_email(data.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = storage.create_user(
        username=data.username,
        email=data.email,
        password=hash_password(data.password),
        first_name=data.firstName,
        last_name=data.lastName,
        role="admin",
    )
    logger.info(f"🆕 Registered user: {user.username}")
    start_session(response, storage, user)
    return _to_response(user)


@router.post("/login", response_model=UserResponse)
async def login(
    data: LoginRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
):
    user = storage.get_user_by_username(data.username)
    if not user or not verify_password(data.password, user.password):
        logger.warning(f"⚠️ Failed login for username: {data.username}")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    start_session(response, storage, user)
    logger.info(f"✅ User logged in: {user.username}")
    return _to_response(user)


@router.post("/logout")
async def logout(request: Request, response: Response, storage: Storage = Depends(get_storage)):
    end_session(request, response, storage)
    return {"success": True}


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    return _to_response(user)
