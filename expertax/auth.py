import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import httpx
from fastapi import Depends, HTTPException, Request, Response
from jose import ExpiredSignatureError, JWTError, jwt

from .config import (
    FIREBASE_PROJECT_ID,
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
    SESSION_MAX_AGE_SECONDS,
)
from .models import User, utcnow
from .security_utils import generate_session_id, sign_session_id, unsign_session_id
from .storage import Storage, get_storage

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = (
    "https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com"
)

# Cache for Google's public keys
_cached_keys = None


@dataclass
class Principal:
    """The authenticated caller: a local admin account or a third-party identity"""

    email: str
    provider: str  # "session" or "firebase"
    user: Optional[User] = None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.role == "admin"


# ============================================================================
# SERVER-SIDE SESSIONS
# ============================================================================


def start_session(response: Response, storage: Storage, user: User) -> str:
    """Persist a new session for the user and set the signed cookie"""
    sid = generate_session_id()
    expire = utcnow() + timedelta(seconds=SESSION_MAX_AGE_SECONDS)
    storage.create_session(sid, {"user_id": user.id}, expire)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=sign_session_id(sid),
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
        max_age=SESSION_MAX_AGE_SECONDS,
        path="/",
    )
    return sid


def end_session(request: Request, response: Response, storage: Storage) -> None:
    sid = _session_id_from_cookie(request)
    if sid:
        storage.delete_session(sid)
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")


def _session_id_from_cookie(request: Request) -> Optional[str]:
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    if not cookie:
        return None
    return unsign_session_id(cookie, max_age=SESSION_MAX_AGE_SECONDS)


def _session_user(request: Request, storage: Storage) -> Optional[User]:
    sid = _session_id_from_cookie(request)
    if not sid:
        return None
    data = storage.get_session(sid)
    if not data:
        return None
    return storage.get_user(data.get("user_id", ""))


# ============================================================================
# THIRD-PARTY IDENTITY (FIREBASE ID TOKENS)
# ============================================================================


async def get_google_public_keys(force_refresh: bool = False) -> Optional[dict]:
    """Fetch Google's public keys for Firebase token verification"""
    global _cached_keys
    if _cached_keys and not force_refresh:
        return _cached_keys

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(GOOGLE_CERTS_URL)
        if response.status_code == 200:
            _cached_keys = response.json()
            logger.info(f"✅ Fetched {len(_cached_keys)} Google public keys")
            return _cached_keys
        logger.error(f"❌ Failed to fetch Google public keys: HTTP {response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"❌ Error fetching Google public keys: {str(e)}")
    return None


async def verify_identity_token(token: str) -> dict:
    """
    Verify a Firebase ID token (RS256) against Google's certificates and
    return its claims. Raises 401 for anything that does not verify.
    """
    if not FIREBASE_PROJECT_ID:
        raise HTTPException(status_code=401, detail="Third-party login is not configured")

    try:
        header = jwt.get_unverified_header(token)
    except JWTError as e:
        raise HTTPException(status_code=401, detail="Invalid token format") from e

    if header.get("alg") != "RS256" or not header.get("kid"):
        logger.error(f"❌ Invalid token header: alg={header.get('alg')}")
        raise HTTPException(status_code=401, detail="Invalid token header")

    kid = header["kid"]
    public_keys = await get_google_public_keys()
    if not public_keys or kid not in public_keys:
        logger.warning(f"⚠️ Key ID {kid} not found in public keys, refreshing")
        public_keys = await get_google_public_keys(force_refresh=True)
        if not public_keys or kid not in public_keys:
            raise HTTPException(status_code=401, detail="Unable to verify token signature")

    try:
        claims = jwt.decode(
            token,
            public_keys[kid],
            algorithms=["RS256"],
            audience=FIREBASE_PROJECT_ID,
            issuer=f"https://securetoken.google.com/{FIREBASE_PROJECT_ID}",
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        ) from e
    except JWTError as e:
        logger.error(f"❌ Token verification failed: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token") from e

    return claims


def _bearer_token(request: Request) -> Optional[str]:
    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


# ============================================================================
# DEPENDENCIES
# ============================================================================


async def get_optional_principal(
    request: Request, storage: Storage = Depends(get_storage)
) -> Optional[Principal]:
    """Resolve the caller from the session cookie, then from a bearer token"""
    user = _session_user(request, storage)
    if user:
        return Principal(email=user.email, provider="session", user=user)

    token = _bearer_token(request)
    if not token:
        return None

    try:
        claims = await verify_identity_token(token)
    except HTTPException as e:
        logger.info(f"Ignoring unverifiable bearer token on {request.url.path}: {e.detail}")
        return None

    email = claims.get("email")
    if not email:
        logger.warning("⚠️ Identity token carries no email claim")
        return None
    # Documents are scoped by e-mail, so only a verified address identifies a client
    if claims.get("email_verified") is not True:
        logger.warning(f"⚠️ Ignoring identity token with unverified email: {email}")
        return None
    return Principal(email=email.lower(), provider="firebase")


async def require_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    if not principal:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return principal


async def require_admin(principal: Principal = Depends(require_principal)) -> Principal:
    if not principal.is_admin:
        logger.warning(f"⚠️ {principal.email} attempted an admin-only action")
        raise HTTPException(status_code=403, detail="Admin access required")
    return principal


async def get_optional_admin(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Optional[Principal]:
    """The caller if they are an admin, else None (for public read endpoints)"""
    if principal and principal.is_admin:
        return principal
    return None


async def get_current_user(principal: Principal = Depends(require_principal)) -> User:
    if not principal.user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return principal.user
