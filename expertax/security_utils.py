"""
Security utilities: password hashing, signed session ids and filename hygiene
"""

import logging
import os
import re
import secrets
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import SECRET_KEY

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_SALT = "session-id"


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# SESSION IDS
# ============================================================================


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


def sign_session_id(sid: str, secret_key: str = SECRET_KEY) -> str:
    """Sign a session id for the cookie; the session itself lives server-side"""
    serializer = URLSafeTimedSerializer(secret_key)
    return serializer.dumps(sid, salt=SESSION_SALT)


def unsign_session_id(token: str, max_age: int, secret_key: str = SECRET_KEY) -> Optional[str]:
    """
    Verify a signed session cookie

    Returns:
        The session id if the signature is valid and fresh, None otherwise
    """
    serializer = URLSafeTimedSerializer(secret_key)
    try:
        return serializer.loads(token, salt=SESSION_SALT, max_age=max_age)
    except SignatureExpired:
        logger.info("Session cookie expired")
        return None
    except BadSignature:
        logger.warning("Invalid session cookie signature")
        return None


# ============================================================================
# FILES
# ============================================================================


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent directory traversal and other attacks

    Args:
        filename: Original filename

    Returns:
        Safe filename
    """
    # Remove path components (both separators, whatever the client OS)
    filename = os.path.basename(filename.replace("\\", "/"))

    filename = re.sub(r"[^\w\s\-\.]", "", filename)
    filename = filename.strip(". ")

    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[: 255 - len(ext)] + ext

    if not filename:
        filename = f"file_{secrets.token_urlsafe(8)}"

    return filename
