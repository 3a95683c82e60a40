"""Shared validation utilities"""

import re
from datetime import datetime, timezone
from typing import Optional

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_required_email(email: Optional[str]) -> str:
    """Like validate_email, but blank input is an error"""
    if not email or not email.strip():
        raise ValueError("Email is required")
    return validate_email(email)


def validate_required_text(value: str, label: str) -> str:
    """Strip surrounding whitespace; whitespace-only input counts as missing"""
    value = value.strip()
    if not value:
        raise ValueError(f"{label} is required")
    return value


def validate_slug(slug: str) -> str:
    if not SLUG_PATTERN.match(slug):
        raise ValueError("Slug can only contain lowercase letters, numbers, and hyphens")
    return slug


def to_naive_utc(value: datetime) -> datetime:
    """Timestamps are stored as naive UTC; convert aware values accordingly"""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
