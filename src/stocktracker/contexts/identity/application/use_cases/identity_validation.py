from __future__ import annotations

import re
from datetime import datetime

from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    IdentityValidationError,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6


def normalize_email(*, email: str) -> str:
    """
    Validate email format and return stripped lower-case value.

    Args:
        email: Raw email input.
    Returns:
        str: Normalized email.
    Assumptions:
        Format check is syntactic only; deliverability is not verified.
    Raises:
        IdentityValidationError: If email is blank or malformed.
    Side Effects:
        None.
    """
    normalized = email.strip().lower()
    if not normalized:
        raise IdentityValidationError(message="Email is required")
    if EMAIL_PATTERN.fullmatch(normalized) is None:
        raise IdentityValidationError(message="Invalid email format")
    return normalized


def normalize_username(*, username: str) -> str:
    """
    Validate username length and alphabet.

    Raises:
        IdentityValidationError: If username is blank, too short, too long, or has
            characters outside `[A-Za-z0-9_]`.
    """
    normalized = username.strip()
    if not normalized:
        raise IdentityValidationError(message="Username is required")
    if len(normalized) < USERNAME_MIN_LENGTH:
        raise IdentityValidationError(
            message=f"Username must be at least {USERNAME_MIN_LENGTH} characters"
        )
    if len(normalized) > USERNAME_MAX_LENGTH:
        raise IdentityValidationError(
            message=f"Username must be at most {USERNAME_MAX_LENGTH} characters"
        )
    if USERNAME_PATTERN.fullmatch(normalized) is None:
        raise IdentityValidationError(
            message="Username can only contain letters, numbers, and underscores"
        )
    return normalized


def validate_password(*, password: str) -> str:
    if not password:
        raise IdentityValidationError(message="Password is required")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise IdentityValidationError(
            message=f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    return password


def ensure_utc_datetime(*, value: datetime, field_name: str) -> datetime:
    """
    Return value unchanged when it is timezone-aware UTC.

    Raises:
        ValueError: If datetime is naive or not UTC.
    """
    offset = value.utcoffset()
    if value.tzinfo is None or offset is None or offset.total_seconds() != 0:
        raise ValueError(f"{field_name} must be timezone-aware UTC datetime")
    return value
