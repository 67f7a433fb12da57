"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional

from .errors import ValidationError

CATEGORIES = ("healthcare", "personal care", "education", "homeservice")

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_category(category: Optional[str]) -> Optional[str]:
    """
    Normalize and check a service category.

    Raises:
        ValidationError: If the category is not one of CATEGORIES
    """
    if category is None:
        return None

    normalized = category.strip().lower()
    if normalized not in CATEGORIES:
        raise ValidationError(
            f"Invalid category '{category}'. Must be one of: {', '.join(CATEGORIES)}"
        )
    return normalized


def validate_time(value: str) -> str:
    """Validate a 24h ``HH:MM`` time string"""
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValidationError(f"Invalid time '{value}'. Expected HH:MM")
    return value


def validate_date(value: str) -> str:
    """Validate an ISO ``YYYY-MM-DD`` date string"""
    try:
        return date.fromisoformat(value).isoformat()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date '{value}'. Expected YYYY-MM-DD") from None


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValidationError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValidationError("Invalid email format")

    return email


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"
