"""
Timestamp utilities for consistent date handling across the system.
"""

from datetime import datetime, timezone
from typing import Optional

_MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_date(year: int, month: int, day: int) -> datetime:
    """Midnight UTC on the given calendar day."""
    return datetime(year, month, day, tzinfo=timezone.utc)


def to_iso(value: datetime) -> str:
    """Convert datetime to an ISO-8601 string in UTC.

    Args:
        value: datetime, naive values are treated as UTC

    Returns:
        ISO string with a trailing 'Z'
    """
    return as_utc(value).isoformat().replace('+00:00', 'Z')


def from_iso(value: str) -> datetime:
    """Parse an ISO-8601 string (with or without 'Z') into a UTC datetime.

    Raises:
        ValueError: If the string is not a valid ISO timestamp
    """
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    return as_utc(datetime.fromisoformat(text))


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def short_date(value: Optional[datetime]) -> str:
    """Format a date as 'DD Mon YYYY' in UTC, independent of locale."""
    if value is None:
        return ''
    value = as_utc(value)
    return f'{value.day:02d} {_MONTHS[value.month - 1]} {value.year}'
