"""
UTC date/time utilities for consistent timezone handling.

All datetime values in the system are timezone-aware UTC. Assignment
validity windows are plain dates compared against the current UTC date.
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of datetime.now() (naive, local timezone) or
    datetime.utcnow() (naive, deprecated in Python 3.12).
    """
    return datetime.now(UTC)


def utc_today() -> date:
    """Return the current UTC calendar date (for assignment start/end checks)."""
    return utc_now().date()


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
