"""Shared utilities: datetime and input sanitization."""

from app.shared.utils.datetime import ensure_utc, utc_now, utc_today
from app.shared.utils.sanitization import escape_like, strip_html, validate_code

__all__ = [
    "utc_now",
    "utc_today",
    "ensure_utc",
    "escape_like",
    "strip_html",
    "validate_code",
]
