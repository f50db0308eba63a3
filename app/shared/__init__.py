"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    get_current_user_id,
    get_request_id,
    reset_request_id,
    set_current_user_id,
    set_request_id,
)
from app.shared.utils import ensure_utc, utc_now, utc_today

__all__ = [
    "ensure_utc",
    "get_current_user_id",
    "get_request_id",
    "reset_request_id",
    "set_current_user_id",
    "set_request_id",
    "utc_now",
    "utc_today",
]
