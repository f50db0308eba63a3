"""Security: JWT access tokens and password hashing."""

from app.infrastructure.security.jwt import (
    create_access_token,
    user_id_from_token,
    verify_token,
)
from app.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "create_access_token",
    "get_password_hash",
    "user_id_from_token",
    "verify_password",
    "verify_token",
]
