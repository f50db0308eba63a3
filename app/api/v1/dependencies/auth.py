"""Auth and token dependencies (composition root)."""

from __future__ import annotations

from app.infrastructure.security.jwt import create_access_token, user_id_from_token


class AuthSecurity:
    """Token issue and decode provided via DI (no direct infra imports in routes)."""

    def create_access_token(self, user_id: int, username: str) -> str:
        return create_access_token(user_id, username)

    def user_id_from_token(self, token: str) -> int:
        """Raises ValueError for an invalid, expired or malformed token."""
        return user_id_from_token(token)


def get_auth_security() -> AuthSecurity:
    """Auth token creation and decoding (composition root)."""
    return AuthSecurity()
