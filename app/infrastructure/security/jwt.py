"""JWT access tokens for API authentication.

Tokens carry the user id as ``sub`` (a string, as RFC 7519 requires) plus the
username. Secret and algorithm come from app.core.config.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.shared.utils.datetime import utc_now


def create_access_token(
    user_id: int,
    username: str,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed access token for user_id.

    Args:
        user_id: Subject of the token.
        username: Stored as a convenience claim.
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.
        extra_claims: Optional additional claims.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = dict(extra_claims or {})
    claims.update(sub=str(user_id), username=username, exp=utc_now() + ttl)
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ValueError: If the token is invalid, expired, or missing exp/sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    return payload


def user_id_from_token(token: str) -> int:
    """Return the integer user id carried in ``sub``; ValueError if malformed."""
    payload = verify_token(token)
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError("Token subject is not a user id") from e
