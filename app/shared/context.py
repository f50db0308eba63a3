"""Request context management using contextvars.

Async-safe storage for request-scoped values used by logging: the request
id (set by RequestIDMiddleware) and the authenticated user id (set once
the bearer token is resolved).

Usage:
    token = set_request_id("abc123")
    ...
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_user_id: ContextVar[int | None] = ContextVar("current_user_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Bind request_id to the current task; returns a token for reset."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    return _request_id.get()


def set_current_user_id(user_id: int | None) -> None:
    """Record the authenticated user for log records of this request."""
    _current_user_id.set(user_id)


def get_current_user_id() -> int | None:
    return _current_user_id.get()
