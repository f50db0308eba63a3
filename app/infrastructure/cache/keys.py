"""Cache key builders. Single place for key format (DRY)."""

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_PERMISSION,
)


def permission_key(user_id: int) -> str:
    """Cache key for a user's resolved permission set."""
    return f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}{int(user_id)}"


def permission_pattern() -> str:
    """Glob pattern matching every cached permission set."""
    return f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}*"

