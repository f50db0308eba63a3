"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure and scope defaults.
"""

# Cache key prefixes
CACHE_PREFIX_PERMISSION = "permission"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Action suffixes that trigger scope tiers when no explicit policy is configured.
FULL_SCOPE_ACTION = "delete"
UNIT_SCOPE_ACTION = "update"

# Separator between resource and action in a permission code (resource.action).
PERMISSION_CODE_SEP = "."
