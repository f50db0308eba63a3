"""Input sanitization for free-text fields, codes, and search terms."""

import re

import nh3

# Unit, role and permission codes: alphanumeric plus underscore, hyphen, dot.
CODE_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

_LIKE_ESCAPE = "\\"


def strip_html(value: str | None) -> str | None:
    """Remove all HTML from a display string (names, descriptions)."""
    if not value:
        return value
    return nh3.clean(value, tags=set(), attributes={})


def validate_code(value: str) -> str:
    """Return value if it is a well-formed code; raise ValueError otherwise."""
    if not value or not CODE_PATTERN.match(value):
        raise ValueError(
            "Code must be non-empty and contain only letters, digits, '_', '-' or '.'"
        )
    return value


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term matches literally (escape char '\\')."""
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )
