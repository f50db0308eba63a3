"""Password hashing: bcrypt over a SHA-256 pre-hash.

bcrypt only reads the first 72 bytes of its input; hashing the password
with SHA-256 first (base64-encoded, 44 bytes) keeps long passphrases intact.
"""

import base64
import hashlib

import bcrypt


def _prehash(password: str) -> bytes:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def get_password_hash(password: str) -> str:
    """Return a bcrypt hash suitable for app_user.hashed_password."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches; False for malformed hashes."""
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False
