"""
Password hashing and session token helpers.
"""

from __future__ import annotations

import re
import secrets

import bcrypt

TOKEN_BYTES = 32

# bcrypt ignores everything past 72 bytes; callers reject longer passwords
BCRYPT_MAX_BYTES = 72

# token_urlsafe(32) yields 43 characters; allow some slack for older tokens
_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,128}$")


def hash_password(password: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash of the password."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash, or the password is over 72 bytes
        return False


def generate_token() -> str:
    """Generate an opaque, URL-safe session token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def is_well_formed_token(token: str | None) -> bool:
    """Whether a presented token could have been issued by generate_token."""
    return bool(token) and _TOKEN_PATTERN.match(token) is not None
