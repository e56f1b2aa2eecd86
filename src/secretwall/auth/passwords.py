"""Password hashing for local accounts."""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_PH = PasswordHasher()


def hash_password(plain: str) -> str:
    """Hash a password. The returned string embeds its own random salt."""
    return _PH.hash(plain)


def verify_password(hash_value: str | None, plain: str) -> bool:
    if not hash_value:
        return False
    try:
        return _PH.verify(hash_value, plain)
    except (VerificationError, InvalidHashError):
        return False
