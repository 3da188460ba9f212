"""Password hashing and verification (pwdlib, Argon2)."""

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

_hasher = PasswordHash.recommended()


def hash_password(password: str) -> str:
    """Hash a plain-text password for storage."""
    return _hasher.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    True if the password matches the stored hash.

    A stored value that is not a recognizable hash counts as a mismatch, so a
    corrupt row yields "invalid credentials" rather than a server error.
    """
    try:
        return _hasher.verify(plain_password, hashed_password)
    except UnknownHashError:
        return False
