"""Password hashing primitives using bcrypt.

Uses the ``bcrypt`` library directly (>=4.0). passlib[bcrypt] is avoided
because passlib is unmaintained and incompatible with bcrypt >=4.

bcrypt only reads the first 72 bytes of a password. bcrypt >=5 raises on
longer input instead of truncating, so both hashing and verification cut the
utf-8 encoding to 72 bytes themselves. Passwords that share their first 72
bytes therefore verify against each other.

These are the raw, blocking primitives. Errors from bcrypt propagate as-is;
CredentialService is responsible for logging and masking them.
"""

import bcrypt

from config.settings import settings

BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(plain: str, rounds: int | None = None) -> str:
    """Hash a plain-text password with a fresh salt. Returns a utf-8 hash string."""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed_bytes: bytes = bcrypt.hashpw(_password_bytes(plain), salt)
    return hashed_bytes.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time check of a plain-text password against a bcrypt hash.

    Raises ValueError when `hashed` is not a valid bcrypt hash.
    """
    return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
