"""Password hashing with bcrypt.

bcrypt salts every hash randomly and ``checkpw`` compares in constant time.
Passwords are truncated to 72 bytes, bcrypt's input limit.
"""

import bcrypt

from core.config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with a fresh random salt."""
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False
