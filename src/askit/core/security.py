"""Password hashing built on bcrypt."""
from __future__ import annotations

import bcrypt

from askit.core.settings import settings

# bcrypt only looks at the first 72 bytes of the secret.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of ``password``.

    Args:
        password: Plaintext password (at most 72 bytes once UTF-8 encoded).
        rounds: Cost factor; defaults to the configured ``BCRYPT_ROUNDS``.

    Returns:
        The hash in modular crypt format, as text.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Return True if ``password`` matches the stored bcrypt ``hashed`` value."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash or the password is too long.
        return False
