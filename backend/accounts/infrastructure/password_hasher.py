"""Password Hasher: bcrypt wrapper with a fixed work factor.

Invariants:
    - Output is salted per call: hashing the same plaintext twice never
      yields the same string
    - Hashes are compared only via verify_password, never by equality
    - Every bcrypt failure surfaces as HashingError

Design Decisions:
    - Reject inputs over 72 bytes instead of letting bcrypt truncate them
      (ADR: two passwords sharing a 72-byte prefix must not collide)
"""

import logging

import bcrypt

from accounts.core.errors import HashingError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72


def hash_password(plaintext: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a plaintext password with bcrypt."""
    encoded = plaintext.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise HashingError(
            f"password exceeds {MAX_PASSWORD_BYTES} bytes",
        )
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(encoded, salt)
    except ValueError as e:
        logger.error(f"bcrypt rejected input: {e}")
        raise HashingError(f"could not hash password: {e}") from e
    return hashed.decode("utf-8")


def verify_password(plaintext: str, hashed_password: str) -> bool:
    """Check plaintext against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            plaintext.encode("utf-8"), hashed_password.encode("utf-8"),
        )
    except ValueError as e:
        # Malformed stored hash
        logger.warning(f"Password verification failed: {e}")
        return False
