# auth/password.py
"""
Password hashing using bcrypt.

The login flow only ever compares; hashing is used when seeding users.
"""

from __future__ import annotations

import bcrypt
import logging
import os

_logger = logging.getLogger(__name__)

# Work factor (cost) - higher = slower but more secure
DEFAULT_BCRYPT_ROUNDS = 12
MIN_BCRYPT_ROUNDS = 4


def _bcrypt_rounds() -> int:
    """Read the work factor from SESSIONGATE_BCRYPT_ROUNDS."""
    raw = os.environ.get("SESSIONGATE_BCRYPT_ROUNDS")
    if raw is None:
        return DEFAULT_BCRYPT_ROUNDS
    try:
        rounds = int(raw)
    except ValueError:
        _logger.warning(f"SESSIONGATE_BCRYPT_ROUNDS='{raw}' is not an integer; using {DEFAULT_BCRYPT_ROUNDS}")
        return DEFAULT_BCRYPT_ROUNDS
    return max(rounds, MIN_BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string (includes salt)
    """
    if not password:
        raise ValueError("Password cannot be empty")

    salt = bcrypt.gensalt(rounds=_bcrypt_rounds())
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)

    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        password: Plain text password to verify
        password_hash: Stored bcrypt hash

    Returns:
        True if password matches, False otherwise
    """
    if not password or not password_hash:
        return False

    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        # Malformed hash or oversized password
        _logger.warning(f"Password verification error: {e}")
        return False
