# auth/models.py
"""
User model for authentication.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class User:
    """
    User account model.

    Records are created outside the login flow and are read-only here.

    Attributes:
        id: Unique user ID (integer primary key)
        email: User's email (unique, used for login)
        password_hash: Bcrypt-hashed password
        created_at: Account creation timestamp
    """
    id: int
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def normalize_email(email: str) -> str:
        """Lowercase and trim an email for storage and lookup."""
        return (email or "").lower().strip()

    def to_dict(self) -> dict:
        """Convert to dictionary (excludes password_hash for safety)."""
        return {
            "id": self.id,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }
