# auth/service.py
"""
User store.

Handles:
- User lookup by id and by email
- Password verification
- Seeding helpers (create/delete)
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from auth.models import User
from auth.password import hash_password, verify_password
from persistence.db import get_db, init_db

_logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base authentication error."""
    pass


class UserExistsError(AuthError):
    """User with this email already exists."""
    pass


class InvalidCredentialsError(AuthError):
    """Unknown email or wrong password."""
    pass


class LoginRequiredError(AuthError):
    """A gated action was reached without a current user."""
    pass


def create_user(email: str, password: str) -> User:
    """
    Create a new user account.

    Args:
        email: User's email address
        password: Plain text password

    Returns:
        Created User object

    Raises:
        UserExistsError: If email already registered
        ValueError: If password is empty
    """
    init_db()

    email = User.normalize_email(email)
    if not email:
        raise ValueError("Email cannot be empty")

    password_hash = hash_password(password)
    created_at = datetime.now(timezone.utc)

    try:
        with get_db() as conn:
            cursor = conn.execute(
                """
                INSERT INTO users (email, password_hash, created_at)
                VALUES (?, ?, ?)
                """,
                (email, password_hash, created_at.isoformat()),
            )
            user_id = cursor.lastrowid
    except sqlite3.IntegrityError as e:
        raise UserExistsError(f"User with email {email} already exists") from e

    _logger.info(f"Created user: {email}")
    return User(id=user_id, email=email, password_hash=password_hash, created_at=created_at)


def delete_user(user_id: int) -> bool:
    """
    Delete a user.

    Sessions still pointing at the user are healed on their next request.

    Returns:
        True if deleted, False if not found
    """
    init_db()

    with get_db() as conn:
        cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        return cursor.rowcount > 0


def get_user_by_email(email: str) -> Optional[User]:
    """
    Get user by email address.

    Args:
        email: Email to look up

    Returns:
        User if found, None otherwise
    """
    init_db()
    email = User.normalize_email(email)
    if not email:
        return None

    with get_db() as conn:
        cursor = conn.execute(
            "SELECT * FROM users WHERE email = ?",
            (email,),
        )
        row = cursor.fetchone()

    if not row:
        return None

    return _row_to_user(row)


def get_user_by_id(user_id: int) -> Optional[User]:
    """
    Get user by ID.

    Args:
        user_id: User ID to look up

    Returns:
        User if found, None otherwise
    """
    init_db()

    with get_db() as conn:
        cursor = conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,),
        )
        row = cursor.fetchone()

    if not row:
        return None

    return _row_to_user(row)


def _row_to_user(row) -> User:
    """Convert a database row to a User object."""
    return User(
        id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def verify_user_password(user: User, password: str) -> bool:
    """Check a plaintext password against the user's stored hash."""
    return verify_password(password, user.password_hash)


def authenticate_user(email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Unknown email and wrong password raise the same error so callers
    cannot tell them apart.

    Args:
        email: User's email
        password: Plain text password

    Returns:
        Authenticated User object

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user = get_user_by_email(email)

    if not user:
        _logger.warning(f"Login attempt for non-existent user: {email}")
        raise InvalidCredentialsError("Invalid credentials")

    if not verify_user_password(user, password):
        _logger.warning(f"Invalid password for user: {user.email}")
        raise InvalidCredentialsError("Invalid credentials")

    _logger.info(f"User authenticated: {user.email}")
    return user
