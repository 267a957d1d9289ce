# auth/session.py
"""
Session helpers for the login flow.

Everything here is a plain function of the session mapping (and, for the
resolver, a user lookup callable), so handlers receive their state
explicitly instead of reading ambient globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, MutableMapping, Optional

from auth.models import User

_logger = logging.getLogger(__name__)

USER_ID_KEY = "user_id"
FLASH_KEY = "_flash"
FLASH_ERROR = "error"

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

SessionData = MutableMapping[str, Any]
UserLookup = Callable[[Any], Optional[User]]


@dataclass
class RequestContext:
    """Per-request auth state handed to route handlers."""
    session: SessionData
    current_user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None


def resolve_current_user(session: SessionData, find_user: UserLookup) -> Optional[User]:
    """
    Load the user referenced by the session.

    - No user_id: returns None without touching the store or the session.
    - user_id resolves: returns that user.
    - user_id is stale: removes it from the session and returns None.

    Never sets user_id and never raises for a missing or stale entry.
    """
    user_id = session.get(USER_ID_KEY)
    if user_id is None:
        return None

    user = find_user(user_id)
    if user is None:
        session.pop(USER_ID_KEY, None)
        _logger.info(f"Cleared stale session reference to user {user_id}")
        return None

    return user


def log_in(session: SessionData, user: User) -> None:
    """Bind the session to a user."""
    session[USER_ID_KEY] = user.id


def log_out(session: SessionData) -> bool:
    """
    Unbind the session from its user.

    Returns:
        True if a user_id was cleared, False if none was set
    """
    return session.pop(USER_ID_KEY, None) is not None


def set_flash(session: SessionData, key: str, message: str) -> None:
    """Store a one-shot message for the next render."""
    flashes = dict(session.get(FLASH_KEY) or {})
    flashes[key] = message
    session[FLASH_KEY] = flashes


def pop_flash(session: SessionData, key: str) -> Optional[str]:
    """Read a one-shot message and clear it."""
    flashes = dict(session.get(FLASH_KEY) or {})
    message = flashes.pop(key, None)
    if flashes:
        session[FLASH_KEY] = flashes
    else:
        session.pop(FLASH_KEY, None)
    return message
