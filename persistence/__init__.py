# persistence/__init__.py
"""
Persistence layer.

Provides SQLite-backed storage for user accounts.
"""

from persistence.db import get_db, init_db, close_db, reset_db, set_db_path

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "reset_db",
    "set_db_path",
]
