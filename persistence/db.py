# persistence/db.py
"""
SQLite database connection and schema management.

Holds the users table that backs the login flow. Users are created by
seeding (see auth.service.create_user); the web flow only reads them.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Union

_logger = logging.getLogger(__name__)

# Database file location (configurable via env var)
DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "sessiongate.db"
DB_PATH = Path(os.environ.get("SESSIONGATE_DB_PATH", str(DEFAULT_DB_PATH)))

# ":memory:" maps to one shared-cache database, alive while any connection is open
MEMORY_PATH = ":memory:"
SHARED_MEMORY_URI = "file:sessiongate?mode=memory&cache=shared"

# One connection per thread
_local = threading.local()
_init_lock = threading.Lock()
_initialized = False


def _get_connection() -> sqlite3.Connection:
    """Get thread-local database connection."""
    conn = getattr(_local, "connection", None)
    if conn is not None and getattr(_local, "path", None) != DB_PATH:
        # Path was switched (tests); drop the stale connection
        conn.close()
        conn = None

    if conn is None:
        if str(DB_PATH) == MEMORY_PATH:
            # Every thread must reach the same in-memory database
            target, uri = SHARED_MEMORY_URI, True
        else:
            DB_PATH.parent.mkdir(parents=True, exist_ok=True)
            target, uri = str(DB_PATH), False

        conn = sqlite3.connect(
            target,
            timeout=30.0,
            check_same_thread=False,
            uri=uri,
        )
        conn.execute("PRAGMA foreign_keys = ON")
        conn.row_factory = sqlite3.Row
        _local.connection = conn
        _local.path = DB_PATH

    return conn


@contextmanager
def get_db():
    """
    Get database connection context manager.

    Commits on success, rolls back and re-raises on error.

    Usage:
        with get_db() as conn:
            cursor = conn.execute("SELECT ...")
    """
    conn = _get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def init_db() -> None:
    """
    Initialize database schema.

    Creates tables if they don't exist.
    Safe to call multiple times (idempotent).
    """
    global _initialized

    with _init_lock:
        if _initialized:
            return

        with get_db() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            _logger.info(f"Database initialized at {DB_PATH}")
            _initialized = True


def close_db() -> None:
    """Close thread-local database connection."""
    if getattr(_local, "connection", None) is not None:
        _local.connection.close()
        _local.connection = None
        _local.path = None


def reset_db() -> None:
    """Reset database (for testing). Drops all tables."""
    global _initialized

    with _init_lock:
        with get_db() as conn:
            conn.execute("DROP TABLE IF EXISTS users")
        _initialized = False


def set_db_path(path: Union[str, Path]) -> None:
    """
    Point the persistence layer at another database file.

    Connections already open in other threads reconnect lazily on
    their next use.
    """
    global DB_PATH, _initialized

    with _init_lock:
        close_db()
        DB_PATH = Path(path)
        _initialized = False


def get_db_path() -> Path:
    """Get the database file path."""
    return DB_PATH
