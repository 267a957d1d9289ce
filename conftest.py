"""Configure pytest for the sessiongate project."""
import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Test Environment Configuration
# =============================================================================
# Set environment for tests BEFORE any imports
os.environ.setdefault("SESSIONGATE_ENV", "test")
os.environ.setdefault("SESSIONGATE_SECRET_KEY", "test-secret-key")
# Cheapest bcrypt work factor keeps the suite fast
os.environ.setdefault("SESSIONGATE_BCRYPT_ROUNDS", "4")

# Add project root so app/auth/persistence import without installation
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def fresh_db(tmp_path):
    """
    Point persistence at an empty database file for one test.

    A file (not :memory:) so the TestClient's worker threads see the
    same data as the test thread.
    """
    from persistence.db import init_db, reset_db, set_db_path

    set_db_path(tmp_path / "test.db")
    init_db()
    yield tmp_path / "test.db"
    reset_db()
