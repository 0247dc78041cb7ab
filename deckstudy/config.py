"""
Runtime configuration.

Values come from the environment (a local .env file is loaded first).

- DATABASE_URL: SQLAlchemy URL for the record store. When unset, an SQLite
  file under logs/ is used.
- TEST_MODE: "true" switches to the test database.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DB_DIR = Path(__file__).parent.parent / "logs"
DB_NAME = "deckstudy"


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return os.getenv("TEST_MODE", "false").lower() == "true"


def get_database_url() -> str:
    """
    Get the record store URL.

    In test mode the database name is prefixed with "test_", both for the
    default SQLite file and for an explicit DATABASE_URL.

    Returns:
        SQLAlchemy database URL
    """
    base_url = os.getenv("DATABASE_URL")
    test_mode = is_test_mode()

    if base_url:
        if test_mode:
            return base_url.replace(DB_NAME, f"test_{DB_NAME}")
        return base_url

    db_name = f"test_{DB_NAME}.db" if test_mode else f"{DB_NAME}.db"
    DB_DIR.mkdir(exist_ok=True)
    return f"sqlite:///{DB_DIR / db_name}"
