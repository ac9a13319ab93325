"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from bookkit.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks BOOKKIT_DB_PATH
            environment variable, then defaults to ~/.bookkit/bookkit.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("BOOKKIT_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".bookkit"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "bookkit.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
