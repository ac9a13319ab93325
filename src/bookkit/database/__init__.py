"""Database layer for bookkit application."""

from bookkit.database.base import Database
from bookkit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
