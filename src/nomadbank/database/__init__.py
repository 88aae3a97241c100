"""Database layer for nomadbank application."""

from nomadbank.database.base import Database
from nomadbank.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
