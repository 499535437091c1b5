"""Database layer for farmledger."""

from farmledger.database.base import Database
from farmledger.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
