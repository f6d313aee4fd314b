"""Database layer for cajachica application."""

from cajachica.database.base import Database
from cajachica.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
