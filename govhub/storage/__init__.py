"""Storage layer for PostgreSQL persistence."""

from govhub.storage.database import Database, close_database, get_database

__all__ = ["Database", "get_database", "close_database"]
