"""Database layer — SQLite store lifecycle and connection handles."""

from addressbook.db.database import Database, open_store
from addressbook.db.schema import SCHEMA_DDL, TABLE_COLUMNS

__all__ = ["Database", "open_store", "SCHEMA_DDL", "TABLE_COLUMNS"]
