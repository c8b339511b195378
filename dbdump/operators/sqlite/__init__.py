"""SQLite adapter for dbdump."""

from dbdump.operators.sqlite.adapter import SQLiteAdapter

__all__ = ["SQLiteAdapter"]
