"""Generic SQL adapter for SQLAlchemy-based databases.

``SQLAdapter`` is fully functional and can be used directly for any SQL
database supported by SQLAlchemy. Engine-specific subclasses
(SQLiteAdapter, PostgresAdapter, MySQLAdapter) override connection string
building, type mapping and sequence repair.
"""

from dbdump.operators.sql.adapter import SQLAdapter

__all__ = ["SQLAdapter"]
