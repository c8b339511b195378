"""SQLite adapter implementation using SQLAlchemy.

This module provides dump/load access to SQLite databases.
"""

from __future__ import annotations

from sqlalchemy import text

from dbdump.exceptions import ConnectionError
from dbdump.operators.sql.adapter import SQLAdapter


class SQLiteAdapter(SQLAdapter):
    """SQLite adapter using SQLAlchemy.

    SQLite-specific behavior:
    - No TRUNCATE statement: ``truncate`` fails and the loader falls back
      to DELETE
    - Sequence repair updates ``sqlite_sequence`` for AUTOINCREMENT tables;
      plain INTEGER PRIMARY KEY tables derive the next rowid themselves

    Configuration keys:
        - database: Database file path (required, or ":memory:" for in-memory)
        - url: Full connection string (alternative)
        - echo: Enable SQL logging (default: False)

    Examples:
        >>> with SQLiteAdapter({"database": "/path/to/app.db"}) as adapter:
        ...     print(adapter.list_tables())
    """

    def _build_connection_string(self) -> str:
        """Build SQLite connection string from config.

        Raises:
            ConnectionError: If required config is missing
        """
        if self.config.get("url") or self.config.get("connection_string"):
            return super()._build_connection_string()

        if "database" not in self.config:
            raise ConnectionError("Missing required config key: database")

        return f"sqlite:///{self.config['database']}"

    def _get_database_name(self) -> str:
        return "SQLite"

    @property
    def supports_sequence_reset(self) -> bool:
        return True

    def reset_sequence(self, table: str) -> None:
        """Set the AUTOINCREMENT counter to the table's highest key.

        No-op for tables without a single-column primary key or without an
        entry in ``sqlite_sequence``.
        """
        primary_key = self.primary_key(table)
        if len(primary_key) != 1:
            return

        key = self.quote_identifier(primary_key[0])
        with self._errors(f"reset sequence of {table}"), self._connection() as conn:
            has_sequences = conn.execute(
                text("SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'sqlite_sequence'")
            ).first()
            if has_sequences is None:
                return
            conn.execute(
                text(
                    f"UPDATE sqlite_sequence SET seq = "
                    f"(SELECT COALESCE(MAX({key}), 0) FROM {self.quote_table(table)}) "
                    f"WHERE name = :name"
                ),
                {"name": table},
            )
