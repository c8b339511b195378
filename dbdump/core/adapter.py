"""Base DatabaseAdapter abstract class.

This module defines the DatabaseAdapter interface: the narrow capability
set through which the dump and load engines talk to a concrete
relational engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from dbdump.models.table import Column, Page, Record


class DatabaseAdapter(ABC):
    """Base class for database adapters.

    Adapters own the connection lifecycle, schema introspection, paged
    reads, quoting, bulk inserts and transactions. Engine-specific quirks
    (how to truncate, how to repair a sequence, how booleans are declared)
    stay behind this boundary; the dump and load engines never see them.

    Examples:
        Using an adapter as a context manager:
        >>> with SQLiteAdapter({"database": "app.db"}) as adapter:
        ...     for table in adapter.list_tables():
        ...         print(table, adapter.row_count(table))
    """

    def __init__(self, config: dict[str, Any]):
        """Initialize adapter with configuration.

        Args:
            config: Connection configuration dictionary
        """
        self.config = config
        self.connection: Optional[Any] = None

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the database.

        Raises:
            ConnectionError: If connection fails
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the database.

        Should handle cases where connection is already closed gracefully.
        """
        pass

    def __enter__(self) -> DatabaseAdapter:
        """Context manager entry: establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit: close connection."""
        self.disconnect()

    @property
    def is_connected(self) -> bool:
        """Check if connection is established."""
        return self.connection is not None

    # ------------------------------------------------------------------
    # Introspection and reads
    # ------------------------------------------------------------------

    @abstractmethod
    def list_tables(self) -> list[str]:
        """List the names of all tables in the database.

        Raises:
            AdapterError: If the table list cannot be read
        """
        pass

    @abstractmethod
    def columns(self, table: str) -> list[Column]:
        """Get the columns of a table in engine-reported order.

        Raises:
            AdapterError: If the table cannot be introspected
        """
        pass

    @abstractmethod
    def row_count(self, table: str) -> int:
        """Count the rows of a table.

        Raises:
            AdapterError: If the count query fails
        """
        pass

    @abstractmethod
    def select_page(
        self, table: str, sort_keys: Sequence[str], offset: int, limit: int
    ) -> Page:
        """Read one bounded page of a table.

        Args:
            table: Table name
            sort_keys: Column names imposing the scan order
            offset: Number of rows to skip
            limit: Maximum number of rows to return

        Returns:
            Records (lists of values) in the table's column order

        Raises:
            AdapterError: If the query fails
        """
        pass

    # ------------------------------------------------------------------
    # Quoting
    # ------------------------------------------------------------------

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Quote a table or column name using the engine's rules."""
        pass

    @abstractmethod
    def quote_value(self, value: Any) -> str:
        """Render a value as an escaped SQL literal using the engine's rules."""
        pass

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @abstractmethod
    def execute(self, sql: str, params: Optional[dict[str, Any]] = None) -> None:
        """Execute a SQL statement, inside the current transaction if any.

        Raises:
            AdapterError: If execution fails
        """
        pass

    @abstractmethod
    def insert_rows(self, table: str, columns: Sequence[str], records: Sequence[Record]) -> int:
        """Insert records, mapping values positionally onto ``columns``.

        Returns:
            Number of records inserted

        Raises:
            AdapterError: If the insert fails
        """
        pass

    @abstractmethod
    def truncate(self, table: str) -> None:
        """Remove all rows with the engine's fast path (TRUNCATE).

        Raises:
            AdapterError: If the engine rejects the truncate
        """
        pass

    @abstractmethod
    def delete_all(self, table: str) -> None:
        """Remove all rows with an unconditional DELETE.

        Raises:
            AdapterError: If the delete fails
        """
        pass

    @property
    def supports_sequence_reset(self) -> bool:
        """Whether :meth:`reset_sequence` is available for this engine."""
        return False

    def reset_sequence(self, table: str) -> None:
        """Repair the primary-key sequence / auto-increment counter of a table.

        Raises:
            NotImplementedError: If the engine has no such operation
            AdapterError: If the repair fails
        """
        raise NotImplementedError(f"{self.__class__.__name__} cannot reset sequences")

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @abstractmethod
    def begin_transaction(self) -> None:
        """Open a transaction; subsequent statements run inside it."""
        pass

    @abstractmethod
    def commit(self) -> None:
        """Commit the open transaction."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the open transaction."""
        pass

    @property
    @abstractmethod
    def in_transaction(self) -> bool:
        """Whether a transaction is currently open."""
        pass

    @contextmanager
    def transaction(self) -> Iterator[DatabaseAdapter]:
        """Run a block inside one transaction.

        Commits when the block completes, rolls back and re-raises when it
        raises.

        Examples:
            >>> with adapter.transaction():
            ...     adapter.delete_all("users")
            ...     adapter.insert_rows("users", ["id"], [[1], [2]])
        """
        self.begin_transaction()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        else:
            self.commit()
