"""Load engine.

Restores table payloads read from a container into a database inside a
single transaction per container.
"""

from __future__ import annotations

import logging
from datetime import datetime
from itertools import islice
from typing import Any, Iterable, Iterator, Sequence

from dbdump.core.adapter import DatabaseAdapter
from dbdump.core.codec import RowCodec
from dbdump.core.container import Container
from dbdump.exceptions import AdapterError, ConfigurationError, FormatError
from dbdump.models.results import LoadResult, TableResult
from dbdump.models.table import Page, Record, TablePayload

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000


def _batches(records: Iterable[Any], size: int) -> Iterator[list[Any]]:
    iterator = iter(records)
    while batch := list(islice(iterator, size)):
        yield batch


class Loader:
    """Writes table payloads from a container into a database.

    Per table: clear existing rows (TRUNCATE, falling back to DELETE),
    insert the records in file order, then repair the primary-key
    sequence. Everything read from one container commits or rolls back
    together.

    Examples:
        >>> with create_adapter("postgresql://localhost/app") as adapter:
        ...     with YamlContainer.open(Path("dump.yml")) as container:
        ...         result = Loader(adapter).load(container, truncate=True)
    """

    def __init__(self, adapter: DatabaseAdapter, batch_size: int = DEFAULT_BATCH_SIZE):
        """Initialize loader.

        Args:
            adapter: Connected target adapter
            batch_size: Records per bulk insert

        Raises:
            ConfigurationError: If batch_size is not positive
        """
        if batch_size <= 0:
            raise ConfigurationError(f"batch_size must be positive, got {batch_size}")
        self.adapter = adapter
        self.batch_size = batch_size
        self.codec = RowCodec(adapter)

    def load(self, container: Container, truncate: bool = True) -> LoadResult:
        """Load every payload of a container in one transaction.

        Args:
            container: Container to read payloads from
            truncate: Clear each table before inserting

        Returns:
            LoadResult with per-table outcomes

        Raises:
            FormatError: If the container is malformed (transaction rolled back)
            AdapterError: If the database rejects a statement (transaction rolled back)
        """
        result = LoadResult(started_at=datetime.now(), source=container.name, truncate=truncate)
        with self.adapter.transaction():
            for payload in container.read_tables():
                result.tables.append(self.load_table(payload, truncate))
        result.finish()
        logger.info(
            "Loaded %d tables (%d rows) from %s in %.2fs",
            result.table_count,
            result.total_rows,
            container.name,
            result.duration_seconds,
        )
        return result

    def load_table(self, payload: TablePayload, truncate: bool = True) -> TableResult:
        """Clear, fill and re-sequence one table.

        A payload without columns is the "no data" marker: the table is
        cleared (if requested) but nothing is inserted.

        Raises:
            FormatError: If the payload carries records but no columns
        """
        table = payload.table
        result = TableResult(table=table)

        if truncate:
            result.used_delete_fallback = self.truncate_table(table)
            result.truncated = True

        if payload.has_columns:
            result.rows = self.load_records(table, payload.columns, payload.records)
        elif any(True for _ in payload.records or ()):
            raise FormatError(f"Table {table} has records but no column list")
        else:
            result.skipped = True

        result.sequence_reset = self.reset_pk_sequence(table)
        logger.info("Loaded %s: %d rows", table, result.rows)
        return result

    def truncate_table(self, table: str) -> bool:
        """Remove all rows of a table.

        Returns:
            True if TRUNCATE was rejected and DELETE was used instead
        """
        try:
            self.adapter.truncate(table)
            return False
        except AdapterError as e:
            logger.debug("TRUNCATE of %s failed, using DELETE: %s", table, e)
            self.adapter.delete_all(table)
            return True

    def load_records(self, table: str, columns: Sequence[str], records: Iterable[Record]) -> int:
        """Insert records positionally mapped onto ``columns``, in batches.

        Text values in boolean target columns are parsed as booleans
        (t/true/1, f/false/0, any case).

        Returns:
            Number of records inserted

        Raises:
            FormatError: If a record is not a list, its length differs from the
                columns, or a boolean column holds unrecognized text
        """
        columns = list(columns)
        positions = self._boolean_positions(table, columns)
        inserted = 0
        for batch in _batches(records or (), self.batch_size):
            page = self._checked(table, columns, batch, inserted)
            if positions:
                try:
                    page = [self.codec.restore_record(record, positions) for record in page]
                except FormatError as e:
                    raise FormatError(f"Table {table}: {e}") from e
            inserted += self.adapter.insert_rows(table, columns, page)
            logger.debug("Inserted %d rows into %s", inserted, table)
        return inserted

    def reset_pk_sequence(self, table: str) -> bool:
        """Repair the table's primary-key sequence if the engine supports it.

        Failures are logged and swallowed: the data is already in place.

        Returns:
            True if the sequence was reset
        """
        if not self.adapter.supports_sequence_reset:
            return False
        try:
            self.adapter.reset_sequence(table)
            return True
        except (AdapterError, NotImplementedError) as e:
            logger.warning("Could not reset primary-key sequence of %s: %s", table, e)
            return False

    def _boolean_positions(self, table: str, columns: list[str]) -> list[int]:
        boolean_names = {col.name for col in self.adapter.columns(table) if col.is_boolean}
        return [i for i, name in enumerate(columns) if name in boolean_names]

    @staticmethod
    def _checked(table: str, columns: list[str], batch: list[Any], offset: int) -> Page:
        for i, record in enumerate(batch):
            if not isinstance(record, (list, tuple)):
                raise FormatError(
                    f"Table {table}, record {offset + i + 1}: expected a list of values, "
                    f"got {type(record).__name__}"
                )
            if len(record) != len(columns):
                raise FormatError(
                    f"Table {table}, record {offset + i + 1}: {len(record)} values "
                    f"for {len(columns)} columns"
                )
        return [list(record) for record in batch]
