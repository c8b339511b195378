"""Dump engine.

Streams every selected table out of a database into a container, one
bounded page at a time.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterator, Optional

from dbdump.core.adapter import DatabaseAdapter
from dbdump.core.codec import RowCodec
from dbdump.core.container import Container
from dbdump.core.selector import TableSelector
from dbdump.exceptions import ConfigurationError
from dbdump.models.results import DumpResult, TableResult
from dbdump.models.table import Page

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000


class Dumper:
    """Reads tables page by page and writes them to a container.

    Memory use per table is bounded by the page size: a page is written
    to the container before the next one is read. Adapter failures are not
    caught; a failed dump leaves a partial container behind.

    Examples:
        >>> with create_adapter("sqlite:///app.db") as adapter:
        ...     with YamlContainer.open(Path("dump.yml"), "w") as container:
        ...         result = Dumper(adapter, page_size=500).dump(container)
        ...     print(f"Dumped {result.total_rows} rows")
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        selector: Optional[TableSelector] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """Initialize dumper.

        Args:
            adapter: Connected source adapter
            selector: Table selection policy (default: every non-bookkeeping table)
            page_size: Rows per page query

        Raises:
            ConfigurationError: If page_size is not positive
        """
        if page_size <= 0:
            raise ConfigurationError(f"page_size must be positive, got {page_size}")
        self.adapter = adapter
        self.selector = selector or TableSelector(adapter)
        self.page_size = page_size
        self.codec = RowCodec(adapter)

    def dump(self, container: Container, tables: Optional[list[str]] = None) -> DumpResult:
        """Dump every selected table into one container.

        Tables are written in lexicographic order, each framed by the
        container's before_table/after_table hooks.

        Args:
            container: Container to write to
            tables: Tables to dump instead of the selector's choice

        Returns:
            DumpResult with per-table row and page counts

        Raises:
            AdapterError: If reading from the database fails
            FormatError: If the container cannot serialize a value
        """
        result = DumpResult(started_at=datetime.now(), target=container.name)
        for table in (self.selector.tables() if tables is None else tables):
            container.before_table(table)
            result.tables.append(self.dump_table(container, table))
            container.after_table(table)
        result.finish()
        logger.info(
            "Dumped %d tables (%d rows) to %s in %.2fs",
            result.table_count,
            result.total_rows,
            container.name,
            result.duration_seconds,
        )
        return result

    def dump_table(self, container: Container, table: str) -> TableResult:
        """Write the column list and all pages of one table.

        Empty tables write nothing between the framing hooks.
        """
        if self.adapter.row_count(table) == 0:
            logger.info("Skipping empty table %s", table)
            return TableResult(table=table, skipped=True)

        columns = self.adapter.columns(table)
        container.write_columns(table, [col.name for col in columns])

        result = TableResult(table=table)
        for page in self.each_page(table):
            container.write_records(table, page)
            result.rows += len(page)
            result.pages += 1
        logger.info("Dumped %s: %d rows in %d pages", table, result.rows, result.pages)
        return result

    def each_page(self, table: str, page_size: Optional[int] = None) -> Iterator[Page]:
        """Yield the records of a table in pages, boolean columns normalized.

        The number of pages is fixed up front from the row count; page ``i``
        is one query ordered by the table's sort key with offset
        ``i * page_size``.

        Args:
            table: Table name
            page_size: Rows per page (default: the dumper's page size)

        Yields:
            Lists of records in the table's column order

        Raises:
            ConfigurationError: If page_size is not positive
        """
        if page_size is None:
            page_size = self.page_size
        if page_size <= 0:
            raise ConfigurationError(f"page_size must be positive, got {page_size}")
        total = self.adapter.row_count(table)
        pages = math.ceil(total / page_size)
        positions = self.codec.boolean_positions(self.adapter.columns(table))
        keys = self.selector.sort_keys(table)

        for i in range(pages):
            logger.debug("Reading %s page %d/%d", table, i + 1, pages)
            page = self.adapter.select_page(table, keys, i * page_size, page_size)
            yield self.codec.normalize_records(page, positions)
