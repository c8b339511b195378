"""In-memory container implementation.

This module provides a container that keeps payloads as Python objects,
for tests and for callers that move data between two live databases
without touching disk.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Sequence

from dbdump.core.container import Container
from dbdump.exceptions import FormatError
from dbdump.models.table import Record, TablePayload


class MemoryContainer(Container):
    """In-memory container - no serialization, Python values as-is.

    Tables are kept in insertion order. ``events`` records the framing
    calls, which lets callers check the header/columns/records/trailer
    sequence.

    Examples:
        >>> container = MemoryContainer()
        >>> Dumper(source_adapter).dump(container)
        >>> Loader(target_adapter).load(container)
    """

    extension = "mem"

    def __init__(self, payloads: Optional[Sequence[TablePayload]] = None, **kwargs: Any):
        """Initialize memory container.

        Args:
            payloads: Optional payloads to serve from :meth:`read_tables`
            **kwargs: Ignored (no stream)
        """
        super().__init__(stream=None)
        self.tables: dict[str, TablePayload] = {}
        self.events: list[tuple[str, str]] = []
        for payload in payloads or []:
            self.tables[payload.table] = TablePayload(
                payload.table, payload.columns, list(payload.records)
            )

    @property
    def name(self) -> str:
        return "<memory>"

    def before_table(self, table: str) -> None:
        self.events.append(("before_table", table))

    def write_columns(self, table: str, columns: Sequence[str]) -> None:
        self.events.append(("columns", table))
        self.tables[table] = TablePayload(table, list(columns), [])

    def write_records(self, table: str, records: Sequence[Record]) -> None:
        if table not in self.tables:
            raise FormatError(f"Records written for {table} before its columns")
        self.events.append(("records", table))
        self.tables[table].records.extend(list(record) for record in records)

    def after_table(self, table: str) -> None:
        self.events.append(("after_table", table))

    def read_tables(self) -> Iterator[TablePayload]:
        yield from self.tables.values()

    def records(self, table: str) -> list[Record]:
        """Records stored for a table (empty if the table was not written)."""
        payload = self.tables.get(table)
        return list(payload.records) if payload else []
