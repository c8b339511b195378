"""CSV container implementation.

Each table starts with a declaration row, then a header row of column
names, then one row per record:

    BEGIN_CSV_TABLE_DECLARATIONusersEND_CSV_TABLE_DECLARATION
    id,name,admin
    1,alice,t

CSV is text-only: booleans are written ``t``/``f`` and ``None`` as the
``\\N`` marker, so empty strings survive a round trip. Only the marker
loads back as ``None``.
"""

from __future__ import annotations

import csv
import re
from typing import Any, Iterator, Optional, Sequence

from dbdump.core.container import Container
from dbdump.exceptions import FormatError
from dbdump.models.table import Record, TablePayload

TABLE_DECLARATION = "BEGIN_CSV_TABLE_DECLARATION{table}END_CSV_TABLE_DECLARATION"
_DECLARATION_PATTERN = re.compile(r"^BEGIN_CSV_TABLE_DECLARATION(.+)END_CSV_TABLE_DECLARATION$")

# NULL marker, as in PostgreSQL and MySQL text dumps
NULL_MARKER = "\\N"


def _to_field(value: Any) -> Any:
    if value is True:
        return "t"
    if value is False:
        return "f"
    if value is None:
        return NULL_MARKER
    return value


def _from_field(value: str) -> Optional[str]:
    return None if value == NULL_MARKER else value


class CsvContainer(Container):
    """CSV container.

    Unlike YAML, the declaration row is written even for empty tables.
    Such a table loads as a "no data" payload: it is cleared, nothing is
    inserted.
    """

    extension = "csv"
    open_options = {"encoding": "utf-8", "newline": ""}

    def before_table(self, table: str) -> None:
        self._writer().writerow([TABLE_DECLARATION.format(table=table)])

    def write_columns(self, table: str, columns: Sequence[str]) -> None:
        self._writer().writerow(list(columns))

    def write_records(self, table: str, records: Sequence[Record]) -> None:
        writer = self._writer()
        for record in records:
            writer.writerow([_to_field(value) for value in record])

    def read_tables(self) -> Iterator[TablePayload]:
        current: Optional[TablePayload] = None
        try:
            for line_number, row in enumerate(csv.reader(self.stream), start=1):
                declaration = _DECLARATION_PATTERN.match(row[0]) if len(row) == 1 else None
                if declaration:
                    if current is not None:
                        yield current
                    current = TablePayload(table=declaration.group(1))
                elif current is None:
                    if row:
                        raise FormatError(
                            f"{self.name}, line {line_number}: data before any table declaration"
                        )
                elif current.columns is None:
                    current.columns = row
                else:
                    current.records.append([_from_field(value) for value in row])
        except csv.Error as e:
            raise FormatError(f"Invalid CSV in {self.name}: {e}") from e

        if current is not None:
            yield current

    def _writer(self) -> Any:
        if self.stream is None:
            raise FormatError("CsvContainer has no stream to write to")
        return csv.writer(self.stream)
