"""YAML container implementation.

One YAML document per table, written page by page:

    ---
    users:
      columns:
      - id
      - name
      records:
      - - 1
        - alice

Reading uses ``yaml.safe_load_all``.
"""

from __future__ import annotations

from datetime import time
from decimal import Decimal
from typing import Any, Iterator, Sequence
from uuid import UUID

import yaml

from dbdump.core.container import Container
from dbdump.exceptions import FormatError
from dbdump.models.table import Record, TablePayload


class _DumpSafeDumper(yaml.SafeDumper):
    """SafeDumper that also writes the database types YAML lacks, as strings."""


def _represent_as_string(dumper: yaml.SafeDumper, value: Any) -> yaml.Node:
    return dumper.represent_str(str(value))


def _represent_time(dumper: yaml.SafeDumper, value: time) -> yaml.Node:
    return dumper.represent_str(value.isoformat())


def _represent_memoryview(dumper: yaml.SafeDumper, value: memoryview) -> yaml.Node:
    return dumper.represent_binary(value.tobytes())


_DumpSafeDumper.add_representer(Decimal, _represent_as_string)
_DumpSafeDumper.add_representer(UUID, _represent_as_string)
_DumpSafeDumper.add_representer(time, _represent_time)
_DumpSafeDumper.add_representer(memoryview, _represent_memoryview)

_DUMP_OPTIONS: dict[str, Any] = {
    "Dumper": _DumpSafeDumper,
    "default_flow_style": False,
    "allow_unicode": True,
    "sort_keys": False,
}


class YamlContainer(Container):
    """YAML container (default format).

    The column list is written as a complete mapping; records are then
    appended as an indented block sequence so a table never has to be
    held in memory while dumping.
    """

    extension = "yml"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._records_open = False

    def write_columns(self, table: str, columns: Sequence[str]) -> None:
        self._records_open = False
        self._write(yaml.dump({table: {"columns": list(columns)}}, explicit_start=True, **_DUMP_OPTIONS))

    def write_records(self, table: str, records: Sequence[Record]) -> None:
        if not records:
            return
        if not self._records_open:
            self._write("  records:\n")
            self._records_open = True
        for record in records:
            self._write(self._indent(yaml.dump([list(record)], **_DUMP_OPTIONS)))

    def after_table(self, table: str) -> None:
        self._records_open = False

    def read_tables(self) -> Iterator[TablePayload]:
        try:
            for document in yaml.safe_load_all(self.stream):
                if document is None:
                    continue
                if not isinstance(document, dict):
                    raise FormatError(f"{self.name}: expected a mapping of tables, got {type(document).__name__}")
                for table, data in document.items():
                    if data is None:
                        continue
                    yield self._payload(str(table), data)
        except yaml.YAMLError as e:
            raise FormatError(f"Invalid YAML in {self.name}: {e}") from e

    def _payload(self, table: str, data: Any) -> TablePayload:
        if not isinstance(data, dict):
            raise FormatError(f"{self.name}: table {table} must map to 'columns' and 'records'")
        columns = data.get("columns")
        if columns is not None and not isinstance(columns, list):
            raise FormatError(f"{self.name}: columns of {table} must be a list")
        return TablePayload(
            table=table,
            columns=[str(name) for name in columns] if columns else None,
            records=data.get("records") or [],
        )

    def _write(self, text: str) -> None:
        if self.stream is None:
            raise FormatError("YamlContainer has no stream to write to")
        self.stream.write(text)

    @staticmethod
    def _indent(text: str) -> str:
        return "".join(f"  {line}" for line in text.splitlines(keepends=True))
