"""Base Container abstract class.

This module defines the Container interface: the format-specific sink
that dumped tables are written to, and the source that loads read them
back from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Iterator, Optional, Sequence

from dbdump.models.table import Record, TablePayload


class Container(ABC):
    """Abstract base class for all serialization containers.

    Dump side, per table, in this order:
    1. before_table() - table header / framing
    2. write_columns() - column-name list, once (skipped for empty tables)
    3. write_records() - one call per page, in page order
    4. after_table() - table trailer / framing

    Load side:
    - read_tables() - yields one TablePayload per table in the source

    A container wraps a text stream; :meth:`open` opens a file with the
    options the format needs.

    Examples:
        Writing:
        >>> with YamlContainer.open(Path("dump.yml"), "w") as container:
        ...     dumper.dump(container)

        Reading:
        >>> with YamlContainer.open(Path("dump.yml"), "r") as container:
        ...     for payload in container.read_tables():
        ...         print(payload.table, payload.columns)
    """

    # File extension used for per-table files
    extension: str = ""

    # Keyword arguments for open(); CSV needs newline=""
    open_options: dict[str, Any] = {"encoding": "utf-8"}

    def __init__(self, stream: Optional[IO[str]] = None):
        """Initialize container around a text stream.

        Args:
            stream: Text stream to write to or read from
        """
        self.stream = stream

    @classmethod
    def open(cls, path: Path, mode: str = "r") -> Container:
        """Open a file and wrap it in a container.

        The container owns the file and closes it on :meth:`close` or when
        used as a context manager.
        """
        return cls(open(path, mode, **cls.open_options))

    def close(self) -> None:
        """Close the underlying stream, if any."""
        if self.stream is not None:
            self.stream.close()

    def __enter__(self) -> Container:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @property
    def name(self) -> str:
        """Human-readable source/target name for messages."""
        return str(getattr(self.stream, "name", "<stream>"))

    # ------------------------------------------------------------------
    # Dump side
    # ------------------------------------------------------------------

    def before_table(self, table: str) -> None:
        """Write framing that precedes a table. No-op by default."""
        pass

    @abstractmethod
    def write_columns(self, table: str, columns: Sequence[str]) -> None:
        """Write the column-name list of a table.

        Raises:
            FormatError: If the columns cannot be written
        """
        pass

    @abstractmethod
    def write_records(self, table: str, records: Sequence[Record]) -> None:
        """Append one page of records for a table.

        Raises:
            FormatError: If a value cannot be serialized
        """
        pass

    def after_table(self, table: str) -> None:
        """Write framing that follows a table. No-op by default."""
        pass

    # ------------------------------------------------------------------
    # Load side
    # ------------------------------------------------------------------

    @abstractmethod
    def read_tables(self) -> Iterator[TablePayload]:
        """Read table payloads in source order.

        Raises:
            FormatError: If the source is malformed
        """
        pass
