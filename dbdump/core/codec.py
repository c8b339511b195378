"""Row value normalization between engines and serialized payloads.

Engines disagree on how booleans are stored: PostgreSQL returns native
booleans, SQLite and MySQL return 0/1 integers, some drivers hand back
``'t'``/``'f'`` strings. The codec coerces boolean columns so a dump from
one engine loads into another without flipping truthiness.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from dbdump.core.adapter import DatabaseAdapter
from dbdump.exceptions import FormatError
from dbdump.models.table import Column, Page, Record

# Raw values that denote true in a boolean column, across engines
TRUE_VALUES: tuple[Any, ...] = ("t", "1", True, 1)

# Text spellings accepted for boolean columns on load (case-insensitive)
TEXT_BOOLEANS: dict[str, bool] = {
    "t": True,
    "true": True,
    "1": True,
    "f": False,
    "false": False,
    "0": False,
}


def is_boolean(value: Any) -> bool:
    """Whether a value is already a native boolean."""
    return value is True or value is False


def to_storage_boolean(value: Any) -> bool:
    """Coerce a raw boolean-column value to a native boolean.

    Examples:
        >>> to_storage_boolean("t"), to_storage_boolean("1"), to_storage_boolean(1)
        (True, True, True)
        >>> to_storage_boolean("f"), to_storage_boolean(0), to_storage_boolean(None)
        (False, False, False)
    """
    if is_boolean(value):
        return value
    return value in TRUE_VALUES


def from_text_boolean(value: str) -> bool:
    """Parse a serialized boolean.

    Examples:
        >>> from_text_boolean("TRUE"), from_text_boolean("f")
        (True, False)

    Raises:
        FormatError: If the text is not a known boolean spelling
    """
    try:
        return TEXT_BOOLEANS[value.strip().lower()]
    except KeyError:
        raise FormatError(f"Not a boolean value: {value!r}") from None


class RowCodec:
    """Normalizes rows for serialization and restores them for insertion.

    Quoting is delegated to the adapter's dialect so escaping rules are
    never hand-rolled.
    """

    def __init__(self, adapter: DatabaseAdapter):
        self.adapter = adapter

    @staticmethod
    def boolean_positions(columns: Sequence[Column]) -> list[int]:
        """Indexes of the boolean-tagged columns."""
        return [i for i, col in enumerate(columns) if col.is_boolean]

    @staticmethod
    def normalize_record(record: Sequence[Any], positions: Iterable[int]) -> Record:
        """Coerce the boolean columns of one dumped record."""
        normalized = list(record)
        for i in positions:
            normalized[i] = to_storage_boolean(normalized[i])
        return normalized

    def normalize_records(self, records: Iterable[Sequence[Any]], positions: Sequence[int]) -> Page:
        """Coerce the boolean columns of a page of dumped records."""
        if not positions:
            return [list(record) for record in records]
        return [self.normalize_record(record, positions) for record in records]

    @staticmethod
    def restore_record(record: Sequence[Any], positions: Iterable[int]) -> Record:
        """Coerce text values loaded into boolean columns.

        Text containers (CSV) cannot carry native booleans. Only string
        values are converted; ``None`` and native values pass through.

        Raises:
            FormatError: If a string is not a known boolean spelling
        """
        restored = list(record)
        for i in positions:
            if isinstance(restored[i], str):
                restored[i] = from_text_boolean(restored[i])
        return restored

    def quote_value(self, value: Any) -> str:
        """Render a value as a SQL literal via the adapter."""
        return self.adapter.quote_value(value)

    def quote_identifier(self, name: str) -> str:
        """Quote a table or column name via the adapter."""
        return self.adapter.quote_identifier(name)
