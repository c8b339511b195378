"""Table, column and payload models.

This module defines the in-memory representation of a table's schema
as reported by an adapter, and the serialized form of a table's data
that flows between the dump/load engines and containers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field as PydanticField

BOOLEAN = "boolean"

# A record is positional: values are aligned 1:1 with the column-name list.
Record = list[Any]
Page = list[Record]


class Column(BaseModel):
    """A table column as reported by the database adapter.

    Only the ``boolean`` type tag is interpreted by dbdump. Every other tag
    is the engine's normalized type name and is passed through untouched.

    Examples:
        >>> Column(name="is_admin", type_tag="boolean").is_boolean
        True
        >>> Column(name="name", type_tag="varchar").is_boolean
        False
    """

    name: str = PydanticField(
        ...,
        description="Column name",
    )

    type_tag: str = PydanticField(
        "unknown",
        description="Normalized type tag ('boolean' is the only distinguished tag)",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def is_boolean(self) -> bool:
        """Whether values of this column get boolean coercion."""
        return self.type_tag == BOOLEAN


@dataclass
class TablePayload:
    """Serialized content of one table: column names plus records.

    ``columns`` set to ``None`` (or empty) is the explicit "no data" marker:
    the loader clears the table but inserts nothing.

    Records may be any iterable, so containers can hand them over lazily.
    """

    table: str
    columns: Optional[list[str]] = None
    records: Iterable[Record] = field(default_factory=list)

    @property
    def has_columns(self) -> bool:
        """Whether the payload declares a column list."""
        return bool(self.columns)
