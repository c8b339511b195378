"""Result models for dump and load operations.

This module defines result classes that capture outcomes and metrics
from dumping and loading tables.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field as PydanticField


class TableResult(BaseModel):
    """Outcome of dumping or loading a single table."""

    table: str = PydanticField(
        ...,
        description="Table name",
    )

    rows: int = PydanticField(
        0,
        description="Number of records dumped or inserted",
        ge=0,
    )

    pages: int = PydanticField(
        0,
        description="Number of pages read (dump only)",
        ge=0,
    )

    skipped: bool = PydanticField(
        False,
        description="Whether the table produced no data (empty table or no-data payload)",
    )

    truncated: bool = PydanticField(
        False,
        description="Whether existing rows were cleared before loading",
    )

    used_delete_fallback: bool = PydanticField(
        False,
        description="Whether TRUNCATE was rejected and DELETE was used instead",
    )

    sequence_reset: bool = PydanticField(
        False,
        description="Whether the primary-key sequence was repaired",
    )

    model_config = {"extra": "forbid"}


class _OperationResult(BaseModel):
    """Shared fields of dump and load results."""

    tables: list[TableResult] = PydanticField(
        default_factory=list,
        description="Per-table results, in processing order",
    )

    started_at: datetime = PydanticField(
        ...,
        description="Operation start time",
    )

    completed_at: Optional[datetime] = PydanticField(
        None,
        description="Operation completion time",
    )

    duration_seconds: float = PydanticField(
        0.0,
        description="Duration of the operation in seconds",
        ge=0.0,
    )

    model_config = {"extra": "forbid"}

    @property
    def total_rows(self) -> int:
        """Total records across all tables."""
        return sum(t.rows for t in self.tables)

    @property
    def table_count(self) -> int:
        """Number of tables processed."""
        return len(self.tables)

    def finish(self) -> None:
        """Stamp completion time and duration."""
        self.completed_at = datetime.now()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    def merge(self, other: _OperationResult) -> None:
        """Append another result's tables to this one (used for directories)."""
        self.tables.extend(other.tables)


class DumpResult(_OperationResult):
    """Result of dumping one or more tables."""

    target: Optional[str] = PydanticField(
        None,
        description="File or directory written",
    )


class LoadResult(_OperationResult):
    """Result of loading one or more tables."""

    source: Optional[str] = PydanticField(
        None,
        description="File or directory read",
    )

    truncate: bool = PydanticField(
        True,
        description="Whether tables were cleared before loading",
    )
