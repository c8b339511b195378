"""dbdump models package.

This package contains the table/payload models, the settings model and
operation results.
"""

from dbdump.models.results import DumpResult, LoadResult, TableResult
from dbdump.models.settings import DumpSettings
from dbdump.models.table import BOOLEAN, Column, Page, Record, TablePayload

__all__ = [
    # Table models
    "BOOLEAN",
    "Column",
    "Page",
    "Record",
    "TablePayload",
    # Settings
    "DumpSettings",
    # Result models
    "DumpResult",
    "LoadResult",
    "TableResult",
]
