"""dbdump - Engine-agnostic database data dump and restore."""

__version__ = "0.1.0"

# Re-export key models for convenience
from dbdump.models import (
    Column,
    DumpResult,
    DumpSettings,
    LoadResult,
    TablePayload,
    TableResult,
)

# Re-export core classes for custom adapters and containers
from dbdump.core import (
    Container,
    DatabaseAdapter,
    Dumper,
    Loader,
    RowCodec,
    SerializationHelper,
    TableSelector,
)

# Re-export container implementations and the adapter registry
from dbdump.containers import CsvContainer, MemoryContainer, YamlContainer
from dbdump.operators import create_adapter

__all__ = [
    # Version
    "__version__",
    # Models
    "Column",
    "TablePayload",
    "DumpSettings",
    "DumpResult",
    "LoadResult",
    "TableResult",
    # Core
    "Container",
    "DatabaseAdapter",
    "Dumper",
    "Loader",
    "RowCodec",
    "SerializationHelper",
    "TableSelector",
    # Containers
    "CsvContainer",
    "MemoryContainer",
    "YamlContainer",
    # Adapters
    "create_adapter",
]
