"""dbdump core package.

This package contains the adapter and container interfaces, table
selection, row coercion and the dump/load engines.
"""

from dbdump.core.adapter import DatabaseAdapter
from dbdump.core.codec import RowCodec
from dbdump.core.container import Container
from dbdump.core.dumper import Dumper
from dbdump.core.helper import SerializationHelper
from dbdump.core.loader import Loader
from dbdump.core.selector import TableSelector
from dbdump.core.type_mapper import TypeMapper

__all__ = [
    "Container",
    "DatabaseAdapter",
    "Dumper",
    "Loader",
    "RowCodec",
    "SerializationHelper",
    "TableSelector",
    "TypeMapper",
]
