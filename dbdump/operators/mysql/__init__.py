"""MySQL adapter for dbdump."""

from dbdump.operators.mysql.adapter import MySQLAdapter
from dbdump.operators.mysql.type_mapper import MySQLTypeMapper

__all__ = ["MySQLAdapter", "MySQLTypeMapper"]
