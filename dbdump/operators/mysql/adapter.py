"""MySQL adapter implementation using SQLAlchemy."""

from __future__ import annotations

from dbdump.core.type_mapper import TypeMapper
from dbdump.exceptions import AdapterError
from dbdump.operators.mysql.type_mapper import MySQLTypeMapper
from dbdump.operators.sql.adapter import SQLAdapter


class MySQLAdapter(SQLAdapter):
    """MySQL / MariaDB adapter using SQLAlchemy.

    MySQL-specific behavior:
    - ``TINYINT(1)`` columns are tagged boolean
    - No sequence repair: InnoDB moves AUTO_INCREMENT past explicitly
      inserted keys on its own
    - TRUNCATE commits implicitly, so it is refused inside a transaction
      and the loader clears tables with DELETE instead

    Examples:
        >>> with MySQLAdapter({"url": "mysql+pymysql://root@localhost/app"}) as adapter:
        ...     print(adapter.list_tables())
    """

    def _get_type_mapper(self) -> TypeMapper:
        return MySQLTypeMapper()

    def _get_database_name(self) -> str:
        return "MySQL"

    def truncate(self, table: str) -> None:
        """Run ``TRUNCATE TABLE`` outside transactions only.

        Raises:
            AdapterError: If a transaction is open
        """
        if self.in_transaction:
            raise AdapterError(f"Cannot truncate {table} inside a transaction on MySQL")
        super().truncate(table)
