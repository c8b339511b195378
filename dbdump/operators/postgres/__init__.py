"""PostgreSQL adapter for dbdump."""

from dbdump.operators.postgres.adapter import PostgresAdapter

__all__ = ["PostgresAdapter"]
