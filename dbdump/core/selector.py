"""Table selection and scan ordering.

Decides which tables a dump or load touches and in what order rows are
read from each of them.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Union

from dbdump.core.adapter import DatabaseAdapter

# Engine/framework bookkeeping tables, never dumped or loaded
IGNORED_TABLES: frozenset[str] = frozenset(
    {
        "schema_info",
        "schema_migrations",
        "ar_internal_metadata",
        "alembic_version",
    }
)

_LIST_DELIMITERS = re.compile(r"[:,]")

TableList = Union[str, Iterable[str], None]


def parse_table_list(value: TableList) -> list[str]:
    """Parse an include/exclude list.

    Accepts a string delimited by ``:`` or ``,``, an iterable of names, or
    ``None``. Whitespace is stripped and empty names are dropped.

    Examples:
        >>> parse_table_list("users: posts,comments")
        ['users', 'posts', 'comments']
        >>> parse_table_list(None)
        []
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = _LIST_DELIMITERS.split(value)
    return [name.strip() for name in value if name and name.strip()]


def select_tables(
    all_tables: Iterable[str],
    include: TableList = None,
    exclude: TableList = None,
    ignored: Iterable[str] = IGNORED_TABLES,
) -> list[str]:
    """Compute the sorted set of tables to operate on.

    The candidates are ``include`` when non-empty, otherwise every table.
    Ignored bookkeeping tables and ``exclude`` are removed. Names that do
    not exist are dropped silently, so one include/exclude list can be
    reused across databases of different shapes.

    Examples:
        >>> select_tables(["users", "posts", "schema_migrations"])
        ['posts', 'users']
        >>> select_tables(["users", "posts"], include="users:ghosts")
        ['users']
    """
    existing = set(all_tables)
    include_names = parse_table_list(include)
    candidates = existing & set(include_names) if include_names else existing
    return sorted(candidates - set(ignored) - set(parse_table_list(exclude)))


def sort_keys(column_names: list[str]) -> list[str]:
    """Choose the columns that order a table scan.

    Uses the first column, unless the first two columns both end in
    ``_id``: such tables look like many-to-many join tables without a
    surrogate key, and both columns are used. The key is not guaranteed to
    be unique; ties only affect order within a page.

    Examples:
        >>> sort_keys(["user_id", "group_id", "created_at"])
        ['user_id', 'group_id']
        >>> sort_keys(["id", "name", "email"])
        ['id']
    """
    first_two = column_names[:2]
    if len(first_two) == 2 and all(name.endswith("_id") for name in first_two):
        return first_two
    return column_names[:1]


class TableSelector:
    """Binds the selection policy to an adapter.

    Examples:
        >>> selector = TableSelector(adapter, exclude="audit_log")
        >>> for table in selector.tables():
        ...     print(table, selector.sort_keys(table))
    """

    def __init__(
        self,
        adapter: DatabaseAdapter,
        include: TableList = None,
        exclude: TableList = None,
        ignored: Optional[Iterable[str]] = None,
    ):
        self.adapter = adapter
        self.include = parse_table_list(include)
        self.exclude = parse_table_list(exclude)
        self.ignored = frozenset(IGNORED_TABLES if ignored is None else ignored)

    def tables(self) -> list[str]:
        """Selected tables in lexicographic order."""
        return select_tables(self.adapter.list_tables(), self.include, self.exclude, self.ignored)

    def sort_keys(self, table: str) -> list[str]:
        """Scan-order columns of a table."""
        return sort_keys([col.name for col in self.adapter.columns(table)])
