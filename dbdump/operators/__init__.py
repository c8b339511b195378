"""Database adapters and the adapter registry.

Adapters are resolved from the protocol of a SQLAlchemy URL. Custom
adapters can be named by full module path
(``"mycompany.db.OracleAdapter"``).
"""

from __future__ import annotations

import importlib
from typing import Any, Optional

from dbdump.core.adapter import DatabaseAdapter
from dbdump.exceptions import ConfigurationError

# Protocol → default adapter class (full module path)
DEFAULT_ADAPTERS: dict[str, str] = {
    "sqlite": "dbdump.operators.sqlite.SQLiteAdapter",
    "postgresql": "dbdump.operators.postgres.PostgresAdapter",
    "postgres": "dbdump.operators.postgres.PostgresAdapter",
    "mysql": "dbdump.operators.mysql.MySQLAdapter",
    "mariadb": "dbdump.operators.mysql.MySQLAdapter",
}

GENERIC_ADAPTER = "dbdump.operators.sql.SQLAdapter"


def get_connection_protocol(url: str) -> str:
    """Extract the protocol from a connection URL.

    Examples:
        >>> get_connection_protocol("postgresql+psycopg2://localhost/app")
        'postgresql'
        >>> get_connection_protocol("sqlite:///app.db")
        'sqlite'

    Raises:
        ConfigurationError: If the URL has no protocol
    """
    if "://" not in url:
        raise ConfigurationError(f"Not a database URL (expected '<protocol>://...'): {url}")
    protocol = url.split("://")[0]
    # Strip driver suffix: postgresql+psycopg2 → postgresql
    return protocol.split("+")[0].lower()


def load_adapter_class(spec: str) -> type[DatabaseAdapter]:
    """Import an adapter class from its full module path.

    Supports both package re-exports and full paths:
    - "dbdump.operators.sqlite.SQLiteAdapter"
    - "dbdump.operators.sqlite.adapter.SQLiteAdapter"

    Raises:
        ConfigurationError: If the module or class cannot be found
    """
    module_path, _, class_name = spec.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"Adapter must be given as 'module.ClassName', got: {spec}")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(
            f"Failed to import adapter module '{module_path}'.\nError: {e}"
        ) from e

    try:
        adapter_class = getattr(module, class_name)
    except AttributeError as e:
        available = [name for name in dir(module) if not name.startswith("_")]
        raise ConfigurationError(
            f"Class '{class_name}' not found in module '{module_path}'.\n"
            f"Available classes: {available}"
        ) from e

    if not (isinstance(adapter_class, type) and issubclass(adapter_class, DatabaseAdapter)):
        raise ConfigurationError(f"'{spec}' is not a DatabaseAdapter subclass")
    return adapter_class


def resolve_adapter_spec(url: str, spec: Optional[str] = None) -> str:
    """Pick the adapter class path for a URL.

    An explicit ``spec`` wins; otherwise the protocol's default is used,
    and unknown protocols get the generic SQLAlchemy adapter.
    """
    if spec:
        return spec
    return DEFAULT_ADAPTERS.get(get_connection_protocol(url), GENERIC_ADAPTER)


def create_adapter(url: str, adapter: Optional[str] = None, **options: Any) -> DatabaseAdapter:
    """Create an (unconnected) adapter for a database URL.

    Args:
        url: SQLAlchemy URL
        adapter: Optional adapter class path overriding the protocol default
        **options: Extra adapter configuration (``schema``, ``echo``, ...)

    Examples:
        >>> adapter = create_adapter("sqlite:///app.db")
        >>> type(adapter).__name__
        'SQLiteAdapter'
    """
    adapter_class = load_adapter_class(resolve_adapter_spec(url, adapter))
    config = {key: value for key, value in options.items() if value is not None}
    config["url"] = url
    return adapter_class(config)


__all__ = [
    "DEFAULT_ADAPTERS",
    "create_adapter",
    "get_connection_protocol",
    "load_adapter_class",
    "resolve_adapter_spec",
]
