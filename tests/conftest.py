"""Shared fixtures: SQLite databases in temporary files."""

import logging
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import text

from dbdump.operators.sqlite import SQLiteAdapter

SCHEMA = [
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        admin BOOLEAN
    )
    """,
    """
    CREATE TABLE memberships (
        user_id INTEGER,
        group_id INTEGER,
        role TEXT
    )
    """,
    """
    CREATE TABLE notes (
        id INTEGER PRIMARY KEY,
        body TEXT
    )
    """,
    "CREATE TABLE schema_migrations (version TEXT)",
]


def create_schema(adapter):
    """Create the test tables (all empty)."""
    for statement in SCHEMA:
        adapter.execute(statement)


def populate(adapter):
    """Insert sample rows. ``notes`` stays empty."""
    adapter.execute(
        "INSERT INTO users (id, name, admin) VALUES "
        "(1, 'alice', 1), (2, 'bob', 0), (3, 'O''Brien', NULL)"
    )
    adapter.execute(
        "INSERT INTO memberships (user_id, group_id, role) VALUES "
        "(2, 10, 'owner'), (1, 10, 'member'), (1, 20, NULL)"
    )
    adapter.execute("INSERT INTO schema_migrations (version) VALUES ('20240101')")


def rows(adapter, sql):
    """Fetch all rows of a query as tuples."""
    with adapter.engine.connect() as conn:
        return [tuple(row) for row in conn.execute(text(sql))]


def _temp_db_path():
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        return f.name


@pytest.fixture
def temp_db():
    """Create a temporary SQLite database file."""
    db_path = _temp_db_path()
    yield db_path
    Path(db_path).unlink(missing_ok=True)


@pytest.fixture
def db_url(temp_db):
    return f"sqlite:///{temp_db}"


@pytest.fixture
def adapter(temp_db):
    """Connected adapter on an empty database."""
    adapter = SQLiteAdapter({"database": temp_db})
    adapter.connect()
    yield adapter
    adapter.disconnect()


@pytest.fixture
def source(adapter):
    """Connected adapter on a database with the test schema and sample rows."""
    create_schema(adapter)
    populate(adapter)
    return adapter


@pytest.fixture
def target():
    """Connected adapter on a second database with the test schema, no rows."""
    db_path = _temp_db_path()
    adapter = SQLiteAdapter({"database": db_path})
    adapter.connect()
    create_schema(adapter)
    yield adapter
    adapter.disconnect()
    Path(db_path).unlink(missing_ok=True)


@pytest.fixture(autouse=True)
def reset_dbdump_logging():
    """Drop handlers the CLI installs on the dbdump logger."""
    yield
    logger = logging.getLogger("dbdump")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
