"""Tests for the YAML, CSV and memory containers."""

import io
from datetime import time
from decimal import Decimal
from uuid import UUID

import pytest

from dbdump.containers import CsvContainer, MemoryContainer, YamlContainer, get_container_class
from dbdump.exceptions import ConfigurationError, FormatError
from dbdump.models.table import TablePayload


def _write(container, table, columns, *pages):
    container.before_table(table)
    if columns is not None:
        container.write_columns(table, columns)
    for page in pages:
        container.write_records(table, page)
    container.after_table(table)


def _read(container_class, text):
    return [
        (p.table, p.columns, list(p.records))
        for p in container_class(io.StringIO(text)).read_tables()
    ]


class TestYamlContainer:
    """Test the YAML format."""

    def test_write(self):
        stream = io.StringIO()
        container = YamlContainer(stream)
        _write(container, "users", ["id", "name", "admin"], [[1, "alice", True]], [[2, None, False]])

        assert stream.getvalue() == (
            "---\n"
            "users:\n"
            "  columns:\n"
            "  - id\n"
            "  - name\n"
            "  - admin\n"
            "  records:\n"
            "  - - 1\n"
            "    - alice\n"
            "    - true\n"
            "  - - 2\n"
            "    - null\n"
            "    - false\n"
        )

    def test_write_then_read_several_tables(self):
        stream = io.StringIO()
        container = YamlContainer(stream)
        _write(container, "a", ["x"], [[1], [2]])
        _write(container, "b", ["y", "z"], [["multi\nline", "it's"]])

        assert _read(YamlContainer, stream.getvalue()) == [
            ("a", ["x"], [[1], [2]]),
            ("b", ["y", "z"], [["multi\nline", "it's"]]),
        ]

    def test_database_types_written_as_strings(self):
        stream = io.StringIO()
        uid = UUID("12345678-1234-5678-1234-567812345678")
        _write(YamlContainer(stream), "t", ["d", "u", "tm"], [[Decimal("10.50"), uid, time(13, 5)]])

        assert _read(YamlContainer, stream.getvalue()) == [
            ("t", ["d", "u", "tm"], [["10.50", str(uid), "13:05:00"]]),
        ]

    def test_read_null_table_skipped(self):
        assert _read(YamlContainer, "---\nusers:\n---\nposts:\n  columns:\n  - id\n") == [
            ("posts", ["id"], []),
        ]

    def test_read_empty_stream(self):
        assert _read(YamlContainer, "") == []

    def test_read_malformed(self):
        with pytest.raises(FormatError, match="Invalid YAML"):
            _read(YamlContainer, "---\nusers: [unclosed\n")

    def test_read_not_a_mapping(self):
        with pytest.raises(FormatError, match="expected a mapping"):
            _read(YamlContainer, "---\n- just\n- a list\n")


class TestCsvContainer:
    """Test the CSV format."""

    def test_write(self):
        stream = io.StringIO()
        container = CsvContainer(stream)
        records = [[1, "alice", True], [2, None, False], [3, "", True]]
        _write(container, "users", ["id", "name", "admin"], records)
        _write(container, "empty", None)

        assert stream.getvalue().splitlines() == [
            "BEGIN_CSV_TABLE_DECLARATIONusersEND_CSV_TABLE_DECLARATION",
            "id,name,admin",
            "1,alice,t",
            "2,\\N,f",
            "3,,t",
            "BEGIN_CSV_TABLE_DECLARATIONemptyEND_CSV_TABLE_DECLARATION",
        ]

    def test_read(self):
        text = (
            "BEGIN_CSV_TABLE_DECLARATIONusersEND_CSV_TABLE_DECLARATION\r\n"
            "id,name,admin\r\n"
            '1,"Smith, J.",t\r\n'
            "2,\\N,f\r\n"
            "3,,t\r\n"
            "BEGIN_CSV_TABLE_DECLARATIONemptyEND_CSV_TABLE_DECLARATION\r\n"
        )
        assert _read(CsvContainer, text) == [
            (
                "users",
                ["id", "name", "admin"],
                [["1", "Smith, J.", "t"], ["2", None, "f"], ["3", "", "t"]],
            ),
            ("empty", None, []),
        ]

    def test_read_data_before_declaration(self):
        with pytest.raises(FormatError, match="before any table declaration"):
            _read(CsvContainer, "id,name\r\n1,alice\r\n")

    def test_open_uses_newline_option(self, tmp_path):
        path = tmp_path / "dump.csv"
        with CsvContainer.open(path, "w") as container:
            _write(container, "t", ["v"], [["a\nb"]])
        with CsvContainer.open(path, "r") as container:
            assert [list(p.records) for p in container.read_tables()] == [[["a\nb"]]]


class TestMemoryContainer:
    """Test the in-memory container."""

    def test_write_and_read(self):
        container = MemoryContainer()
        _write(container, "t", ["a"], [[1]], [[2]])

        payloads = list(container.read_tables())
        assert [(p.table, p.columns, p.records) for p in payloads] == [("t", ["a"], [[1], [2]])]
        assert container.name == "<memory>"

    def test_records_before_columns(self):
        with pytest.raises(FormatError):
            MemoryContainer().write_records("t", [[1]])

    def test_initial_payloads(self):
        container = MemoryContainer([TablePayload("t", ["a"], iter([[1]]))])
        assert container.records("t") == [[1]]
        assert container.records("missing") == []


class TestContainerRegistry:
    """Test format lookup."""

    def test_known_formats(self):
        assert get_container_class("yaml") is YamlContainer
        assert get_container_class("YML") is YamlContainer
        assert get_container_class("csv") is CsvContainer

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError, match="Unknown format: xml"):
            get_container_class("xml")

    def test_extensions(self):
        assert YamlContainer.extension == "yml"
        assert CsvContainer.extension == "csv"
