"""Tests for boolean coercion and quoting."""

import pytest

from dbdump.core.codec import RowCodec, to_storage_boolean
from dbdump.exceptions import FormatError
from dbdump.models.table import Column


class TestToStorageBoolean:
    """Test raw boolean-column value coercion."""

    @pytest.mark.parametrize("value", ["t", "1", True, 1])
    def test_true_values(self, value):
        assert to_storage_boolean(value) is True

    @pytest.mark.parametrize("value", ["f", "0", False, 0, None, "true", "yes", 2])
    def test_everything_else_is_false(self, value):
        """Only the fixed true set maps to True."""
        assert to_storage_boolean(value) is False


class TestRowCodec:
    """Test record normalization and restoration."""

    COLUMNS = [
        Column(name="id", type_tag="integer"),
        Column(name="admin", type_tag="boolean"),
        Column(name="note", type_tag="text"),
    ]

    def test_boolean_positions(self):
        assert RowCodec.boolean_positions(self.COLUMNS) == [1]

    def test_normalize_only_touches_boolean_columns(self):
        codec = RowCodec(adapter=None)
        page = codec.normalize_records([(1, 1, "1"), (2, "f", "t"), (3, None, None)], [1])
        assert page == [[1, True, "1"], [2, False, "t"], [3, False, None]]

    def test_normalize_without_boolean_columns_copies_records(self):
        codec = RowCodec(adapter=None)
        assert codec.normalize_records([(1, "x")], []) == [[1, "x"]]

    def test_restore_coerces_text_only(self):
        """Strings become booleans; None and native values pass through."""
        assert RowCodec.restore_record(["1", "t", "x"], [0, 1]) == [True, True, "x"]
        assert RowCodec.restore_record([None, False, 1], [0, 1, 2]) == [None, False, 1]

    @pytest.mark.parametrize(
        "text,expected",
        [("true", True), ("TRUE", True), ("True", True), ("t", True), ("1", True),
         ("false", False), ("FALSE", False), ("f", False), ("0", False)],
    )
    def test_restore_text_vocabulary(self, text, expected):
        """Text booleans are parsed case-insensitively, never defaulted to False."""
        assert RowCodec.restore_record([text], [0]) == [expected]

    @pytest.mark.parametrize("text", ["yes", "", "2", "maybe"])
    def test_restore_unknown_text(self, text):
        with pytest.raises(FormatError, match="Not a boolean value"):
            RowCodec.restore_record([text], [0])


class TestQuoting:
    """Test quoting delegated to the SQLite dialect."""

    def test_quote_value(self, adapter):
        codec = RowCodec(adapter)
        assert codec.quote_value("O'Brien") == "'O''Brien'"
        assert codec.quote_value(None) == "NULL"
        assert codec.quote_value(42) == "42"

    def test_quote_identifier(self, adapter):
        codec = RowCodec(adapter)
        assert codec.quote_identifier("users") == "users"
        assert codec.quote_identifier("order") == '"order"'
        assert codec.quote_identifier("Mixed Case") == '"Mixed Case"'
