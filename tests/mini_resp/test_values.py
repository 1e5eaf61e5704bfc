"""Tests for reply value helpers."""

import pytest

from mini_resp.values import Array, BulkString, Error, Integer, SimpleString, to_python


class TestEquality:
    """Value semantics."""

    def test_same_payload_equal(self):
        """Equal payloads compare equal."""
        assert Array((BulkString(b"a"), Integer(1))) == Array((BulkString(b"a"), Integer(1)))

    def test_kinds_distinct(self):
        """Same text in different kinds is not equal."""
        assert SimpleString("OK") != Error("OK")
        assert BulkString(b"OK") != SimpleString("OK")

    def test_null_distinct_from_empty(self):
        """Null and empty forms differ."""
        assert BulkString(None) != BulkString(b"")
        assert Array(None) != Array(())

    def test_hashable(self):
        """Values can be used in sets."""
        assert len({Integer(1), Integer(1), SimpleString("1")}) == 2


class TestBulkStringText:
    """BulkString.text()."""

    def test_decodes_utf8(self):
        """Payload decodes as UTF-8."""
        assert BulkString("héllo".encode()).text() == "héllo"

    def test_null(self):
        """Null stays None."""
        assert BulkString(None).text() is None

    def test_invalid_bytes_replaced(self):
        """Undecodable bytes are replaced."""
        assert BulkString(b"a\xffb").text() == "a�b"

    def test_other_encoding(self):
        """Encoding can be chosen."""
        assert BulkString("é".encode("latin-1")).text("latin-1") == "é"


class TestToPython:
    """Conversion into plain Python objects."""

    def test_nested(self):
        """Every kind converts, recursively."""
        value = Array(
            (
                SimpleString("OK"),
                Error("ERR x"),
                Integer(-3),
                BulkString(b"v"),
                BulkString(None),
                Array(None),
                Array((Integer(1),)),
            )
        )
        assert to_python(value) == ["OK", {"error": "ERR x"}, -3, "v", None, None, [1]]

    def test_not_a_value(self):
        """Non-values are rejected."""
        with pytest.raises(TypeError):
            to_python("plain")  # type: ignore[arg-type]
