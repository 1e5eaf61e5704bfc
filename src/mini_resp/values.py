"""Decoded reply values.

One class per frame kind. Null bulk strings and null arrays are represented by
``None`` payloads, distinct from empty ones.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SimpleString:
    """Status reply such as ``+OK``."""

    text: str


@dataclass(frozen=True, slots=True)
class Error:
    """Error reply sent by the server. A successfully decoded value, not an exception."""

    text: str


@dataclass(frozen=True, slots=True)
class Integer:
    """Signed 64-bit integer reply."""

    value: int


@dataclass(frozen=True, slots=True)
class BulkString:
    """Binary-safe, length-prefixed string. ``data is None`` for the null bulk string."""

    data: bytes | None

    @property
    def is_null(self) -> bool:
        """True for ``$-1``."""
        return self.data is None

    def text(self, encoding: str = "utf-8") -> str | None:
        """Decode the payload, keeping null as ``None``."""
        if self.data is None:
            return None
        return self.data.decode(encoding, errors="replace")


@dataclass(frozen=True, slots=True)
class Array:
    """Ordered sequence of nested values. ``items is None`` for the null array."""

    items: tuple[Value, ...] | None

    @property
    def is_null(self) -> bool:
        """True for ``*-1``."""
        return self.items is None


Value = SimpleString | Error | Integer | BulkString | Array


def to_python(value: Value) -> object:
    """Convert a value tree into plain JSON-friendly Python objects.

    Bulk strings become ``str`` (invalid UTF-8 replaced), server errors become
    ``{"error": text}``, nulls become ``None``.
    """
    match value:
        case SimpleString(text):
            return text
        case Error(text):
            return {"error": text}
        case Integer(number):
            return number
        case BulkString():
            return value.text()
        case Array(items):
            if items is None:
                return None
            return [to_python(item) for item in items]
    msg = f"Not a reply value: {value!r}"
    raise TypeError(msg)
