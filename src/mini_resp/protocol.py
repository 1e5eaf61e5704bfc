"""RESP wire codec.

Requests are Arrays of BulkStrings, one per argument:

    *2\r\n$3\r\nGET\r\n$3\r\nkey\r\n

Replies are any frame of the grammar:

    +OK\r\n                  SimpleString
    -ERR message\r\n         Error
    :42\r\n                  Integer
    $5\r\nhello\r\n          BulkString ($-1 is null)
    *2\r\n:1\r\n:2\r\n       Array (*-1 is null)

The decoder is a cursor-based recursive descent over a single buffer. Bulk
payloads are sliced by their declared length and never scanned for line breaks.
"""

import re
from collections.abc import Callable, Sequence
from typing import Final

from mini_resp.errors import (
    MALFORMED_INTEGER,
    MALFORMED_LENGTH,
    NESTING_TOO_DEEP,
    UNEXPECTED_END_OF_BUFFER,
    UNKNOWN_TYPE_TAG,
    EncodeError,
    IncompleteFrameError,
    ProtocolError,
)
from mini_resp.values import Array, BulkString, Error, Integer, SimpleString, Value

CRLF: Final = b"\r\n"
DEFAULT_MAX_DEPTH: Final = 128

_INT64_MIN: Final = -(2**63)
_INT64_MAX: Final = 2**63 - 1
# "-9223372036854775808" is the longest valid number line
_MAX_NUMBER_LINE: Final = 20
_NUMBER_RE: Final = re.compile(rb"-?[0-9]+")

type Buffer = bytes | bytearray
type _FrameDecoder = Callable[[Buffer, int, int], tuple[Value, int]]


def encode_command(args: Sequence[bytes]) -> bytes:
    """Serialize command arguments into an Array of BulkStrings.

    Lengths are always computed from the arguments, so any byte value
    (including CR and LF) is allowed inside an argument.

    Raises:
        EncodeError: ``args`` is empty (code: ``empty_command``).

    """
    if not args:
        raise EncodeError("empty_command", "Cannot encode a command with no arguments.")
    parts = [b"*%d\r\n" % len(args)]
    for arg in args:
        parts.append(b"$%d\r\n" % len(arg))
        parts.append(bytes(arg))
        parts.append(CRLF)
    return b"".join(parts)


def decode(buffer: Buffer, offset: int = 0, *, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Value, int]:
    """Decode one complete frame starting at ``offset``.

    Args:
        buffer: Bytes received so far.
        offset: Position of the frame's type tag.
        max_depth: Maximum Array nesting accepted.

    Returns:
        The decoded value and the number of bytes it occupied.

    Raises:
        IncompleteFrameError: More bytes are needed to finish the frame.
        ProtocolError: Input violates the grammar. With code
            ``unexpected_end_of_buffer`` the buffer ended inside a header line
            and more bytes may complete it.

    """
    if offset < 0:
        msg = f"offset must be non-negative, got {offset}"
        raise ValueError(msg)
    try:
        value, end = _decode_frame(buffer, offset, max_depth)
    except RecursionError:
        raise ProtocolError(NESTING_TOO_DEEP, "Reply nesting exceeds the interpreter recursion limit.") from None
    return value, end - offset


def decode_all(buffer: Buffer, *, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Value]:
    """Decode every frame in ``buffer``, which must end on a frame boundary."""
    values: list[Value] = []
    pos = 0
    while pos < len(buffer):
        value, consumed = decode(buffer, pos, max_depth=max_depth)
        values.append(value)
        pos += consumed
    return values


def _decode_frame(buffer: Buffer, pos: int, depth_left: int) -> tuple[Value, int]:
    """Decode the frame at ``pos`` and return it with the position right after it."""
    if pos >= len(buffer):
        raise ProtocolError(UNEXPECTED_END_OF_BUFFER, "Buffer ended before a type tag.")
    decoder = _DECODERS.get(buffer[pos])
    if decoder is None:
        raise ProtocolError(UNKNOWN_TYPE_TAG, f"Unknown type tag {bytes(buffer[pos : pos + 1])!r} at offset {pos}.")
    return decoder(buffer, pos + 1, depth_left)


def _read_line(buffer: Buffer, pos: int) -> tuple[bytes, int]:
    """Return the bytes up to the next CRLF and the position after it."""
    end = buffer.find(CRLF, pos)
    if end == -1:
        raise ProtocolError(UNEXPECTED_END_OF_BUFFER, f"No line terminator after offset {pos}.")
    return bytes(buffer[pos:end]), end + 2


def _read_number(buffer: Buffer, pos: int, code: str) -> tuple[int, int]:
    """Parse a CRLF-terminated signed 64-bit decimal line.

    A line already longer than any valid number fails with ``code`` instead of
    waiting for a terminator.
    """
    # A missing CRLF with the buffer exhausted is reported as unexpected_end_of_buffer, not as
    # ``code``, so execute() keeps reading when a reply is split inside a number line.
    end = buffer.find(CRLF, pos, pos + _MAX_NUMBER_LINE + len(CRLF))
    if end == -1:
        if len(buffer) - pos >= _MAX_NUMBER_LINE + len(CRLF):
            raise ProtocolError(code, f"Number line at offset {pos} is too long.")
        raise ProtocolError(UNEXPECTED_END_OF_BUFFER, f"No line terminator after offset {pos}.")
    line = bytes(buffer[pos:end])
    if _NUMBER_RE.fullmatch(line) is None:
        raise ProtocolError(code, f"Invalid number {line!r} at offset {pos}.")
    number = int(line)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ProtocolError(code, f"Number {line!r} at offset {pos} is out of 64-bit range.")
    return number, end + len(CRLF)


def _decode_simple_string(buffer: Buffer, pos: int, _depth_left: int) -> tuple[Value, int]:
    line, pos = _read_line(buffer, pos)
    return SimpleString(line.decode(errors="replace")), pos


def _decode_error(buffer: Buffer, pos: int, _depth_left: int) -> tuple[Value, int]:
    line, pos = _read_line(buffer, pos)
    return Error(line.decode(errors="replace")), pos


def _decode_integer(buffer: Buffer, pos: int, _depth_left: int) -> tuple[Value, int]:
    number, pos = _read_number(buffer, pos, MALFORMED_INTEGER)
    return Integer(number), pos


def _decode_bulk_string(buffer: Buffer, pos: int, _depth_left: int) -> tuple[Value, int]:
    length, pos = _read_number(buffer, pos, MALFORMED_LENGTH)
    if length == -1:
        return BulkString(None), pos
    if length < 0:
        raise ProtocolError(MALFORMED_LENGTH, f"Negative bulk string length {length}.")
    end = pos + length
    missing = end + len(CRLF) - len(buffer)
    if missing > 0:
        raise IncompleteFrameError(f"Bulk string of {length} byte(s) needs {missing} more byte(s).")
    if buffer[end : end + len(CRLF)] != CRLF:
        raise ProtocolError(MALFORMED_LENGTH, f"Bulk string of {length} byte(s) is not followed by CRLF.")
    return BulkString(bytes(buffer[pos:end])), end + len(CRLF)


def _decode_array(buffer: Buffer, pos: int, depth_left: int) -> tuple[Value, int]:
    count, pos = _read_number(buffer, pos, MALFORMED_LENGTH)
    if count == -1:
        return Array(None), pos
    if count < 0:
        raise ProtocolError(MALFORMED_LENGTH, f"Negative array count {count}.")
    if depth_left <= 0:
        raise ProtocolError(NESTING_TOO_DEEP, "Array nesting exceeds the configured maximum depth.")
    items: list[Value] = []
    for _ in range(count):
        try:
            item, pos = _decode_frame(buffer, pos, depth_left - 1)
        except ProtocolError as e:
            if not e.needs_more_input:
                raise
            raise IncompleteFrameError(f"Array element {len(items) + 1} of {count} is incomplete.") from e
        items.append(item)
    return Array(tuple(items)), pos


_DECODERS: Final[dict[int, _FrameDecoder]] = {
    ord("+"): _decode_simple_string,
    ord("-"): _decode_error,
    ord(":"): _decode_integer,
    ord("$"): _decode_bulk_string,
    ord("*"): _decode_array,
}
