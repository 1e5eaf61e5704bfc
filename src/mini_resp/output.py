"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201

import json
import sys
from typing import NoReturn

import typer

from mini_resp.values import Array, BulkString, Error, Integer, SimpleString, Value, to_python


def _quote(data: bytes) -> str:
    """Double-quoted, escaped rendering of a bulk payload."""
    return json.dumps(data.decode(errors="replace"), ensure_ascii=False)


def format_value(value: Value) -> str:
    """Render a reply the way redis-cli does.

    Nested arrays are numbered and indented under their parent item:

        1) "a"
        2) 1) (integer) 1
           2) (nil)
    """
    match value:
        case SimpleString(text):
            return text
        case Error(text):
            return f"(error) {text}"
        case Integer(number):
            return f"(integer) {number}"
        case BulkString(data):
            return "(nil)" if data is None else _quote(data)
        case Array(items):
            if items is None:
                return "(nil)"
            if not items:
                return "(empty array)"
            width = len(str(len(items)))
            lines: list[str] = []
            for index, item in enumerate(items, start=1):
                prefix = f"{index:>{width}}) "
                first, *rest = format_value(item).split("\n")
                lines.append(prefix + first)
                lines.extend(" " * len(prefix) + line for line in rest)
            return "\n".join(lines)
    msg = f"Not a reply value: {value!r}"
    raise TypeError(msg)


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def print_value(self, value: Value) -> None:
        """Print a successful reply."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"reply": to_python(value)}}))
        else:
            print(format_value(value))

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1.

        Raises:
            typer.Exit: Always, with code 1.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=1)
