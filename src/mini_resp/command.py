"""Command builder and request/reply execution."""

import logging
from dataclasses import dataclass
from typing import Final, Self

from mini_resp.connection import Transport
from mini_resp.errors import ClientConnectionError, IncompleteFrameError, ProtocolError
from mini_resp.protocol import DEFAULT_MAX_DEPTH, decode, encode_command
from mini_resp.values import Value

logger = logging.getLogger(__name__)

# Read buffer size
DEFAULT_BUFSIZE: Final = 65536

type Arg = bytes | str | int


def _to_bytes(value: Arg) -> bytes:
    """Convert an argument into its wire bytes: str as UTF-8, int as decimal text."""
    # bool is an int subclass but has no sensible wire form
    if isinstance(value, bool):
        msg = "bool arguments are not supported, pass an int or str"
        raise TypeError(msg)
    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value)
    if isinstance(value, str):
        return value.encode()
    if isinstance(value, int):
        return str(value).encode()
    msg = f"Unsupported argument type: {type(value).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Cmd:
    """Immutable command: the operation name followed by its arguments.

    ``arg`` returns a new builder, so a partially built command can be reused
    as a prefix:

        base = cmd("SET").arg("key")
        base.arg("a").execute(conn)
        base.arg("b").execute(conn)
    """

    args: tuple[bytes, ...]

    def arg(self, value: Arg) -> Self:
        """Return a new command with ``value`` appended."""
        return type(self)((*self.args, _to_bytes(value)))

    def encode(self) -> bytes:
        """Request bytes for this command."""
        return encode_command(self.args)

    def execute(self, transport: Transport, *, bufsize: int = DEFAULT_BUFSIZE, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
        """Send the command and read one complete reply.

        Bytes are accumulated across ``receive`` calls until a frame decodes, so
        replies larger than one read, or split at any byte, are handled.

        Returns:
            The decoded reply. A server error reply is returned as ``Error``.

        Raises:
            EncodeError: The command has no arguments.
            ClientConnectionError: Transport failed, or the stream ended before a complete reply.
            ClientTimeoutError: Transport read or write timed out.
            ProtocolError: The reply violates the grammar.

        """
        request = self.encode()
        logger.debug("Sending %s with %d argument(s), %d bytes", self._name, len(self.args) - 1, len(request))
        transport.send(request)

        buffer = bytearray()
        while True:
            chunk = transport.receive(bufsize)
            if not chunk:
                raise ClientConnectionError(
                    "connection_closed", f"Connection closed after {len(buffer)} byte(s) of the {self._name} reply."
                )
            buffer += chunk
            try:
                value, consumed = decode(buffer, max_depth=max_depth)
            except IncompleteFrameError:
                continue
            except ProtocolError as e:
                if e.needs_more_input:
                    continue
                raise
            break

        if consumed < len(buffer):
            logger.warning("Discarding %d unexpected byte(s) after the %s reply", len(buffer) - consumed, self._name)
        logger.debug("Received %s reply, %d bytes", type(value).__name__, consumed)
        return value

    @property
    def _name(self) -> str:
        return self.args[0].decode(errors="replace") if self.args else "<empty>"


def cmd(name: Arg) -> Cmd:
    """Start a command with its operation name, e.g. ``cmd("PING")``."""
    return Cmd((_to_bytes(name),))


def execute(transport: Transport, name: Arg, *args: Arg) -> Value:
    """Build and execute a command in one call: ``execute(conn, "SET", "k", "v")``."""
    command = cmd(name)
    for value in args:
        command = command.arg(value)
    return command.execute(transport)
