"""Client error taxonomy.

Every failure surfaced by the codec, the transport or command execution is a
``ClientError`` carrying a machine-readable ``code``.
"""

from typing import Final

UNKNOWN_TYPE_TAG: Final = "unknown_type_tag"
MALFORMED_INTEGER: Final = "malformed_integer"
MALFORMED_LENGTH: Final = "malformed_length"
UNEXPECTED_END_OF_BUFFER: Final = "unexpected_end_of_buffer"
NESTING_TOO_DEEP: Final = "nesting_too_deep"


class ClientError(Exception):
    """Base class for every error raised by mini-resp."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with a machine-readable code and a human-readable message.

        Args:
            code: Machine-readable error code (e.g. "connection_closed").
            message: Human-readable error description.

        """
        super().__init__(message)
        self.code = code


class ClientConnectionError(ClientError):
    """Transport could not be established, failed, or closed mid-reply."""


class ClientTimeoutError(ClientError):
    """Connect or read exceeded the configured deadline."""

    def __init__(self, message: str) -> None:
        """Initialize with the fixed ``timeout`` code."""
        super().__init__("timeout", message)


class ProtocolError(ClientError):
    """Input bytes violate the wire grammar."""

    @property
    def needs_more_input(self) -> bool:
        """Whether the buffer simply ended before the frame did."""
        return self.code == UNEXPECTED_END_OF_BUFFER


class IncompleteFrameError(ClientError):
    """Declared length or count exceeds the bytes available so far.

    Recoverable: read more bytes and decode again from the same offset.
    """

    def __init__(self, message: str) -> None:
        """Initialize with the fixed ``incomplete_frame`` code."""
        super().__init__("incomplete_frame", message)


class EncodeError(ClientError):
    """A command could not be encoded."""
