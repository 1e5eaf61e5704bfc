"""Byte-stream transport to the server.

The codec only needs ``send`` and ``receive``; ``Connection`` provides them over
a blocking TCP socket. A connection carries one request at a time and is not
safe to share between threads without external locking.
"""

import logging
import socket
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

from mini_resp.config import Config
from mini_resp.errors import ClientConnectionError, ClientTimeoutError

logger = logging.getLogger(__name__)

type Address = str | tuple[str, int]


class Transport(ABC):
    """Minimal send/receive contract consumed by command execution."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Write all of ``data`` to the stream."""
        ...

    @abstractmethod
    def receive(self, bufsize: int) -> bytes:
        """Read up to ``bufsize`` bytes. An empty result means end of stream."""
        ...


def parse_address(address: Address) -> tuple[str, int]:
    """Normalize ``"host:port"`` or ``(host, port)`` into a tuple.

    Raises:
        ClientConnectionError: Address cannot be parsed (code: ``connect_failed``).

    """
    if isinstance(address, tuple):
        host, port = address
    else:
        host, sep, port_text = address.rpartition(":")
        if not sep or not port_text.isdigit():
            raise ClientConnectionError("connect_failed", f"Invalid address {address!r}, expected host:port.")
        port = int(port_text)
    host = host.strip("[]")
    if not host or not 0 < port < 65536:
        raise ClientConnectionError("connect_failed", f"Invalid address {address!r}.")
    return host, port


class Connection(Transport):
    """Blocking TCP connection with connect and read timeouts."""

    def __init__(self, sock: socket.socket, address: tuple[str, int]) -> None:
        """Wrap an already connected socket.

        Args:
            sock: Connected stream socket; its timeout applies to reads and writes.
            address: Peer address, kept for messages.

        """
        self._sock: socket.socket | None = sock
        self.address = address

    @classmethod
    def connect(cls, address: Address, *, connect_timeout: float = 5.0, read_timeout: float = 10.0) -> Self:
        """Open a TCP connection.

        Raises:
            ClientTimeoutError: Connecting took longer than ``connect_timeout``.
            ClientConnectionError: Connection refused or address unresolvable (code: ``connect_failed``).

        """
        host, port = parse_address(address)
        try:
            sock = socket.create_connection((host, port), timeout=connect_timeout)
        except TimeoutError as e:
            raise ClientTimeoutError(f"Connecting to {host}:{port} timed out after {connect_timeout}s.") from e
        except OSError as e:
            raise ClientConnectionError("connect_failed", f"Cannot connect to {host}:{port}: {e}") from e
        sock.settimeout(read_timeout)
        logger.debug("Connected to %s:%d", host, port)
        return cls(sock, (host, port))

    @classmethod
    def open(cls, cfg: Config) -> Self:
        """Open a connection using host, port and timeouts from configuration."""
        return cls.connect((cfg.host, cfg.port), connect_timeout=cfg.connect_timeout, read_timeout=cfg.read_timeout)

    @property
    def closed(self) -> bool:
        """Whether ``close`` has been called."""
        return self._sock is None

    def send(self, data: bytes) -> None:
        """Write all bytes to the socket."""
        sock = self._require_socket()
        try:
            sock.sendall(data)
        except TimeoutError as e:
            raise ClientTimeoutError(f"Sending to {self._peer} timed out.") from e
        except OSError as e:
            raise ClientConnectionError("connection_lost", f"Sending to {self._peer} failed: {e}") from e

    def receive(self, bufsize: int) -> bytes:
        """Read up to ``bufsize`` bytes; ``b""`` when the server closed the stream."""
        sock = self._require_socket()
        try:
            return sock.recv(bufsize)
        except TimeoutError as e:
            raise ClientTimeoutError(f"Reading from {self._peer} timed out.") from e
        except OSError as e:
            raise ClientConnectionError("connection_lost", f"Reading from {self._peer} failed: {e}") from e

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        if self._sock is None:
            return
        self._sock.close()
        self._sock = None
        logger.debug("Closed connection to %s", self._peer)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        self.close()

    @property
    def _peer(self) -> str:
        return f"{self.address[0]}:{self.address[1]}"

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise ClientConnectionError("connection_closed", f"Connection to {self._peer} is closed.")
        return self._sock


def connect(address: Address, *, connect_timeout: float = 5.0, read_timeout: float = 10.0) -> Connection:
    """Open a connection to ``address`` (``"host:port"`` or ``(host, port)``)."""
    return Connection.connect(address, connect_timeout=connect_timeout, read_timeout=read_timeout)
