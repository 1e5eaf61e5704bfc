"""Shared fixtures: a loopback TCP server replaying canned replies."""

import socket
import threading
from collections.abc import Callable, Iterator

import pytest


class LoopbackServer:
    """Single-connection server that records the request and replies with canned chunks."""

    def __init__(self, *reply_chunks: bytes, expect: int = 0, hold_open: bool = False) -> None:
        self.received = b""
        self._reply_chunks = reply_chunks
        self._expect = expect
        self._hold_open = hold_open
        self._done = threading.Event()
        self._listener = socket.create_server(("127.0.0.1", 0))
        self.port: int = self._listener.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._done.set()
        self._thread.join(timeout=5)
        self._listener.close()

    def _serve(self) -> None:
        self._listener.settimeout(5)
        try:
            conn, _ = self._listener.accept()
        except OSError:
            return
        with conn:
            conn.settimeout(5)
            while len(self.received) < self._expect:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                self.received += chunk
            for chunk in self._reply_chunks:
                conn.sendall(chunk)
            if self._hold_open:
                self._done.wait(timeout=5)


@pytest.fixture
def serve() -> Iterator[Callable[..., LoopbackServer]]:
    """Factory for started loopback servers, stopped after the test."""
    servers: list[LoopbackServer] = []

    def factory(*reply_chunks: bytes, expect: int = 0, hold_open: bool = False) -> LoopbackServer:
        server = LoopbackServer(*reply_chunks, expect=expect, hold_open=hold_open)
        server.start()
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.stop()
