"""Pytest configuration and fixtures for AMCP tests."""

from __future__ import annotations

import io
import socket
import threading
from pathlib import Path
from typing import Callable, Generator

import pytest


class FakeServer:
    """Minimal AMCP server answering scripted replies on 127.0.0.1.

    ``replies`` maps a received command line (without terminator) to the raw
    bytes sent back. A ``None`` reply means stay silent; ``CLOSE`` means
    drop the connection. Unknown commands get ``400 ERROR``.
    """

    CLOSE = object()

    def __init__(self):
        self.replies: dict[str, bytes | object | None] = {}
        self.received: list[bytes] = []
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen()
        self._sock.settimeout(0.1)
        self.host, self.port = self._sock.getsockname()
        self._running = True
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def _serve(self) -> None:
        while self._running:
            try:
                conn, _ = self._sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with conn:
                self._handle(conn)

    def _handle(self, conn: socket.socket) -> None:
        reader = conn.makefile("rb")
        try:
            for line in iter(reader.readline, b""):
                self.received.append(line)
                key = line.rstrip(b"\r\n").decode("utf-8")
                reply = self.replies.get(key, b"400 ERROR\r\n")
                if reply is self.CLOSE:
                    return
                if reply is not None:
                    conn.sendall(reply)
        except OSError:
            return
        finally:
            reader.close()

    def close(self) -> None:
        self._running = False
        self._sock.close()
        self._thread.join(timeout=2)


@pytest.fixture
def server() -> Generator[FakeServer, None, None]:
    """Start a scripted AMCP server for the duration of a test."""
    srv = FakeServer()
    yield srv
    srv.close()


@pytest.fixture
def stream() -> Callable[[bytes], io.BytesIO]:
    """Build a readable byte stream from raw reply bytes."""

    def make(data: bytes) -> io.BytesIO:
        return io.BytesIO(data)

    return make


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config lookup at an empty temp dir and clear AMCP_* variables."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for name in ("AMCP_CONFIG", "AMCP_HOST", "AMCP_PORT", "AMCP_TIMEOUT", "AMCP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return config_home / "amcp"


@pytest.fixture
def unused_port() -> int:
    """A local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]
