"""Blocking TCP client for an AMCP server."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Any, BinaryIO

from .encoder import encode_command
from .errors import MalformedResponse, ServerError, TransportError
from .messages import DEFAULT_PORT, Response, StatusClass, to_argument
from .parser import read_response

DEFAULT_HOST = "127.0.0.1"

_logger = logging.getLogger("amcp.client")


def split_address(addr: str) -> tuple[str, int]:
    """Split ``host[:port]`` (or ``[ipv6]:port``) into host and port."""
    if addr.startswith("["):
        end = addr.find("]")
        if end == -1:
            raise ValueError(f"Invalid address: {addr}")
        host, rest = addr[1:end], addr[end + 1 :]
        if not rest:
            return host, DEFAULT_PORT
        if not rest.startswith(":"):
            raise ValueError(f"Invalid address: {addr}")
        port = rest[1:]
    elif addr.count(":") == 1:
        host, port = addr.split(":")
    else:
        return addr, DEFAULT_PORT

    if not port.isdigit():
        raise ValueError(f"Invalid port in address: {addr}")
    return host or DEFAULT_HOST, int(port)


class Client:
    """Client connection to an AMCP server.

    One request/response cycle runs at a time; ``do`` holds a lock for the
    whole cycle so threads sharing a client never interleave lines. After a
    transport error or a malformed reply the connection is marked unusable
    and every further call raises ``TransportError`` until ``connect`` is
    called again.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float | None = None,
    ):
        self.host = host
        self.port = port
        # 0 means no timeout, not a non-blocking socket
        self.timeout = timeout or None
        self._sock: socket.socket | None = None
        self._reader: BinaryIO | None = None
        self._broken = False
        self._lock = threading.Lock()

    @classmethod
    def dial(cls, addr: str, timeout: float | None = None) -> Client:
        """Connect to the server at ``addr`` (``host[:port]``)."""
        host, port = split_address(addr)
        client = cls(host, port, timeout)
        client.connect()
        return client

    @property
    def connected(self) -> bool:
        return self._sock is not None and not self._broken

    def connect(self) -> None:
        """Open the connection, closing any previous one first."""
        self.close()
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            raise TransportError(f"Cannot connect to {self.host}:{self.port}: {e}") from e

        self._sock = sock
        self._reader = sock.makefile("rb")
        self._broken = False
        _logger.info(f"Connected to {self.host}:{self.port}")

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._sock is None:
            return
        try:
            if self._reader is not None:
                self._reader.close()
            self._sock.close()
        except OSError as e:
            _logger.warning(f"Error closing connection: {e}")
        finally:
            self._sock = None
            self._reader = None
            _logger.info(f"Disconnected from {self.host}:{self.port}")

    def __enter__(self) -> Client:
        if self._sock is None:
            self.connect()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _check_usable(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("Not connected")
        if self._broken:
            raise TransportError("Connection is no longer usable, reconnect first")
        return self._sock

    def _timeout(self, timeout: float | None) -> float | None:
        if timeout is None:
            return self.timeout
        return timeout or None

    def send(self, name: str, *args: Any, timeout: float | None = None) -> None:
        """Write one command to the server."""
        # Encode first so a bad argument leaves the connection untouched
        line = encode_command(name, [to_argument(a) for a in args])
        sock = self._check_usable()

        _logger.debug(f"-> {line!r}")
        try:
            sock.settimeout(self._timeout(timeout))
            sock.sendall(line)
        except OSError as e:
            self._broken = True
            raise TransportError(f"Write failed: {e}") from e

    def receive(self, timeout: float | None = None) -> Response:
        """Read one reply from the server."""
        sock = self._check_usable()
        try:
            sock.settimeout(self._timeout(timeout))
            response = read_response(self._reader)
        except OSError as e:
            self._broken = True
            raise TransportError(f"Read failed: {e}") from e
        except (TransportError, MalformedResponse):
            self._broken = True
            raise

        _logger.debug(f"<- {response.code} {response.message}")
        return response

    def do(
        self,
        name: str,
        *args: Any,
        timeout: float | None = None,
        check: bool = False,
    ) -> Response:
        """Send a command and return the server's reply.

        Args:
            name: Command name, e.g. ``"PLAY"``.
            *args: Arguments, as ``Integer``/``Float``/``Text`` or plain
                ``int``/``float``/``str`` values.
            timeout: Per-read/per-write timeout in seconds, overriding the
                client default for this call.
            check: Raise ``ServerError`` for 4xx and 5xx replies.
        """
        with self._lock:
            self.send(name, *args, timeout=timeout)
            response = self.receive(timeout=timeout)

        if check and response.status_class in (
            StatusClass.CLIENT_ERROR,
            StatusClass.SERVER_ERROR,
        ):
            raise ServerError(response)
        return response
