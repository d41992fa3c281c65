"""Exceptions raised by the AMCP codec and client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .messages import Response


class AMCPError(Exception):
    """Base class for all AMCP errors."""


class TransportError(AMCPError):
    """I/O failure, timeout or premature end of stream.

    After a transport error the position in the stream is unknown, so the
    connection it happened on must not be reused.
    """


class MalformedResponse(AMCPError):
    """The status line of a reply does not have the ``NNN message`` shape."""

    def __init__(self, message: str, line: str):
        super().__init__(f"{message}: {line!r}")
        self.line = line


class EncodingError(AMCPError):
    """An argument value cannot be represented on the wire."""


class ServerError(AMCPError):
    """The server answered with a 4xx or 5xx status code."""

    def __init__(self, response: Response):
        super().__init__(f"{response.code} {response.message}")
        self.response = response

    @property
    def code(self) -> int:
        return self.response.code
