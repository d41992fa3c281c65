"""Response parser: reads one server reply from a line stream.

The first line of every reply is the status line, ``NNN message``. The code
alone decides how many more lines belong to the reply:

- ``200``: a list of lines ended by an empty line, which is discarded.
- ``201``: a data block that may span several LF-terminated lines and ends
  with the first CRLF-terminated line.
- anything else: no further lines.
"""

from __future__ import annotations

from typing import Protocol

from .errors import MalformedResponse, TransportError
from .messages import (
    EmptyPayload,
    ListPayload,
    Response,
    SinglePayload,
    StatusCode,
)

_CRLF = b"\r\n"
_LF = b"\n"
_DIGITS = frozenset("0123456789")


class LineReader(Protocol):
    """Anything with a blocking ``readline()`` returning raw bytes."""

    def readline(self) -> bytes: ...


def _read_line(stream: LineReader) -> tuple[str, bool]:
    """Read one terminated line.

    Returns the decoded line content and whether it was terminated by CRLF
    (as opposed to a bare LF).
    """
    try:
        raw = stream.readline()
    except OSError as e:
        raise TransportError(f"Read failed: {e}") from e

    if not raw.endswith(_LF):
        raise TransportError("Connection closed before end of reply")

    crlf = raw.endswith(_CRLF)
    content = raw[: -len(_CRLF)] if crlf else raw[: -len(_LF)]
    return content.decode("utf-8", errors="replace"), crlf


def parse_status_line(line: str) -> tuple[int, str]:
    """Split a status line (without terminator) into code and message."""
    if len(line) < 4 or line[3] != " ":
        raise MalformedResponse("Short response", line)

    head = line[:3]
    if not set(head) <= _DIGITS:
        raise MalformedResponse("Invalid response", line)
    code = int(head)
    if code < 100:
        raise MalformedResponse("Invalid response", line)

    return code, line[4:]


def _read_list(stream: LineReader, first: str) -> list[str]:
    items = [first]
    while True:
        line, _ = _read_line(stream)
        if not line:
            return items
        items.append(line)


def _read_block(stream: LineReader, first: str) -> list[str]:
    items = [first]
    while True:
        line, crlf = _read_line(stream)
        items.append(line)
        if crlf:
            return items


def read_response(
    stream: LineReader, *, empty_message_as_empty: bool = False
) -> Response:
    """Read exactly one reply from ``stream``.

    Args:
        stream: Source of raw lines, such as ``socket.makefile("rb")``.
        empty_message_as_empty: Return ``EmptyPayload`` instead of
            ``SinglePayload("")`` for single-line replies with no message.

    Raises:
        MalformedResponse: The status line is not ``NNN message``.
        TransportError: The stream failed or ended before the reply did.
            Nothing read so far is returned.
    """
    line, _ = _read_line(stream)
    code, message = parse_status_line(line)

    if code == StatusCode.OK_MULTI:
        return Response(code, ListPayload(tuple(_read_list(stream, message))))
    if code == StatusCode.OK_DATA:
        return Response(code, ListPayload(tuple(_read_block(stream, message))))

    if not message and empty_message_as_empty:
        return Response(code, EmptyPayload())
    return Response(code, SinglePayload(message))
