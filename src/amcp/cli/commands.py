"""CLI command implementations."""

from __future__ import annotations

import math
import re
from typing import Any

from ..protocol.client import Client
from ..protocol.encoder import format_float, format_integer
from ..protocol.messages import Argument, Float, Integer, Response, Text

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?")


def parse_token(token: str, text_only: bool = False) -> Argument:
    """Turn a command-line token into a typed argument.

    Tokens are sent as numbers only when the number formats back to exactly
    the same text, so ``007``, ``+5`` or ``1.50`` stay text and reach the
    server as typed. Everything else (channel-layer pairs like ``1-10``,
    clip names) is text too.
    """
    if text_only:
        return Text(token)
    if _INT_RE.fullmatch(token):
        number = int(token)
        if format_integer(number) == token:
            return Integer(number)
    elif _FLOAT_RE.fullmatch(token):
        value = float(token)
        if math.isfinite(value) and format_float(value) == token:
            return Float(value)
    return Text(token)


def send_command(
    host: str,
    port: int,
    timeout: float | None,
    name: str,
    args: list[Any] | None = None,
) -> Response:
    """Connect, run one command and disconnect."""
    with Client(host, port, timeout) as client:
        return client.do(name, *(args or []))
