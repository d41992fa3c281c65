"""Command encoder: turns a command and its arguments into one wire line.

Wire format::

    <command>( <argument>)*\\r\\n

Integers are sent in base 10, floats as the shortest positional decimal
that reproduces the value at its declared width, and text is wrapped in
double quotes when it contains whitespace.  Inside text, ``"``, ``\\`` and
newline are always escaped as ``\\"``, ``\\\\`` and ``\\n``.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .errors import EncodingError
from .messages import Argument, Float, Integer, Text

CRLF = b"\r\n"

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
}

# Information separators: str.isspace() is true for them, but they never trigger quoting
_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def format_integer(value: int) -> str:
    return str(value)


def format_float(value: float, bits: int = 64) -> str:
    """Format a float as the shortest positional decimal that round-trips.

    Args:
        value: The number to format.
        bits: Declared width, 32 or 64. With 32 the value is first rounded
            to single precision and only as many digits as a float32 needs
            are emitted.
    """
    if not math.isfinite(value):
        raise EncodingError(f"Cannot encode non-finite float: {value!r}")

    if bits == 32:
        with np.errstate(over="ignore"):
            number = np.float32(value)
        if not np.isfinite(number):
            raise EncodingError(f"Float {value!r} overflows 32 bits")
    elif bits == 64:
        number = np.float64(value)
    else:
        raise EncodingError(f"Float width must be 32 or 64, got {bits}")

    return np.format_float_positional(number, unique=True, trim="-")


def format_text(value: str) -> str:
    """Escape and, if it contains whitespace, quote a text argument.

    Carriage returns are passed through untouched.
    """
    quote = any(ch.isspace() and ch not in _SEPARATORS for ch in value)
    escaped = "".join(_ESCAPES.get(ch, ch) for ch in value)
    if quote:
        return f'"{escaped}"'
    return escaped


def format_argument(arg: Argument) -> str:
    """Format a single argument for the wire."""
    if isinstance(arg, Integer):
        return format_integer(arg.value)
    if isinstance(arg, Float):
        return format_float(arg.value, arg.bits)
    if isinstance(arg, Text):
        return format_text(arg.value)
    raise EncodingError(f"Unsupported argument: {arg!r}")


def format_command(name: str, args: Iterable[Argument] = ()) -> str:
    """Format a command line, terminator included, as text."""
    parts = [name]
    for arg in args:
        parts.append(format_argument(arg))
    return " ".join(parts) + CRLF.decode("ascii")


def encode_command(name: str, args: Iterable[Argument] = ()) -> bytes:
    """Encode a command line as the UTF-8 bytes sent to the server."""
    return format_command(name, args).encode("utf-8")
