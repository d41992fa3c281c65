"""Protocol message definitions for AMCP."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Union

from .errors import EncodingError


DEFAULT_PORT = 5250


class StatusCode(IntEnum):
    """Return codes sent by the server on the status line."""

    # Informational
    INFO = 100
    INFO_LINE = 101

    # Success
    OK_MULTI = 200
    OK_DATA = 201
    OK = 202

    # Client errors
    CLIENT_ERROR = 400
    ILLEGAL_VIDEO_CHANNEL = 401
    PARAMETER_MISSING = 402
    ILLEGAL_PARAMETER = 403
    MEDIA_NOT_FOUND = 404

    # Server errors
    SERVER_ERROR = 500
    SERVER_ERROR_COMMAND = 501
    MEDIA_UNREACHABLE = 502
    ACCESS_ERROR = 503


class StatusClass(str, Enum):
    """Class of a status code, taken from its hundreds digit."""

    INFORMATIONAL = "informational"
    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


_CLASS_BY_HUNDREDS = {
    1: StatusClass.INFORMATIONAL,
    2: StatusClass.SUCCESS,
    4: StatusClass.CLIENT_ERROR,
    5: StatusClass.SERVER_ERROR,
}


def status_class(code: int) -> StatusClass:
    """Classify a numeric status code."""
    return _CLASS_BY_HUNDREDS.get(code // 100, StatusClass.UNKNOWN)


# Arguments


@dataclass(frozen=True)
class Integer:
    """Signed integer argument, sent in base 10."""

    value: int


@dataclass(frozen=True)
class Float:
    """Floating point argument.

    ``bits`` is the declared width (32 or 64) and controls how many digits
    are needed to reproduce the value on the server side.
    """

    value: float
    bits: int = 64

    def __post_init__(self) -> None:
        if self.bits not in (32, 64):
            raise EncodingError(f"Float width must be 32 or 64, got {self.bits}")


@dataclass(frozen=True)
class Text:
    """Text argument, quoted on the wire when it contains whitespace."""

    value: str


Argument = Union[Integer, Float, Text]


def to_argument(value: Any) -> Argument:
    """Wrap a plain Python value in the matching argument type."""
    if isinstance(value, (Integer, Float, Text)):
        return value
    # bool is an int subclass
    if isinstance(value, bool):
        raise EncodingError(f"Cannot encode bool argument: {value!r}")
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, float):
        return Float(value)
    if isinstance(value, str):
        return Text(value)
    raise EncodingError(
        f"Cannot encode argument of type {type(value).__name__}: {value!r}"
    )


@dataclass(frozen=True)
class Command:
    """A command name with its ordered arguments."""

    name: str
    args: tuple[Argument, ...] = field(default_factory=tuple)

    @classmethod
    def build(cls, name: str, *values: Any) -> Command:
        return cls(name=name, args=tuple(to_argument(v) for v in values))

    def encode(self) -> bytes:
        from .encoder import encode_command

        return encode_command(self.name, self.args)


# Payloads


@dataclass(frozen=True)
class EmptyPayload:
    """Reply carrying no text at all."""


@dataclass(frozen=True)
class SinglePayload:
    """Reply carrying only the status message."""

    text: str


@dataclass(frozen=True)
class ListPayload:
    """Multi-line reply; the status message is the first item."""

    items: tuple[str, ...]


Payload = Union[EmptyPayload, SinglePayload, ListPayload]


@dataclass(frozen=True)
class Response:
    """A parsed server reply."""

    code: int
    payload: Payload

    @property
    def status(self) -> StatusCode | None:
        try:
            return StatusCode(self.code)
        except ValueError:
            return None

    @property
    def status_class(self) -> StatusClass:
        return status_class(self.code)

    @property
    def ok(self) -> bool:
        return self.status_class is StatusClass.SUCCESS

    @property
    def message(self) -> str:
        """Text of the status line after the code."""
        if isinstance(self.payload, SinglePayload):
            return self.payload.text
        if isinstance(self.payload, ListPayload) and self.payload.items:
            return self.payload.items[0]
        return ""

    @property
    def data(self) -> str | list[str] | None:
        """Payload as plain Python values: None, a string or a list of strings."""
        if isinstance(self.payload, SinglePayload):
            return self.payload.text
        if isinstance(self.payload, ListPayload):
            return list(self.payload.items)
        return None

    @property
    def lines(self) -> list[str]:
        """Data lines of a list reply, without the status message."""
        if isinstance(self.payload, ListPayload):
            return list(self.payload.items[1:])
        return []

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "code": self.code,
            "status": self.status.name if self.status is not None else None,
            "class": self.status_class.value,
            "ok": self.ok,
        }
        if isinstance(self.payload, ListPayload):
            result["kind"] = "list"
        elif isinstance(self.payload, SinglePayload):
            result["kind"] = "single"
        else:
            result["kind"] = "empty"
        result["data"] = self.data
        return result
