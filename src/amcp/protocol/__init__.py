"""AMCP Protocol - line-oriented text protocol for media server control."""

from .client import Client, split_address
from .encoder import CRLF, encode_command, format_command
from .errors import (
    AMCPError,
    EncodingError,
    MalformedResponse,
    ServerError,
    TransportError,
)
from .messages import (
    DEFAULT_PORT,
    Argument,
    Command,
    EmptyPayload,
    Float,
    Integer,
    ListPayload,
    Payload,
    Response,
    SinglePayload,
    StatusClass,
    StatusCode,
    Text,
    status_class,
    to_argument,
)
from .parser import parse_status_line, read_response

__all__ = [
    "CRLF",
    "DEFAULT_PORT",
    "Argument",
    "Integer",
    "Float",
    "Text",
    "Command",
    "to_argument",
    "StatusCode",
    "StatusClass",
    "status_class",
    "Payload",
    "EmptyPayload",
    "SinglePayload",
    "ListPayload",
    "Response",
    "AMCPError",
    "TransportError",
    "MalformedResponse",
    "EncodingError",
    "ServerError",
    "encode_command",
    "format_command",
    "parse_status_line",
    "read_response",
    "Client",
    "split_address",
]
