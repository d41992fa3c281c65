"""Output formatting for CLI."""

from __future__ import annotations

import json
import sys
from typing import Callable

from ..protocol.messages import ListPayload, Response, StatusClass


def format_status_line(response: Response) -> str:
    """Format the code and message as received on the status line."""
    return f"{response.code} {response.message}".rstrip()


def format_response(response: Response) -> str:
    """Format a response for display."""
    lines = [format_status_line(response)]
    if isinstance(response.payload, ListPayload):
        lines.extend(response.lines)
    return "\n".join(lines)


def print_response(
    response: Response,
    json_output: bool = False,
    formatter: Callable[[Response], str] | None = None,
) -> None:
    """Print response to stdout, or the error to stderr and exit 1."""
    if json_output:
        print(json.dumps(response.to_dict(), indent=2))
        if response.status_class in (StatusClass.CLIENT_ERROR, StatusClass.SERVER_ERROR):
            sys.exit(1)
        return

    if response.status_class in (StatusClass.CLIENT_ERROR, StatusClass.SERVER_ERROR):
        print(f"Error [{response.code}]: {response.message}", file=sys.stderr)
        sys.exit(1)

    print((formatter or format_response)(response))


def print_error(message: str, code: int = 2) -> None:
    """Print a local (non-server) error and exit."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(code)
