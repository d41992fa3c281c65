"""AMCP command-line interface."""

from .commands import parse_token
from .main import cli, main

__all__ = ["cli", "main", "parse_token"]
