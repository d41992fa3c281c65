"""AMCP - client codec for the Advanced Media Control Protocol."""

from .protocol import Client, Command, Response, StatusCode

__version__ = "0.1.0"

__all__ = ["Client", "Command", "Response", "StatusCode", "__version__"]
