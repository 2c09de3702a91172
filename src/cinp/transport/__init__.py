"""Transport layer: moves CInP requests over HTTP."""

from ..errors import (
    Cancelled,
    ConnectionFailure,
    SerializationError,
    TransportFailure,
    TransportTimeout,
)

from . import http
from .http import Session

__all__ = [
    "Cancelled",
    "ConnectionFailure",
    "SerializationError",
    "Session",
    "TransportFailure",
    "TransportTimeout",
    "http",
]

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
