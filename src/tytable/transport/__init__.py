"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    NotFound,
    TransportTimeout,
    TransportConnectionError,
    error_for,
)

from . import zmq
