"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`tytable.protocol` so the protocol remains
transport-agnostic.

A transport moves one request at a time: an opcode naming the server
command, and an ordered sequence of byte-string arguments. It returns the
server's result fields, or raises a :class:`TransportError` carrying the
server's error code. Numeric arguments for increment commands (``addint``,
``adddouble``) arrive as decimal text; converting them to whatever byte
order the server expects is the transport's job.

The server-side iteration cursor (``iterinit``/``iternext``) is a single
resource per connection. Transports do not arbitrate it; two callers
iterating over one connection will interleave unpredictably.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence


# Server error codes, as reported in the status field of a reply.

ESUCCESS = 0
EINVALID = 1
ENOHOST = 2
EREFUSED = 3
ESEND = 4
ERECV = 5
EKEEP = 6
ENOREC = 7
EMISC = 9999


# Transport agnostic exceptions

class TransportError(Exception):
    """ Base class for all transport-layer errors. The *code* is opaque to
        the protocol layer and is passed through unchanged.
    """

    def __init__(self, code: Optional[int] = None, text: Optional[str] = None):

        self.code = code

        if text is None:
            text = 'transport error code %s' % (code,)

        super().__init__(text)


class NotFound(TransportError):
    """The server has no record for the requested key."""

    def __init__(self, code: Optional[int] = ENOREC, text: Optional[str] = None):
        if text is None:
            text = 'no record found'
        super().__init__(code, text)


class TransportTimeout(TransportError):
    """A request did not receive a timely response."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


def error_for(code: int, text: Optional[str] = None) -> TransportError:
    """Return the exception instance appropriate for a server error *code*."""

    if code == ENOREC:
        return NotFound(code, text)

    return TransportError(code, text)


class Transport(ABC):
    """Minimal contract for a request transport."""

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection/socket."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    def send(self, opcode: str, args: Sequence[bytes] = ()) -> List[bytes]:
        """Issue one request and return the result fields."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
