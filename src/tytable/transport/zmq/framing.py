"""ZMQ multipart framing for table requests.

Request (DEALER -> ROUTER)
    version, id, opcode, arg...

Reply (ROUTER -> DEALER)
    version, id, status, result...

The status frame is ``b'0'`` on success; anything else is the decimal
server error code, and the first result frame (if any) carries the error
text.
"""

from __future__ import annotations

import itertools
import threading
from typing import List, Sequence, Tuple

from ..base import ESUCCESS, TransportError, error_for


PROTOCOL_VERSION = b't1'


_id_lock = threading.Lock()
_id_ticker = itertools.count(0)
_id_max = 0xFFFFFFFF


def next_id() -> bytes:
    """Return a locally unique request identification number."""

    global _id_ticker

    with _id_lock:
        number = next(_id_ticker)
        if number >= _id_max:
            _id_ticker = itertools.count(0)

    return b'%08x' % (number)


def _as_bytes(arg) -> bytes:

    if isinstance(arg, bytes):
        return arg
    if isinstance(arg, (bytearray, memoryview)):
        return bytes(arg)
    if isinstance(arg, str):
        return arg.encode()

    raise TypeError('request arguments must be bytes or str, not ' + type(arg).__name__)


def to_request_frames(req_id: bytes, opcode: str, args: Sequence[bytes]) -> Tuple[bytes, ...]:
    """Encode a request as multipart frames."""

    parts = [PROTOCOL_VERSION, req_id, opcode.encode()]
    parts.extend(_as_bytes(arg) for arg in args)
    return tuple(parts)


def from_request_frames(parts: Sequence[bytes]) -> Tuple[bytes, str, List[bytes]]:
    """Decode request frames into (id, opcode, args); used by servers."""

    if len(parts) < 3:
        raise ValueError('invalid request: %d frames' % (len(parts)))

    their_version = parts[0]
    if their_version != PROTOCOL_VERSION:
        raise ValueError(f"request is protocol {their_version!r}, recipient expects {PROTOCOL_VERSION!r}")

    return parts[1], parts[2].decode(), list(parts[3:])


def to_reply_frames(req_id: bytes, results: Sequence[bytes] = (), code: int = ESUCCESS) -> Tuple[bytes, ...]:
    """Encode a reply as multipart frames; used by servers and tests."""

    parts = [PROTOCOL_VERSION, req_id, b'%d' % (code)]
    parts.extend(_as_bytes(result) for result in results)
    return tuple(parts)


def from_reply_frames(parts: Sequence[bytes]) -> Tuple[bytes, int, List[bytes]]:
    """Decode reply frames into (id, status, results)."""

    if len(parts) < 3:
        raise TransportError(text='invalid reply: %d frames' % (len(parts)))

    their_version = parts[0]
    if their_version != PROTOCOL_VERSION:
        raise TransportError(text=f"reply is protocol {their_version!r}, recipient expects {PROTOCOL_VERSION!r}")

    try:
        status = int(parts[2])
    except ValueError:
        raise TransportError(text=f"invalid reply status: {parts[2]!r}")

    return parts[1], status, list(parts[3:])


def check_status(status: int, results: Sequence[bytes]) -> List[bytes]:
    """Return *results*, or raise the error a non-zero *status* describes."""

    if status != ESUCCESS:
        text = results[0].decode(errors='replace') if results else None
        raise error_for(status, text)

    return list(results)
