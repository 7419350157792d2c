"""ZeroMQ request/response transport.

Requests go out over a DEALER socket to a table gateway listening on a
ROUTER socket; see :mod:`.framing` for the frame layout.

Each :class:`Client` owns one socket; callers that want to share a
connection share the instance.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional, Sequence, Tuple

import zmq

from ..base import Transport, TransportConnectionError, TransportTimeout
from .framing import check_status, from_reply_frames, next_id, to_request_frames


logger = logging.getLogger(__name__)

zmq_context = zmq.Context()


class Client(Transport):
    """Issue requests via a ZeroMQ DEALER socket and wait for each reply."""

    timeout = 5.0

    def __init__(self, address: str, port: int, timeout: Optional[float] = None):
        self.address = address
        self.port = int(port)

        if timeout is not None:
            self.timeout = float(timeout)

        self.socket: Optional[zmq.Socket] = None
        self.socket_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"request.Client({self.address!r}, {self.port})"

    @property
    def server(self) -> str:
        return f"tcp://{self.address}:{self.port}"

    @property
    def is_open(self) -> bool:
        return self.socket is not None

    def open(self) -> None:
        if self.socket is not None:
            return

        identity = f"request.Client.{id(self)}".encode()

        socket = zmq_context.socket(zmq.DEALER)
        socket.setsockopt(zmq.LINGER, 0)
        socket.identity = identity

        try:
            socket.connect(self.server)
        except zmq.ZMQError as exc:
            socket.close()
            raise TransportConnectionError(text=f"cannot connect to {self.server}: {exc}") from exc

        self.socket = socket
        logger.debug("connected to %s", self.server)

    def close(self) -> None:
        with self.socket_lock:
            if self.socket is not None:
                self.socket.close()
                self.socket = None

    def _receive(self, req_id: bytes, opcode: str) -> Tuple[int, List[bytes]]:
        # Replies to earlier, timed-out requests may still be in flight;
        # anything not matching req_id is discarded.

        deadline = time.monotonic() + self.timeout

        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0 or not self.socket.poll(int(remaining * 1000) + 1, zmq.POLLIN):
                raise TransportTimeout(
                    text=f"{opcode} @ {self.address}:{self.port}: no reply in {self.timeout:.2f} sec"
                )

            parts = self.socket.recv_multipart()
            reply_id, status, results = from_reply_frames(parts)

            if reply_id == req_id:
                return status, results

            logger.debug("discarding stale reply %r", reply_id)

    def send(self, opcode: str, args: Sequence[bytes] = ()) -> List[bytes]:
        req_id = next_id()
        frames = to_request_frames(req_id, opcode, args)

        # The lock spans the whole exchange; ZeroMQ sockets are not
        # thread-safe, and a reply must reach the thread that asked for it.

        with self.socket_lock:
            if self.socket is None:
                self.open()

            logger.debug("%s %s: %d args", self.server, opcode, len(args))
            self.socket.send_multipart(frames)
            status, results = self._receive(req_id, opcode)

        return check_status(status, results)

