"""ZeroMQ transport."""

from . import framing
from . import request
