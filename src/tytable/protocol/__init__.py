"""
tytable Protocol Layer
======================

This package defines how table records and search queries are represented
as request arguments. It builds and parses wire arguments only; moving them
to a server is the transport layer's job.

The protocol layer MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Table Facade (tytable.table)
    One method per server command
    - put() / get() / update()
    - search() / searchcount() / searchout()

    │
    ▼
Query Builder (query.py)
    Conditions, ordering, limits
    - Stack ordered: most recent directive first
    - Opcode and bit-flag composition

    │
    ▼
Column Codec (columns.py)
    Column lists <-> NUL-delimited blobs

    │
    ▼
Field Vocabulary (fields.py)
    Command names, condition/order/index codes

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Transport Layer
    send(opcode, args) -> results
    - ZeroMQ
"""

from . import errors
from . import fields
from . import columns
from . import query

from .columns import Column, encode, decode
from .errors import DecodeError, InvalidArgument, ProtocolError
from .query import (
    PRIMARY,
    Direction,
    Predicate,
    Query,
    add_condition,
    build_query,
    negate,
    no_index,
    resolve_opcode,
    serialize,
    set_limit,
    set_order,
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
