""" Python client for the table extension of a Tokyo Tyrant style database.
    This includes the record codec, the search query builder, and a
    :class:`Table` facade over a pluggable request transport.
"""

# Submodules used by multiple other components.

from . import config
from . import protocol
from . import transport

# Primary public-facing interfaces.

from . import merge
from . import table

from .protocol import PRIMARY, Direction, Predicate, Query, negate, no_index
from .table import NoTableServer, Table, connect
update = merge.update

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
