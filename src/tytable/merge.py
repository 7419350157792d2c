""" Update-by-merge for table records. The server has no command that merges
    columns into an existing record while overwriting the columns that are
    already present (``putcat`` keeps the existing values), so the merge is
    done client-side: fetch, decode, merge, encode, store.

    The sequence is not atomic. A write from another client that lands
    between the fetch and the store is silently overwritten.
"""

import logging

from .protocol import columns
from .protocol import fields
from .transport import NotFound


logger = logging.getLogger(__name__)


def merge(old, new):
    """ Combine two column lists. Every column in *new* replaces the column
        of the same name in *old*; columns only in *old* are kept. The result
        lists the columns of *old* in their original order, followed by the
        columns that only appear in *new*.
    """

    merged = dict()

    for name, value in old:
        merged[columns.normalize_name(name)] = value

    try:
        new = new.items()
    except AttributeError:
        pass

    for name, value in new:
        merged[columns.normalize_name(name)] = value

    return [columns.Column(name, value) for name, value in merged.items()]


def update(transport, key, new_columns):
    """ Merge *new_columns* into the record stored under *key*, creating the
        record if it does not exist. Any transport error other than
        :class:`tytable.transport.NotFound` is raised before anything is
        written.
    """

    key = columns.normalize_name(key)

    try:
        raw = transport.send(fields.GET, [key])
    except NotFound:
        logger.debug("update %r: no existing record", key)
        old_columns = list()
    else:
        old_columns = columns.decode(b''.join(raw))

    merged = merge(old_columns, new_columns)

    data = columns.encode(merged)
    transport.send(fields.PUT, [key] + data)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
