""" Conversion between column lists and their wire representation. A record
    travels to the server as a flat sequence of alternating column names and
    values; it comes back as a single blob in which every name and value is
    terminated by a NUL byte.

    Neither direction escapes anything. A column name or value containing a
    NUL byte cannot be represented, and it is up to the caller to keep such
    data out of a table.
"""

import collections

from . import fields
from .errors import DecodeError


Column = collections.namedtuple('Column', ('name', 'value'))


def normalize_name(name):
    """ Return the canonical byte-string form of a column *name*. Byte
        strings are returned as-is, text is UTF-8 encoded, and anything
        else (an enum member, for example) is represented by its string
        form.
    """

    if isinstance(name, bytes):
        return name

    if isinstance(name, bytearray):
        return bytes(name)

    if isinstance(name, str):
        return name.encode()

    return str(name).encode()


def encode_value(value):
    """ Render a single column value as bytes. Integers and floats are sent
        as decimal text, which is also how the server stores the magic
        ``_num`` column used by :func:`tytable.table.Table.addint`.
    """

    if isinstance(value, bytes):
        return value

    if isinstance(value, bytearray):
        return bytes(value)

    if isinstance(value, str):
        return value.encode()

    if isinstance(value, bool):
        return b'1' if value else b'0'

    if isinstance(value, int):
        return b'%d' % (value)

    if isinstance(value, float):
        return repr(value).encode()

    raise TypeError('cannot encode column value of type ' + type(value).__name__)


def encode(columns):
    """ Flatten *columns* into ``[name1, value1, name2, value2, ...]``,
        preserving the input order. *columns* may be a sequence of
        (name, value) pairs or a mapping.
    """

    try:
        columns = columns.items()
    except AttributeError:
        pass

    flat = list()

    for name, value in columns:
        flat.append(normalize_name(name))
        flat.append(encode_value(value))

    return flat


def tokenize(raw):
    """ Split a NUL-delimited blob into its non-empty tokens. Runs of NUL
        bytes collapse; this absorbs the separator between a value and the
        next column name as well as the trailing record terminator.
    """

    tokens = list()
    current = bytearray()

    for byte in raw:
        if byte == 0:
            if current:
                tokens.append(bytes(current))
                current.clear()
        else:
            current.append(byte)

    # An unterminated trailing value is still a value.

    if current:
        tokens.append(bytes(current))

    return tokens


def decode(raw):
    """ Reconstruct the ordered column list held in *raw*.

        If *raw* is already an error (any exception instance, such as the
        :class:`tytable.transport.NotFound` raised for a missing record) it
        is returned unchanged; error payloads are never parsed. Malformed
        input raises :class:`DecodeError` rather than returning a partial
        or empty record.
    """

    if isinstance(raw, BaseException):
        return raw

    if isinstance(raw, str):
        raw = raw.encode()

    tokens = tokenize(raw)

    if len(tokens) % 2 != 0:
        raise DecodeError(DecodeError.ODD_TOKEN_COUNT, tokens, '%d tokens' % (len(tokens)))

    columns = list()
    seen = set()

    names = tokens[0::2]
    values = tokens[1::2]

    for name, value in zip(names, values):
        if name in seen:
            raise DecodeError(DecodeError.DUPLICATE_COLUMN, tokens, repr(name))

        seen.add(name)
        columns.append(Column(name, value))

    return columns


def join(flat):
    """ Build the blob a server would return for the flattened column list
        *flat*, as produced by :func:`encode`. Each name and each value is
        NUL-terminated.
    """

    blob = bytearray()

    for field in flat:
        blob += field
        blob += fields.NULL

    return bytes(blob)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
