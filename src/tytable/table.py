""" The :class:`Table` client. Each method maps to a single request on the
    underlying transport, with the exception of :func:`Table.update`, which
    is a client-side merge; see :mod:`tytable.merge`.
"""

import logging

from . import config
from . import merge
from .protocol import columns
from .protocol import fields
from .protocol.errors import InvalidArgument, ProtocolError
from .protocol.query import PRIMARY
from .transport import zmq


logger = logging.getLogger(__name__)

index_types = dict()
index_types['lexical'] = fields.ITLEXICAL
index_types['decimal'] = fields.ITDECIMAL
index_types['optimized'] = fields.ITOPT
index_types['void'] = fields.ITVOID


class NoTableServer(ProtocolError):
    """The server is reachable, but is not running a table database."""


def _decimal(number):
    return b'%d' % (number)


def _integer(results):
    return int(b''.join(results))


class Table:
    """ A table database reached through *transport*, which can be any
        :class:`tytable.transport.Transport` instance.

        The iteration methods :func:`iterinit` and :func:`iternext` drive a
        cursor that lives on the server, one per connection. Nothing prevents
        two callers sharing a connection from iterating at the same time, and
        if they do they will trample each other's position.
    """

    def __init__(self, transport):
        self.transport = transport


    def __repr__(self):
        return 'table.Table: ' + repr(self.transport)


    def _send(self, opcode, args=()):
        return self.transport.send(opcode, list(args))


    def _store(self, opcode, key, data):
        key = columns.normalize_name(key)
        self._send(opcode, [key] + columns.encode(data))


    def put(self, key, data):
        """ Store *data*, a sequence of (name, value) columns or a mapping, as
            the complete record for *key*, replacing any existing record.
        """

        self._store(fields.PUT, key, data)


    def putkeep(self, key, data):
        """ Store *data* for *key* only if *key* is not already present; the
            transport raises an error otherwise.
        """

        self._store(fields.PUTKEEP, key, data)


    def putcat(self, key, data):
        """ Add the columns in *data* to the record for *key*, creating it if
            necessary. Columns that already exist keep their current value;
            use :func:`update` to overwrite them.
        """

        self._store(fields.PUTCAT, key, data)


    def update(self, key, data):
        """ Merge the columns in *data* into the existing record for *key*.
            This is a read-modify-write sequence and is not atomic.
        """

        merge.update(self.transport, key, data)


    def out(self, key):
        self._send(fields.OUT, [columns.normalize_name(key)])


    def get(self, key):
        """ Return the record for *key* as a list of
            :class:`tytable.protocol.columns.Column` tuples.
        """

        raw = self._send(fields.GET, [columns.normalize_name(key)])
        return columns.decode(b''.join(raw))


    def mget(self, keys):
        """ Return a dictionary mapping each of *keys* that exists to its
            decoded record. Missing keys are left out.
        """

        keys = [columns.normalize_name(key) for key in keys]
        raw = self._send(fields.MGET, keys)

        if len(raw) % 2 != 0:
            raise ProtocolError('mget returned an odd number of fields')

        records = dict()

        for key, value in zip(raw[0::2], raw[1::2]):
            records[key] = columns.decode(value)

        return records


    def vsiz(self, key):
        """ Return the size of the stored record for *key*. Each column counts
            the length of its name and value, plus two separator bytes.
        """

        return _integer(self._send(fields.VSIZ, [columns.normalize_name(key)]))


    def iterinit(self):
        self._send(fields.ITERINIT)


    def iternext(self):
        """ Return the next key in the iteration started by :func:`iterinit`.
            The transport raises :class:`tytable.transport.NotFound` when
            the iteration is exhausted.
        """

        return b''.join(self._send(fields.ITERNEXT))


    def fwmkeys(self, prefix, maximum):
        """ Return up to *maximum* keys beginning with *prefix*.
        """

        prefix = columns.normalize_name(prefix)
        return self._send(fields.FWMKEYS, [prefix, _decimal(maximum)])


    def addint(self, key, number):
        """ Add *number* to the ``_num`` column of *key*, creating the record
            or the column as needed, and return the new total. The server
            keeps ``_num`` as decimal text; write it that way if setting it
            with :func:`put`.
        """

        key = columns.normalize_name(key)
        return _integer(self._send(fields.ADDINT, [key, _decimal(number)]))


    def adddouble(self, key, number, fractional=None):
        """ Add *number* to the ``_num`` column of *key* and return the new
            total as a float. If *fractional* is given, *number* is instead
            the integral part and *fractional* the fractional part in units
            of 1e-12, both sent as decimal text; the new total comes back as
            an (integral, fractional) tuple.
        """

        key = columns.normalize_name(key)

        if fractional is None:
            number = repr(float(number)).encode()
            return float(b''.join(self._send(fields.ADDDOUBLE, [key, number])))

        results = self._send(fields.ADDDOUBLE, [key, _decimal(number), _decimal(fractional)])

        if len(results) != 2:
            raise ProtocolError('adddouble returned %d fields, expected 2' % (len(results)))

        return int(results[0]), int(results[1])


    def sync(self):
        self._send(fields.SYNC)


    def optimize(self, params):
        self._send(fields.OPTIMIZE, [columns.normalize_name(params)])


    def vanish(self):
        """ Remove every record from the remote database.
        """

        self._send(fields.VANISH)


    def copy(self, path):
        self._send(fields.COPY, [columns.normalize_name(path)])


    def restore(self, path, timestamp):
        """ Restore the database from the update log at *path* up to
            *timestamp*.
        """

        path = columns.normalize_name(path)
        self._send(fields.RESTORE, [path, _decimal(timestamp)])


    def setmst(self, host, port):
        """ Set the replication master of the remote server.
        """

        host = columns.normalize_name(host)
        self._send(fields.SETMST, [host, _decimal(port)])


    def rnum(self):
        return _integer(self._send(fields.RNUM))


    def size(self):
        return _integer(self._send(fields.SIZE))


    def stat(self):
        """ Return the server status as a dictionary of strings. The server
            reports one tab-separated name/value pair per line.
        """

        raw = b''.join(self._send(fields.STAT)).decode(errors='replace')
        status = dict()

        for line in raw.splitlines():
            try:
                name, value = line.split('\t', 1)
            except ValueError:
                continue

            status[name] = value

        return status


    def setindex(self, column, type):
        """ Build an index of the given *type* (``'lexical'``, ``'decimal'``,
            ``'optimized'``, or ``'void'`` to remove one) on *column*, which
            is a column name or :data:`tytable.protocol.query.PRIMARY`.
        """

        try:
            code = index_types[type]
        except KeyError:
            raise InvalidArgument('unrecognized index type: %r' % (type,))

        if column is PRIMARY:
            column = fields.NULL
        else:
            column = columns.normalize_name(column)

        self._send(fields.SETINDEX, [column, code])


    def genuid(self):
        """ Return a new unique primary key from the server.
        """

        return b''.join(self._send(fields.GENUID))


    def search(self, query):
        """ Return the keys of the records matching *query*.
        """

        return self._send(fields.SEARCH, query.serialize())


    def searchcount(self, query):
        """ Return the number of records matching *query*.
        """

        args = query.serialize()
        args.append(fields.MODE_COUNT)
        results = self._send(fields.SEARCH, args)

        if len(results) == 0:
            return 0

        return _integer(results)


    def searchout(self, query):
        """ Remove every record matching *query*.
        """

        args = query.serialize()
        args.append(fields.MODE_OUT)
        self._send(fields.SEARCH, args)


# end of class Table



def connect(**settings):
    """ Establish a connection using the settings resolved by
        :func:`tytable.config.get` and return a :class:`Table`. The server
        must be running a table database; :class:`NoTableServer` is raised
        otherwise.
    """

    settings = config.get(**settings)

    # config.get() has already rejected unknown transports.

    transport = zmq.request.Client(settings['host'], settings['port'], settings['timeout'])
    transport.open()

    table = Table(transport)

    try:
        kind = table.stat().get('type')
    except BaseException:
        transport.close()
        raise

    if kind != 'table':
        transport.close()
        raise NoTableServer('%s:%d is a %r database' % (settings['host'], settings['port'], kind))

    logger.debug("connected to table server at %s:%d", settings['host'], settings['port'])
    return table


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
