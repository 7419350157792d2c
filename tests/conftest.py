import pytest

from tytable import transport
from tytable.protocol import columns


class FakeTransport(transport.Transport):
    """ An in-process stand-in for a table server. Records are stored as the
        NUL-terminated blobs a real server would return, and every request
        is logged in *calls* so tests can inspect the exact arguments.
    """

    def __init__(self):
        self.records = dict()
        self.calls = list()
        self.search_results = list()
        self.status = {'type': 'table', 'bigend': '0'}
        self.failures = dict()
        self._cursor = None
        self._uid = 0
        self.closed = False


    @property
    def is_open(self):
        return True


    def open(self):
        pass


    def close(self):
        self.closed = True


    def fail(self, opcode, error):
        """ Make the next request for *opcode* raise *error*.
        """

        self.failures[opcode] = error


    def send(self, opcode, args=()):

        args = list(args)
        self.calls.append((opcode, args))

        try:
            error = self.failures.pop(opcode)
        except KeyError:
            pass
        else:
            raise error

        handler = getattr(self, 'do_' + opcode)
        return handler(*args)


    def _columns(self, key):
        try:
            blob = self.records[key]
        except KeyError:
            raise transport.NotFound()
        return columns.decode(blob)


    def _store(self, key, pairs):
        flat = list()
        for name, value in pairs:
            flat.append(name)
            flat.append(value)
        self.records[key] = columns.join(flat)


    def do_put(self, key, *flat):
        self.records[key] = columns.join(flat)
        return []

    def do_putkeep(self, key, *flat):
        if key in self.records:
            raise transport.TransportError(transport.base.EKEEP, 'record exists')
        return self.do_put(key, *flat)

    def do_putcat(self, key, *flat):
        try:
            existing = self._columns(key)
        except transport.NotFound:
            existing = list()

        names = set(name for name, value in existing)
        pairs = list(existing)
        for name, value in zip(flat[0::2], flat[1::2]):
            if name not in names:
                pairs.append((name, value))

        self._store(key, pairs)
        return []

    def do_out(self, key):
        try:
            del self.records[key]
        except KeyError:
            raise transport.NotFound()
        return []

    def do_get(self, key):
        try:
            return [self.records[key]]
        except KeyError:
            raise transport.NotFound()

    def do_mget(self, *keys):
        results = list()
        for key in keys:
            if key in self.records:
                results.append(key)
                results.append(self.records[key])
        return results

    def do_vsiz(self, key):
        size = 0
        for name, value in self._columns(key):
            size += len(name) + len(value) + 2
        return [b'%d' % (size)]

    def do_iterinit(self):
        self._cursor = iter(sorted(self.records))
        return []

    def do_iternext(self):
        try:
            return [next(self._cursor)]
        except (StopIteration, TypeError):
            raise transport.NotFound()

    def do_fwmkeys(self, prefix, maximum):
        keys = sorted(key for key in self.records if key.startswith(prefix))
        return keys[:int(maximum)]

    def do_addint(self, key, number):
        try:
            existing = self._columns(key)
        except transport.NotFound:
            existing = list()

        total = int(number)
        pairs = list()
        for name, value in existing:
            if name == b'_num':
                total += int(value)
            else:
                pairs.append((name, value))

        pairs.append((b'_num', b'%d' % (total)))
        self._store(key, pairs)
        return [b'%d' % (total)]

    def do_adddouble(self, key, number, fractional=None):
        if fractional is None:
            return [repr(float(number)).encode()]
        return [number, fractional]

    def do_sync(self):
        return []

    def do_optimize(self, params):
        return []

    def do_copy(self, path):
        return []

    def do_restore(self, path, timestamp):
        return []

    def do_setmst(self, host, port):
        return []

    def do_vanish(self):
        self.records.clear()
        return []

    def do_rnum(self):
        return [b'%d' % (len(self.records))]

    def do_size(self):
        return [b'%d' % (sum(len(blob) for blob in self.records.values()))]

    def do_stat(self):
        if isinstance(self.status, bytes):
            return [self.status]
        lines = ['%s\t%s' % (name, value) for name, value in self.status.items()]
        return ['\n'.join(lines).encode() + b'\n']

    def do_setindex(self, column, code):
        return []

    def do_genuid(self):
        self._uid += 1
        return [b'%d' % (self._uid)]

    def do_search(self, *args):
        return list(self.search_results)


@pytest.fixture
def fake():
    return FakeTransport()


@pytest.fixture
def loaded(fake):
    """ A fake transport holding the sample records used throughout the
        table tests.
    """

    rows = dict()
    rows[b'rec1'] = [(b'name', b'alice'), (b'sport', b'baseball')]
    rows[b'rec2'] = [(b'name', b'bob'), (b'sport', b'basketball')]
    rows[b'rec3'] = [(b'name', b'carol'), (b'age', b'24')]
    rows[b'rec4'] = [(b'name', b'trent'), (b'age', b'33'), (b'sport', b'football')]
    rows[b'rec5'] = [(b'name', b'mallet'), (b'sport', b'tennis'), (b'fruit', b'apple')]

    for key, pairs in rows.items():
        fake._store(key, pairs)

    fake.calls.clear()
    return fake


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
