""" Construction of table search queries. A :class:`Query` accumulates
    directives-- conditions, an optional result order, and an optional result
    limit-- and serializes them into the argument list for a ``search``
    request.

    The directive list behaves like a stack: every builder call pushes its
    directive onto the front, and setting the order or the limit a second time
    removes the earlier directive of that kind before pushing the new one. The
    serialized directives are therefore in the reverse of the order in which
    they were built; the most recent call comes first on the wire.
"""

import enum

from . import fields
from .columns import normalize_name
from .errors import InvalidArgument


class Predicate(enum.IntEnum):
    """ Base comparison operators for a query condition. The values are the
        codes the server expects on the wire.
    """

    STR_EQ = fields.QCSTREQ
    STR_INC = fields.QCSTRINC
    STR_BEGIN = fields.QCSTRBW
    STR_END = fields.QCSTREW
    STR_AND = fields.QCSTRAND
    STR_OR = fields.QCSTROR
    STR_REGEX = fields.QCSTRRX
    NUM_EQ = fields.QCNUMEQ
    NUM_GT = fields.QCNUMGT
    NUM_GE = fields.QCNUMGE
    NUM_LT = fields.QCNUMLT
    NUM_LE = fields.QCNUMLE
    NUM_BETWEEN = fields.QCNUMBT
    NUM_IN_LIST = fields.QCNUMOREQ


class Direction(enum.IntEnum):
    """ Result orderings for :func:`Query.set_order`.
    """

    STR_ASCENDING = fields.QOSTRASC
    STR_DESCENDING = fields.QOSTRDESC
    NUM_ASCENDING = fields.QONUMASC
    NUM_DESCENDING = fields.QONUMDESC


class _Primary:
    """ Column selector meaning the record's primary key rather than a named
        column. Use the module-level :data:`PRIMARY` instance.
    """

    def __repr__(self):
        return 'PRIMARY'


PRIMARY = _Primary()


def selector(column):
    """ Return the wire form of a column reference: an empty field for
        :data:`PRIMARY`, otherwise the column name as bytes.
    """

    if column is PRIMARY:
        return b''

    return normalize_name(column)


def _lookup(enumeration, value, what):

    if isinstance(value, enumeration):
        return value

    if isinstance(value, str):
        try:
            return enumeration[value.upper()]
        except KeyError:
            pass

    raise InvalidArgument('unrecognized %s: %r' % (what, value))


class PredicateSpec:
    """ A base :class:`Predicate` together with its modifiers. Instances are
        normally produced by :func:`negate` and :func:`no_index` rather than
        constructed directly.

        :ivar predicate: The base :class:`Predicate`.
        :ivar negate: True if the condition matches records that fail the
            comparison.
        :ivar no_index: True if the server should bypass any index on the
            column.
    """

    def __init__(self, predicate, negate=False, no_index=False):

        self.predicate = _lookup(Predicate, predicate, 'predicate')
        self.negate = bool(negate)
        self.no_index = bool(no_index)


    def __eq__(self, other):

        if not isinstance(other, PredicateSpec):
            return NotImplemented

        mine = (self.predicate, self.negate, self.no_index)
        theirs = (other.predicate, other.negate, other.no_index)
        return mine == theirs


    def __hash__(self):
        return hash((self.predicate, self.negate, self.no_index))


    def __repr__(self):

        text = self.predicate.name.lower()

        if self.negate:
            text = 'negate(%s)' % (text)
        if self.no_index:
            text = 'no_index(%s)' % (text)

        return text


    @property
    def opcode(self):

        opcode = int(self.predicate)

        if self.negate:
            opcode |= fields.QCNEGATE
        if self.no_index:
            opcode |= fields.QCNOIDX

        return opcode


# end of class PredicateSpec



def predicate_spec(spec):
    """ Coerce *spec* into a :class:`PredicateSpec`. A :class:`Predicate`
        member or its lower-case name (``'str_eq'``) is accepted in addition
        to an existing :class:`PredicateSpec`.
    """

    if isinstance(spec, PredicateSpec):
        return spec

    return PredicateSpec(spec)


def negate(spec):
    """ Return a copy of *spec* that matches records failing the comparison.
    """

    spec = predicate_spec(spec)
    return PredicateSpec(spec.predicate, True, spec.no_index)


def no_index(spec):
    """ Return a copy of *spec* that tells the server not to use an index.
    """

    spec = predicate_spec(spec)
    return PredicateSpec(spec.predicate, spec.negate, True)


def resolve_opcode(spec):
    return predicate_spec(spec).opcode


def join_operands(operands):
    """ Render the condition *operands* as one comma-separated byte string.
        Integers are written as decimal text, byte strings are used as-is, and
        text is UTF-8 encoded. A comma inside an operand is not escaped, and
        will be read by the server as a separator.
    """

    if isinstance(operands, (bytes, bytearray, memoryview, str, int, float)):
        operands = (operands,)

    rendered = list()

    for operand in operands:
        if isinstance(operand, (bytes, bytearray, memoryview)):
            operand = bytes(operand)
        elif isinstance(operand, str):
            operand = operand.encode()
        elif isinstance(operand, int):
            operand = b'%d' % (operand)
        else:
            operand = str(operand).encode()

        rendered.append(operand)

    # An empty operand list is an empty expression field.

    return b','.join(rendered)


class Directive:
    """ One self-contained search argument. Subclasses define the *kind*
        and the parts joined by :func:`encode`.
    """

    kind = None

    def parts(self):
        raise NotImplementedError('Directive subclasses must implement parts()')


    def encode(self):
        return fields.NULL.join(self.parts())


    def __eq__(self, other):

        if type(other) is not type(self):
            return NotImplemented

        return self.encode() == other.encode()


    def __hash__(self):
        return hash(self.encode())


    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.encode())


class Condition(Directive):

    kind = 'condition'

    def __init__(self, column, spec, operands):

        self.column = column
        self.spec = predicate_spec(spec)
        self.operands = operands
        self.expression = join_operands(operands)


    def parts(self):
        opcode = b'%d' % (self.spec.opcode)
        return (fields.ADDCOND, selector(self.column), opcode, self.expression)


class Order(Directive):

    kind = 'order'

    def __init__(self, column, direction):
        self.column = column
        self.direction = _lookup(Direction, direction, 'order direction')


    def parts(self):
        # A primary key selector is the same empty field used by conditions.
        code = b'%d' % (int(self.direction))
        return (fields.SETORDER, selector(self.column), code)


class Limit(Directive):

    kind = 'limit'

    def __init__(self, max, skip=0):

        if isinstance(max, bool) or not isinstance(max, int) or max <= 0:
            raise InvalidArgument('limit must be a positive integer: %r' % (max,))

        if isinstance(skip, bool) or not isinstance(skip, int) or skip < 0:
            raise InvalidArgument('skip must be a non-negative integer: %r' % (skip,))

        self.max = max
        self.skip = skip


    def parts(self):
        return (fields.SETLIMIT, b'%d' % (self.max), b'%d' % (self.skip))


class Query:
    """ A mutable, single-owner collection of search directives. Every
        builder method returns the query itself so calls can be chained::

            query = Query().add_condition('name', 'str_eq', ['alice']).set_limit(10)

        A :class:`Query` must not be modified by two threads at once;
        independent instances share nothing.
    """

    def __init__(self):
        self.directives = list()


    def __len__(self):
        return len(self.directives)


    def __iter__(self):
        return iter(self.directives)


    def __repr__(self):
        return 'query.Query: ' + repr(self.directives)


    def _push(self, directive):
        self.directives.insert(0, directive)


    def _replace(self, directive):

        kind = directive.kind
        remaining = list()

        for existing in self.directives:
            if existing.kind != kind:
                remaining.append(existing)

        self.directives = remaining
        self._push(directive)


    def _find(self, kind):

        for directive in self.directives:
            if directive.kind == kind:
                return directive


    def add_condition(self, column, spec, operands):
        """ Add a condition matching *column* (a name, or :data:`PRIMARY`)
            against *operands* using the predicate *spec*.
        """

        self._push(Condition(column, spec, operands))
        return self


    def set_order(self, column, direction):
        """ Order the results by *column*, replacing any earlier ordering.
        """

        self._replace(Order(column, direction))
        return self


    def set_limit(self, max, skip=0):
        """ Return at most *max* results after skipping the first *skip*,
            replacing any earlier limit.
        """

        self._replace(Limit(max, skip))
        return self


    @property
    def conditions(self):
        return [directive for directive in self.directives if directive.kind == 'condition']


    @property
    def order(self):
        return self._find('order')


    @property
    def limit(self):
        return self._find('limit')


    def serialize(self):
        """ Return the directives as search arguments, most recently built
            first.
        """

        return [directive.encode() for directive in self.directives]


# end of class Query



def build_query():
    return Query()


def add_condition(query, column, spec, operands):
    return query.add_condition(column, spec, operands)


def set_order(query, column, direction):
    return query.set_order(column, direction)


def set_limit(query, max, skip=0):
    return query.set_limit(max, skip)


def serialize(query):
    return query.serialize()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
