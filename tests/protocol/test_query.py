import pytest
import tytable

from tytable.protocol import query
from tytable.protocol.errors import InvalidArgument
from tytable.protocol.query import PRIMARY, Direction, Predicate


def test_opcode_composition():

    assert query.resolve_opcode(Predicate.STR_EQ) == 0
    assert query.resolve_opcode('str_eq') == 0
    assert query.resolve_opcode(query.negate(Predicate.STR_AND)) == 16777220
    assert query.resolve_opcode(query.no_index(Predicate.STR_EQ)) == 33554432

    both = query.negate(query.no_index('num_in_list'))
    assert query.resolve_opcode(both) == (1 << 24) | (1 << 25) | 14
    assert both == query.no_index(query.negate(Predicate.NUM_IN_LIST))


def test_predicate_codes():

    expected = dict()
    expected['str_eq'] = 0
    expected['str_inc'] = 1
    expected['str_begin'] = 2
    expected['str_end'] = 3
    expected['str_and'] = 4
    expected['str_or'] = 5
    expected['str_regex'] = 7
    expected['num_eq'] = 8
    expected['num_gt'] = 9
    expected['num_ge'] = 10
    expected['num_lt'] = 11
    expected['num_le'] = 12
    expected['num_between'] = 13
    expected['num_in_list'] = 14

    for name, code in expected.items():
        assert query.resolve_opcode(name) == code

    # Code 6 has no predicate name.
    assert 6 not in set(int(member) for member in Predicate)


def test_unknown_predicate():

    with pytest.raises(InvalidArgument):
        query.resolve_opcode('str_like')

    with pytest.raises(InvalidArgument):
        query.resolve_opcode(6)


def test_join_operands():

    assert query.join_operands([32]) == b'32'
    assert query.join_operands(['bar']) == b'bar'
    assert query.join_operands([b'bar', 'baz']) == b'bar,baz'
    assert query.join_operands([10, 20]) == b'10,20'

    # Commas inside an operand are not escaped.
    assert query.join_operands(['a,b', 'c']) == b'a,b,c'

    assert query.join_operands([bytearray(b'bar'), memoryview(b'baz')]) == b'bar,baz'
    assert query.join_operands(bytearray(b'bar')) == b'bar'

    assert query.join_operands([]) == b''


def test_add_condition():

    q = query.build_query()
    q.add_condition('foo', 'str_eq', ['bar'])

    assert q.serialize() == [b'addcond\x00foo\x000\x00bar']

    q = query.add_condition(query.Query(), 'foo', query.negate('str_and'), ['bar', 'baz'])
    assert query.serialize(q) == [b'addcond\x00foo\x0016777220\x00bar,baz']


def test_add_condition_primary():

    q = query.Query().add_condition(PRIMARY, Predicate.STR_BEGIN, ['rec'])
    assert q.serialize() == [b'addcond\x00\x002\x00rec']


def test_add_condition_no_operands():

    q = query.Query().add_condition('name', 'str_eq', [])
    assert q.serialize() == [b'addcond\x00name\x000\x00']


def test_set_order():

    q = query.set_order(query.Query(), PRIMARY, 'str_descending')

    assert len(q) == 1
    assert q.order.direction == Direction.STR_DESCENDING
    assert q.serialize() == [b'setorder\x00\x001']

    q.set_order('foo', Direction.STR_ASCENDING)

    assert len(q) == 1
    assert q.serialize() == [b'setorder\x00foo\x000']

    with pytest.raises(InvalidArgument):
        q.set_order('foo', 'sideways')


def test_set_limit():

    q = query.set_limit(query.Query(), 2)
    assert q.serialize() == [b'setlimit\x002\x000']

    q = query.set_limit(q, 4, 1)

    assert len(q) == 1
    assert q.limit.max == 4
    assert q.limit.skip == 1
    assert q.serialize() == [b'setlimit\x004\x001']


def test_set_limit_range():

    q = query.Query()

    for arguments in ((0,), (-1,), (5, -1), (True,), ('5',)):
        with pytest.raises(InvalidArgument):
            q.set_limit(*arguments)

    assert len(q) == 0


def test_lifo_order():

    q = query.Query()
    q.add_condition('a', 'str_eq', ['1'])
    q.add_condition('b', 'str_eq', ['2'])
    q.add_condition('c', 'str_eq', ['3'])

    assert q.serialize() == [
        b'addcond\x00c\x000\x003',
        b'addcond\x00b\x000\x002',
        b'addcond\x00a\x000\x001',
    ]


def test_replace_moves_to_front():

    q = query.Query()
    q.set_limit(10)
    q.add_condition('name', 'str_eq', ['alice'])
    q.set_order('age', 'num_ascending')
    q.set_limit(5, 2)

    serialized = q.serialize()

    assert serialized == [
        b'setlimit\x005\x002',
        b'setorder\x00age\x002',
        b'addcond\x00name\x000\x00alice',
    ]

    assert len(q.conditions) == 1


def test_top_level_exports():

    q = tytable.Query().add_condition('age', tytable.negate(tytable.Predicate.NUM_GT), [30])
    assert q.serialize() == [b'addcond\x00age\x0016777225\x0030']


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
