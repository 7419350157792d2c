import pytest
import tytable

from tytable.transport.zmq import framing


def test_request_frames():

    frames = framing.to_request_frames(b'00000001', 'put', [b'key', 'name', b'alice'])
    assert frames == (framing.PROTOCOL_VERSION, b'00000001', b'put', b'key', b'name', b'alice')

    req_id, opcode, args = framing.from_request_frames(frames)
    assert req_id == b'00000001'
    assert opcode == 'put'
    assert args == [b'key', b'name', b'alice']

    with pytest.raises(TypeError):
        framing.to_request_frames(b'00000001', 'addint', [b'key', 10])


def test_reply_frames():

    frames = framing.to_reply_frames(b'00000002', [b'rec1', b'rec2'])
    reply_id, status, results = framing.from_reply_frames(frames)

    assert reply_id == b'00000002'
    assert status == 0
    assert framing.check_status(status, results) == [b'rec1', b'rec2']


def test_reply_errors():

    with pytest.raises(tytable.transport.NotFound):
        framing.check_status(7, [])

    with pytest.raises(tytable.transport.TransportError) as caught:
        framing.check_status(6, [b'record exists'])

    assert caught.value.code == 6
    assert str(caught.value) == 'record exists'
    assert not isinstance(caught.value, tytable.transport.NotFound)


def test_version_mismatch():

    with pytest.raises(ValueError):
        framing.from_request_frames((b'zz', b'00000001', b'get', b'key'))

    with pytest.raises(tytable.transport.TransportError):
        framing.from_reply_frames((b'zz', b'00000001', b'0'))


def test_ids_are_unique():

    ids = set(framing.next_id() for count in range(100))
    assert len(ids) == 100


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
