import io

import pytest

from openflow.recorder import ResponseRecorder
from openflow.request import Header, Request, new_request

TYPE_HELLO = 0
TYPE_ECHO_REPLY = 3


def test_recorder_example():
    def handler(writer, request):
        writer.write(request.header.copy(), None)

    request = new_request(TYPE_HELLO, None)
    recorder = ResponseRecorder()
    handler(recorder, request)
    assert recorder.first().header.type == 0


def test_first_and_last():
    recorder = ResponseRecorder()
    recorder.write(Header(version=4, type=TYPE_HELLO, transaction=1), None)
    recorder.write(Header(version=4, type=TYPE_ECHO_REPLY, transaction=2), b"pong")
    assert recorder.first().header.transaction == 1
    assert recorder.last().header.transaction == 2
    assert [r.header.type for r in recorder.all()] == [TYPE_HELLO, TYPE_ECHO_REPLY]


def test_recorded_body_round_trips():
    recorder = ResponseRecorder()
    recorder.write(Header(version=4, type=TYPE_ECHO_REPLY, transaction=9), b"pong")

    wire = recorder.first().to_bytes()
    decoded = Request.read_from(io.BytesIO(wire))
    assert decoded.header.transaction == 9
    assert decoded.body.read() == b"pong"


def test_recorded_header_is_a_copy():
    header = Header(version=4, type=TYPE_HELLO, transaction=5)
    recorder = ResponseRecorder()
    recorder.write(header, None)
    header.transaction = 6
    assert recorder.first().header.transaction == 5


def test_all_returns_a_copy():
    recorder = ResponseRecorder()
    recorder.write(Header(type=TYPE_HELLO), None)
    recorder.all().clear()
    assert len(recorder.all()) == 1


def test_empty_recorder_first_raises():
    recorder = ResponseRecorder()
    assert recorder.all() == []
    with pytest.raises(IndexError):
        recorder.first()


def test_empty_recorder_last_raises():
    recorder = ResponseRecorder()
    assert recorder.all() == []
    with pytest.raises(IndexError):
        recorder.last()