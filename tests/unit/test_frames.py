from __future__ import annotations

import json

import pytest

from roomsync.relay.frames import encode_frame, build_event_frame, parse_relay_frame


def test_parse_event_frame_ok() -> None:
    raw = json.dumps({"type": "event", "event": "poll-result", "args": [[], None, 3]})
    frame = parse_relay_frame(raw)
    assert frame.type == "event"
    assert frame.event == "poll-result"
    assert frame.args == ([], None, 3)
    assert frame.ack_id is None


def test_parse_ack_frame_ok() -> None:
    frame = parse_relay_frame(b'{"type": "ack", "ack_id": 7, "args": [true]}')
    assert frame.type == "ack"
    assert frame.ack_id == 7
    assert frame.args == (True,)


def test_missing_args_default_to_empty() -> None:
    frame = parse_relay_frame(json.dumps({"type": "event", "event": "connect"}))
    assert frame.args == ()


def test_build_and_encode_event_frame() -> None:
    frame = build_event_frame("join", ({"room": "abc123"},), ack_id=2)
    assert json.loads(encode_frame(frame)) == {
        "type": "event",
        "event": "join",
        "args": [{"room": "abc123"}],
        "ack_id": 2,
    }
    assert "ack_id" not in build_event_frame("poll", ())


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps([]),
        json.dumps({"event": "poll", "args": []}),
        json.dumps({"type": "hello", "event": "poll"}),
        json.dumps({"type": "event", "args": []}),
        json.dumps({"type": "event", "event": "  ", "args": []}),
        json.dumps({"type": "event", "event": "poll", "args": {}}),
        json.dumps({"type": "event", "event": "poll", "ack_id": "1"}),
        json.dumps({"type": "ack", "ack_id": True, "args": []}),
        json.dumps({"type": "ack", "args": []}),
    ],
)
def test_parse_relay_frame_invalid(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_relay_frame(raw)
