from __future__ import annotations

from roomsync.state import RecentRoom
from roomsync.session import add_recent_room, remove_recent_room


def _room(server: str, room: str, time: float, password: str | None = None) -> RecentRoom:
    return RecentRoom(server=server, room=room, password=password, time=time)


def test_add_prepends_new_entry() -> None:
    rooms = (_room("wss://a", "r1", 1.0),)
    rooms = add_recent_room(rooms, _room("wss://b", "r2", 2.0))
    assert [(r.server, r.room) for r in rooms] == [("wss://b", "r2"), ("wss://a", "r1")]


def test_add_duplicate_moves_to_front_with_new_time() -> None:
    rooms = (_room("wss://a", "r1", 1.0), _room("wss://a", "r2", 2.0))
    rooms = add_recent_room(rooms, _room("wss://a", "r2", 9.0, password="pw"))

    assert [r.room for r in rooms] == ["r2", "r1"]
    assert rooms[0].time == 9.0
    assert rooms[0].password == "pw"


def test_same_room_name_on_other_server_is_distinct() -> None:
    rooms = add_recent_room((_room("wss://a", "r1", 1.0),), _room("wss://b", "r1", 2.0))
    assert len(rooms) == 2


def test_remove_filters_matching_server_and_room() -> None:
    rooms = (_room("wss://a", "r1", 1.0), _room("wss://b", "r1", 2.0))
    rooms = remove_recent_room(rooms, _room("wss://a", "r1", 0.0))
    assert [(r.server, r.room) for r in rooms] == [("wss://b", "r1")]
    assert remove_recent_room((), _room("wss://a", "r1", 0.0)) == ()
