from __future__ import annotations

import pytest

from roomsync.relay import RelayChannel
from roomsync.session import RoomMembership
from roomsync.errors import JoinTimeoutError, JoinRejectedError
from roomsync.state import Member, UserProfile, RoomIdentity, SessionState
from tests.fakes import FakeConnector, FakeRelaySocket, settle, make_settings, reply_join

SERVER = "wss://relay.example"
ROOM = RoomIdentity(server=SERVER, room="abc123", password=None)


def _membership(state: SessionState) -> RoomMembership:
    return RoomMembership(
        state=state,
        profile=UserProfile(username="ana", avatar_url="http://a/ana.png"),
        settings=make_settings().relay,
        wall_clock_fn=lambda: 1_700_000_000_000.0,
    )


async def _open(setup=None) -> tuple[RelayChannel, FakeConnector]:
    connector = FakeConnector(setup=setup)
    channel = RelayChannel(f"{SERVER}/relay", settings=make_settings().relay, connect_fn=connector)
    await channel.open()
    return channel, connector


@pytest.mark.asyncio
async def test_join_sends_identity_and_returns_result() -> None:
    channel, connector = await _open(lambda ws: ws.responders.update({"join": reply_join([{"id": "u1"}])}))
    state = SessionState(uuid="client-1")
    membership = _membership(state)

    assert state.is_in_room is False
    result = await membership.join(channel, ROOM)

    assert connector.latest.sent_events("join") == [
        [{"username": "ana", "room": "abc123", "password": None, "avatarUrl": "http://a/ana.png", "uuid": "client-1"}]
    ]
    assert [m.id for m in result.current_users] == ["u1"]
    # The handshake itself never touches session state.
    assert state.is_in_room is False
    assert state.users == {}
    assert channel.listener_count("join-result") == 0

    membership.apply_join_result(result)
    entry = membership.add_recent_room(ROOM)

    assert state.is_in_room is True
    assert list(state.users) == ["u1"]
    assert state.recent_rooms == (entry,)
    assert (entry.server, entry.room, entry.password) == (SERVER, "abc123", None)
    await channel.close()


@pytest.mark.asyncio
async def test_listener_is_armed_before_join_is_sent() -> None:
    armed: list[int] = []

    def _check(ws: FakeRelaySocket, frame: dict) -> None:
        armed.append(channel.listener_count("join-result"))
        reply_join()(ws, frame)

    channel, _ = await _open(lambda ws: ws.responders.update({"join": _check}))
    await _membership(SessionState(uuid="c")).join(channel, ROOM)

    assert armed == [1]
    await channel.close()


@pytest.mark.asyncio
async def test_rejected_join_mutates_nothing() -> None:
    channel, _ = await _open(lambda ws: ws.responders.update({"join": reply_join(success=False, details="bad password")}))
    state = SessionState(uuid="c")
    membership = _membership(state)

    with pytest.raises(JoinRejectedError) as exc:
        await membership.join(channel, ROOM)

    assert exc.value.details == "bad password"
    assert state.is_in_room is False
    assert state.users == {}
    assert state.recent_rooms == ()
    await channel.close()


@pytest.mark.asyncio
async def test_join_timeout_deregisters_listener() -> None:
    channel, _ = await _open()

    with pytest.raises(JoinTimeoutError) as exc:
        await _membership(SessionState(uuid="c")).join(channel, ROOM)

    assert exc.value.room == "abc123"
    await settle(2)
    assert channel.listener_count("join-result") == 0
    await channel.close()


def test_replace_roster_takes_host_from_roster() -> None:
    state = SessionState(uuid="c")
    membership = _membership(state)
    membership.replace_roster([Member(id="u1"), Member(id="u2", is_host=True)])

    assert list(state.users) == ["u1", "u2"]
    assert state.host is not None and state.host.id == "u2"

    membership.replace_roster([Member(id="u3")])
    assert list(state.users) == ["u3"]
    assert state.host_id is None
    assert state.host is None


def test_replace_roster_keeps_host_still_present() -> None:
    state = SessionState(uuid="c")
    membership = _membership(state)
    membership.replace_roster([Member(id="u1"), Member(id="u2", is_host=True)])
    membership.set_host("u1")

    membership.replace_roster([Member(id="u1"), Member(id="u3")])

    assert state.host_id == "u1"
