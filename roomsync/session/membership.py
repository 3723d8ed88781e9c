"""Room join handshake and roster bookkeeping."""

from __future__ import annotations

import time
import asyncio
import logging
from collections.abc import Callable, Iterable

from roomsync.relay import RelayChannel
from roomsync.relay.events import parse_join_result
from roomsync.config.relay import EVENT_JOIN, EVENT_JOIN_RESULT
from roomsync.errors import JoinTimeoutError, JoinRejectedError, RelayConnectionError
from roomsync.state import (
    Member,
    JoinResult,
    RecentRoom,
    UserProfile,
    RoomIdentity,
    SessionState,
    RelaySettings,
)

from .recent_rooms import add_recent_room, remove_recent_room

logger = logging.getLogger(__name__)


def wall_clock_ms() -> float:
    return time.time() * 1000.0


class RoomMembership:
    def __init__(
        self,
        *,
        state: SessionState,
        profile: UserProfile,
        settings: RelaySettings,
        wall_clock_fn: Callable[[], float] | None = None,
    ) -> None:
        self._state = state
        self._profile = profile
        self._settings = settings
        self._wall_clock = wall_clock_fn or wall_clock_ms

    def join_payload(self, room: RoomIdentity) -> dict[str, object]:
        return {
            "username": self._profile.username,
            "room": room.room,
            "password": room.password,
            "avatarUrl": self._profile.avatar_url,
            "uuid": self._state.uuid,
        }

    async def join(self, channel: RelayChannel, room: RoomIdentity) -> JoinResult:
        """Run the join handshake. Never mutates session state.

        The join-result listener is armed before the join is emitted so a fast
        reply cannot be missed.
        """
        timeout_s = self._settings.join_timeout_s
        result_future = channel.wait_once(EVENT_JOIN_RESULT)
        try:
            if not await channel.emit(EVENT_JOIN, self.join_payload(room)):
                raise RelayConnectionError(url=channel.url, reason="could not send join")
            args = await asyncio.wait_for(result_future, timeout=timeout_s)
        except TimeoutError as exc:
            raise JoinTimeoutError(room=room.room, timeout_s=timeout_s) from exc
        finally:
            # Deregisters the listener if it never fired.
            result_future.cancel()

        try:
            result = parse_join_result(args)
        except ValueError as exc:
            logger.warning("invalid join result room=%s: %s", room.room, exc)
            raise JoinRejectedError(room=room.room, details=str(exc)) from exc

        if not result.success:
            logger.info("join rejected room=%s details=%r", room.room, result.details)
            raise JoinRejectedError(room=room.room, details=result.details)
        return result

    def apply_join_result(self, result: JoinResult) -> None:
        self.replace_roster(result.current_users)
        self._state.party_pausing = result.party_pausing
        self._state.is_in_room = True
        logger.info("joined room users=%s party_pausing=%s", len(self._state.users), result.party_pausing)

    def replace_roster(self, users: Iterable[Member]) -> None:
        roster = {member.id: member for member in users}
        self._state.users = roster
        host = next((member for member in roster.values() if member.is_host), None)
        if host is not None:
            self._state.host_id = host.id
        elif self._state.host_id not in roster:
            self._state.host_id = None

    def set_host(self, member_id: str) -> None:
        self._state.host_id = member_id

    def add_recent_room(self, room: RoomIdentity) -> RecentRoom:
        entry = RecentRoom(server=room.server, room=room.room, password=room.password, time=self._wall_clock())
        self._state.recent_rooms = add_recent_room(self._state.recent_rooms, entry)
        return entry

    def remove_recent_room(self, entry: RecentRoom) -> None:
        self._state.recent_rooms = remove_recent_room(self._state.recent_rooms, entry)


__all__ = ["RoomMembership", "wall_clock_ms"]
