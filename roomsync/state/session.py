"""Per-client session state shared by the sync components."""

from __future__ import annotations

from dataclasses import field, dataclass

from .room import Member, HostState, RecentRoom, ChatMessage, RoomIdentity


@dataclass(slots=True)
class SessionState:
    uuid: str
    room: RoomIdentity | None = None
    is_connected: bool = False
    is_in_room: bool = False
    # Ordered by the server's last broadcast, keyed by member id.
    users: dict[str, Member] = field(default_factory=dict)
    host_id: str | None = None
    host_state: HostState | None = None
    me: Member | None = None
    party_pausing: bool = False
    messages: list[ChatMessage] = field(default_factory=list)
    recent_rooms: tuple[RecentRoom, ...] = ()

    @property
    def host(self) -> Member | None:
        if self.host_id is None:
            return None
        return self.users.get(self.host_id)

    def clear_transient(self) -> None:
        """Leave the room and forget everything the relay told us about it."""
        self.is_connected = False
        self.is_in_room = False
        self.users = {}
        self.host_id = None
        self.host_state = None
        self.me = None
        self.messages.clear()


__all__ = ["SessionState"]
