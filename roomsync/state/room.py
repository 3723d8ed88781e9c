"""Room, roster and chat records (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class RoomIdentity:
    server: str
    room: str
    password: str | None = None


@dataclass(frozen=True, slots=True)
class RecentRoom:
    server: str
    room: str
    password: str | None
    time: float


@dataclass(frozen=True, slots=True)
class UserProfile:
    username: str
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class Member:
    id: str
    username: str = ""
    avatar_url: str | None = None
    is_host: bool = False
    state: str | None = None
    time: float | None = None
    duration: float | None = None
    playback_rate: float | None = None


@dataclass(frozen=True, slots=True)
class HostState:
    time: float | None
    state: str | None
    duration: float | None = None
    playback_rate: float | None = None
    media_key: str | None = None
    received_at_ms: float = 0.0
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ChatMessage:
    msg: str
    user: dict[str, Any]
    type: str = "message"


@dataclass(frozen=True, slots=True)
class JoinResult:
    success: bool
    data: Any = None
    details: Any = None
    current_users: tuple[Member, ...] = ()
    party_pausing: bool = False


@dataclass(frozen=True, slots=True)
class RosterChange:
    users: tuple[Member, ...]
    user: Member | None


@dataclass(frozen=True, slots=True)
class PartyPauseIntent:
    is_pause: bool
    username: str | None = None


__all__ = [
    "ChatMessage",
    "HostState",
    "JoinResult",
    "Member",
    "PartyPauseIntent",
    "RecentRoom",
    "RoomIdentity",
    "RosterChange",
    "UserProfile",
]
