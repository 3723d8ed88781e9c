from .health import ServerHealth
from .session import SessionState
from .polling import PollRecord, PollResult, PlayerSnapshot
from .settings import AppSettings, PollSettings, HealthSettings, RelaySettings
from .room import (
    Member,
    HostState,
    JoinResult,
    RecentRoom,
    ChatMessage,
    UserProfile,
    RoomIdentity,
    RosterChange,
    PartyPauseIntent,
)

__all__ = [
    "AppSettings",
    "ChatMessage",
    "HealthSettings",
    "HostState",
    "JoinResult",
    "Member",
    "PartyPauseIntent",
    "PlayerSnapshot",
    "PollRecord",
    "PollResult",
    "PollSettings",
    "RecentRoom",
    "RelaySettings",
    "RoomIdentity",
    "RosterChange",
    "ServerHealth",
    "SessionState",
    "UserProfile",
]
