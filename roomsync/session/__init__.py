from .client import SyncClient
from .health import ServerHealthCache
from .membership import RoomMembership
from .party_pause import PartyPauseCoordinator
from .dispatch import HANDLERS, EventDispatcher, DispatchContext
from .recent_rooms import add_recent_room, remove_recent_room

__all__ = [
    "DispatchContext",
    "EventDispatcher",
    "HANDLERS",
    "PartyPauseCoordinator",
    "RoomMembership",
    "ServerHealthCache",
    "SyncClient",
    "add_recent_room",
    "remove_recent_room",
]
