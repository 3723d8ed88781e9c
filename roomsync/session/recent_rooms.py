"""Recently joined rooms, most recent first, unique per (server, room)."""

from __future__ import annotations

from collections.abc import Iterable

from roomsync.state import RecentRoom


def _same_room(a: RecentRoom, b: RecentRoom) -> bool:
    return a.server == b.server and a.room == b.room


def add_recent_room(rooms: Iterable[RecentRoom], entry: RecentRoom) -> tuple[RecentRoom, ...]:
    return (entry, *(room for room in rooms if not _same_room(room, entry)))


def remove_recent_room(rooms: Iterable[RecentRoom], entry: RecentRoom) -> tuple[RecentRoom, ...]:
    return tuple(room for room in rooms if not _same_room(room, entry))


__all__ = ["add_recent_room", "remove_recent_room"]
