"""Inbound relay event payload validation.

Relay events carry positional arguments with loosely shaped objects. Every
handler converts them into the records in `roomsync.state` here, so the rest of
the client never touches raw payloads. Invalid payloads raise ValueError.
"""

from __future__ import annotations

from typing import Any
from collections.abc import Mapping, Sequence

from roomsync.state import (
    Member,
    HostState,
    JoinResult,
    PollResult,
    ChatMessage,
    RosterChange,
    PlayerSnapshot,
    PartyPauseIntent,
)

_SNAPSHOT_KEYS = {"time", "state", "playerState", "duration", "playbackRate"}
_HOST_UPDATE_KEYS = _SNAPSHOT_KEYS | {"key", "ratingKey"}


def _arg(args: Sequence[Any], index: int, default: Any = None) -> Any:
    return args[index] if len(args) > index else default


def _opt_float(value: Any, name: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{name}' must be a number")
    return float(value)


def _opt_str(value: Any, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{name}' must be a string")
    return value


def parse_member(obj: Any) -> Member:
    if not isinstance(obj, Mapping):
        raise ValueError("member must be an object")

    raw_id = obj.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)) or not str(raw_id).strip():
        raise ValueError("member missing non-empty 'id'")

    avatar = obj.get("avatarUrl", obj.get("thumb"))
    return Member(
        id=str(raw_id).strip(),
        username=_opt_str(obj.get("username"), "username") or "",
        avatar_url=_opt_str(avatar, "avatarUrl"),
        is_host=bool(obj.get("isHost", False)),
        state=_opt_str(obj.get("state", obj.get("playerState")), "state"),
        time=_opt_float(obj.get("time"), "time"),
        duration=_opt_float(obj.get("duration"), "duration"),
        playback_rate=_opt_float(obj.get("playbackRate"), "playbackRate"),
    )


def parse_members(value: Any) -> tuple[Member, ...]:
    if value is None:
        return ()
    # Some relay builds broadcast the roster as an object keyed by member id.
    if isinstance(value, Mapping):
        value = [{"id": key, **user} if isinstance(user, Mapping) else user for key, user in value.items()]
    if not isinstance(value, list):
        raise ValueError("users must be an array")
    return tuple(parse_member(user) for user in value)


def parse_join_result(args: Sequence[Any]) -> JoinResult:
    success = bool(_arg(args, 0, False))
    if not success:
        return JoinResult(success=False, data=_arg(args, 1), details=_arg(args, 2))
    return JoinResult(
        success=True,
        data=_arg(args, 1),
        details=_arg(args, 2),
        current_users=parse_members(_arg(args, 3)),
        party_pausing=bool(_arg(args, 4, False)),
    )


def _parse_command_id(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("'commandId' must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("'commandId' must be an integer")
    return int(value)


def parse_poll_command_id(args: Sequence[Any]) -> int | None:
    return _parse_command_id(_arg(args, 2))


def parse_poll_result(args: Sequence[Any]) -> PollResult:
    me = _arg(args, 1)
    return PollResult(
        users=parse_members(_arg(args, 0)),
        me=parse_member(me) if me is not None else None,
        command_id=parse_poll_command_id(args),
    )


def parse_roster_change(args: Sequence[Any]) -> RosterChange:
    user = _arg(args, 1)
    return RosterChange(
        users=parse_members(_arg(args, 0)),
        user=parse_member(user) if user is not None else None,
    )


def parse_host_swap(args: Sequence[Any]) -> Member:
    user = _arg(args, 0)
    if isinstance(user, (str, int)) and not isinstance(user, bool):
        return Member(id=str(user))
    return parse_member(user)


def parse_host_update(args: Sequence[Any], *, received_at_ms: float) -> HostState:
    data = _arg(args, 0)
    if not isinstance(data, Mapping):
        raise ValueError("host update must be an object")
    media_key = data.get("key", data.get("ratingKey"))
    return HostState(
        time=_opt_float(data.get("time"), "time"),
        state=_opt_str(data.get("state", data.get("playerState")), "state"),
        duration=_opt_float(data.get("duration"), "duration"),
        playback_rate=_opt_float(data.get("playbackRate"), "playbackRate"),
        media_key=str(media_key) if media_key is not None else None,
        received_at_ms=float(received_at_ms),
        extra={k: v for k, v in data.items() if k not in _HOST_UPDATE_KEYS},
    )


def parse_party_pausing_value(args: Sequence[Any]) -> bool:
    value = _arg(args, 0)
    if isinstance(value, Mapping):
        value = value.get("value")
    if not isinstance(value, bool):
        raise ValueError("party pausing value must be a boolean")
    return value


def parse_party_pause_intent(args: Sequence[Any]) -> PartyPauseIntent:
    value = _arg(args, 0)
    if isinstance(value, bool):
        return PartyPauseIntent(is_pause=value)
    if not isinstance(value, Mapping) or not isinstance(value.get("isPause"), bool):
        raise ValueError("party pause intent requires boolean 'isPause'")
    user = value.get("user")
    username = user.get("username") if isinstance(user, Mapping) else None
    return PartyPauseIntent(is_pause=value["isPause"], username=_opt_str(username, "username"))


def parse_chat_message(args: Sequence[Any]) -> ChatMessage:
    data = _arg(args, 0)
    if not isinstance(data, Mapping):
        raise ValueError("message must be an object")
    msg = data.get("msg")
    if not isinstance(msg, str):
        raise ValueError("message missing 'msg'")
    user = data.get("user")
    return ChatMessage(
        msg=msg,
        user=dict(user) if isinstance(user, Mapping) else {},
        type=_opt_str(data.get("type"), "type") or "message",
    )


def parse_player_snapshot(data: Mapping[str, Any]) -> PlayerSnapshot:
    if not isinstance(data, Mapping):
        raise ValueError("player poll must return an object")
    return PlayerSnapshot(
        time=_opt_float(data.get("time"), "time"),
        state=_opt_str(data.get("state", data.get("playerState")), "state"),
        duration=_opt_float(data.get("duration"), "duration"),
        playback_rate=_opt_float(data.get("playbackRate"), "playbackRate"),
        extra={k: v for k, v in data.items() if k not in _SNAPSHOT_KEYS},
    )


def snapshot_payload(snapshot: PlayerSnapshot) -> dict[str, Any]:
    payload: dict[str, Any] = dict(snapshot.extra)
    payload["time"] = snapshot.time
    if snapshot.state is not None:
        payload["state"] = snapshot.state
    if snapshot.duration is not None:
        payload["duration"] = snapshot.duration
    if snapshot.playback_rate is not None:
        payload["playbackRate"] = snapshot.playback_rate
    return payload


__all__ = [
    "parse_chat_message",
    "parse_host_swap",
    "parse_host_update",
    "parse_join_result",
    "parse_member",
    "parse_members",
    "parse_party_pause_intent",
    "parse_party_pausing_value",
    "parse_player_snapshot",
    "parse_poll_command_id",
    "parse_poll_result",
    "parse_roster_change",
    "snapshot_payload",
]
