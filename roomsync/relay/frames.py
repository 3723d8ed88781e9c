"""Relay frame encoding and validation."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

from roomsync.config.relay import (
    FRAME_KEY_ARGS,
    FRAME_KEY_TYPE,
    FRAME_TYPE_ACK,
    FRAME_KEY_EVENT,
    FRAME_KEY_ACK_ID,
    FRAME_TYPE_EVENT,
)


@dataclass(frozen=True, slots=True)
class RelayFrame:
    type: str
    event: str | None
    args: tuple[Any, ...]
    ack_id: int | None = None


def build_event_frame(event: str, args: tuple[Any, ...] | list[Any], ack_id: int | None = None) -> dict[str, Any]:
    frame: dict[str, Any] = {
        FRAME_KEY_TYPE: FRAME_TYPE_EVENT,
        FRAME_KEY_EVENT: event,
        FRAME_KEY_ARGS: list(args),
    }
    if ack_id is not None:
        frame[FRAME_KEY_ACK_ID] = ack_id
    return frame


def encode_frame(frame: dict[str, Any]) -> str:
    return orjson.dumps(frame).decode("utf-8")


def _parse_ack_id(value: Any) -> int | None:
    if value is None:
        return None
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("frame 'ack_id' must be an integer")
    return value


def parse_relay_frame(raw: str | bytes) -> RelayFrame:
    try:
        msg = orjson.loads(raw)
    except Exception as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("frame must be a JSON object")

    frame_type = msg.get(FRAME_KEY_TYPE)
    if frame_type not in {FRAME_TYPE_EVENT, FRAME_TYPE_ACK}:
        raise ValueError(f"unsupported frame type: {frame_type!r}")

    args = msg.get(FRAME_KEY_ARGS, [])
    if args is None:
        args = []
    if not isinstance(args, list):
        raise ValueError("frame 'args' must be an array")

    ack_id = _parse_ack_id(msg.get(FRAME_KEY_ACK_ID))

    if frame_type == FRAME_TYPE_ACK:
        if ack_id is None:
            raise ValueError("ack frame missing 'ack_id'")
        return RelayFrame(type=FRAME_TYPE_ACK, event=None, args=tuple(args), ack_id=ack_id)

    event = msg.get(FRAME_KEY_EVENT)
    if not isinstance(event, str) or not event.strip():
        raise ValueError("event frame missing non-empty 'event'")

    return RelayFrame(type=FRAME_TYPE_EVENT, event=event.strip(), args=tuple(args), ack_id=ack_id)


__all__ = ["RelayFrame", "build_event_frame", "encode_frame", "parse_relay_frame"]
