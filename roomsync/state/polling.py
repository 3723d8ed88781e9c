"""Poll and player snapshot records (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass

from .room import Member


@dataclass(frozen=True, slots=True)
class PollRecord:
    poll_number: int
    time_sent_ms: float


@dataclass(frozen=True, slots=True)
class PollResult:
    users: tuple[Member, ...]
    me: Member | None
    command_id: int | None


@dataclass(frozen=True, slots=True)
class PlayerSnapshot:
    time: float | None
    state: str | None = None
    duration: float | None = None
    playback_rate: float | None = None
    extra: dict[str, Any] = field(default_factory=dict)


__all__ = ["PlayerSnapshot", "PollRecord", "PollResult"]
