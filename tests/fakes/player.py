from __future__ import annotations

from typing import Any


class FakePlayer:
    def __init__(self, snapshot: dict[str, Any] | None = None) -> None:
        self.snapshot: dict[str, Any] = snapshot if snapshot is not None else {"time": 0.0, "state": "paused"}
        self.play_calls = 0
        self.pause_calls = 0
        self.polls = 0

    async def press_play(self) -> None:
        self.play_calls += 1

    async def press_pause(self) -> None:
        self.pause_calls += 1

    async def poll(self) -> dict[str, Any]:
        self.polls += 1
        return dict(self.snapshot)


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


__all__ = ["FakePlayer", "RecordingNotifier"]
