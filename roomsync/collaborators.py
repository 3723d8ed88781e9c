"""Interfaces of the collaborators the sync client drives but does not own."""

from __future__ import annotations

import logging
from typing import Any, Protocol
from collections.abc import Mapping

logger = logging.getLogger(__name__)


class PlayerClient(Protocol):
    async def press_play(self) -> None: ...

    async def press_pause(self) -> None: ...

    async def poll(self) -> Mapping[str, Any]:
        """Sample the player. The mapping must carry ``time`` (ms, or None when idle)."""
        ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


class HealthProbe(Protocol):
    async def __call__(self, url: str) -> Mapping[str, Any]: ...


class LoggingNotifier:
    def notify(self, message: str) -> None:
        logger.info("notification: %s", message)


__all__ = ["HealthProbe", "LoggingNotifier", "Notifier", "PlayerClient"]
