"""Cancelable periodic task with a live-reconfigurable interval."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Awaitable

from roomsync.config.polling import DEFAULT_POLL_INTERVAL_MS

logger = logging.getLogger(__name__)


class PeriodicTask:
    def __init__(
        self,
        fn: Callable[[], Awaitable[None]],
        interval_ms_fn: Callable[[], float],
        *,
        name: str = "periodic",
        fallback_interval_ms: float = DEFAULT_POLL_INTERVAL_MS,
    ) -> None:
        self._fn = fn
        self._interval_ms_fn = interval_ms_fn
        # Used whenever the live interval is unusable; tracks the last good value.
        self._last_interval_ms = fallback_interval_ms
        self._name = name
        self._cancelled = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if self._cancelled:
            raise RuntimeError(f"{self._name} task was cancelled")
        if self._task is None:
            self._task = asyncio.create_task(self._loop())
        return self._task

    def cancel(self) -> None:
        """Stop ticking. No tick starts after this returns; repeated calls are no-ops."""
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait_stopped(self) -> None:
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    def _next_delay_s(self) -> float:
        try:
            interval_ms = float(self._interval_ms_fn())
        except Exception:
            logger.exception("%s interval lookup failed; keeping %.0f ms", self._name, self._last_interval_ms)
            return self._last_interval_ms / 1000.0
        if not interval_ms > 0:
            logger.warning("%s interval %r ms is not positive; keeping %.0f ms", self._name, interval_ms, self._last_interval_ms)
            return self._last_interval_ms / 1000.0
        self._last_interval_ms = interval_ms
        return interval_ms / 1000.0

    async def _loop(self) -> None:
        while not self._cancelled:
            try:
                await self._fn()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("%s tick failed", self._name)
            if self._cancelled:
                break
            # Interval is read every tick so setting changes apply without a restart.
            await asyncio.sleep(self._next_delay_s())


__all__ = ["PeriodicTask"]
