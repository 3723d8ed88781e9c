"""Cached health of candidate relay servers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Callable, Sequence

from roomsync.state import ServerHealth
from roomsync.collaborators import HealthProbe
from roomsync.polling.unacked import monotonic_ms
from roomsync.config.health import CUSTOM_SERVER_URL

logger = logging.getLogger(__name__)


class ServerHealthCache:
    """Probe results stay cached until the next explicit ``refresh()``."""

    def __init__(
        self,
        servers: Sequence[str],
        probe: HealthProbe,
        *,
        timeout_s: float,
        now_fn: Callable[[], float] | None = None,
    ) -> None:
        self._servers = tuple(servers)
        self._probe = probe
        self._timeout_s = timeout_s
        self._now = now_fn or monotonic_ms
        self._cache: tuple[ServerHealth, ...] | None = None

    @property
    def cached(self) -> tuple[ServerHealth, ...] | None:
        return self._cache

    async def refresh(self) -> tuple[ServerHealth, ...]:
        urls = [url for url in self._servers if url != CUSTOM_SERVER_URL]
        start = self._now()
        results = await asyncio.gather(*(self._probe_one(url, start) for url in urls), return_exceptions=True)

        healthy: list[ServerHealth] = []
        for url, result in zip(urls, results, strict=True):
            if isinstance(result, BaseException):
                logger.info("relay health probe failed url=%s: %r", url, result)
                continue
            healthy.append(result)

        self._cache = tuple(healthy)
        logger.debug("relay health refreshed alive=%s/%s", len(healthy), len(urls))
        return self._cache

    async def get_or_fetch(self) -> tuple[ServerHealth, ...]:
        if self._cache is not None:
            return self._cache
        return await self.refresh()

    async def best_server(self) -> str | None:
        healths = await self.get_or_fetch()
        if not healths:
            return None
        return min(healths, key=lambda health: health.latency_ms).url

    async def _probe_one(self, url: str, start: float) -> ServerHealth:
        data = await asyncio.wait_for(self._probe(url), timeout=self._timeout_s)
        return ServerHealth(
            url=url,
            latency_ms=max(0.0, self._now() - start),
            extra=dict(data) if isinstance(data, Mapping) else {},
        )


__all__ = ["ServerHealthCache"]
