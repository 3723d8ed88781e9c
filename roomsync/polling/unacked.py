"""Bounded window of polls awaiting a relay result."""

from __future__ import annotations

import time
import logging
from collections import OrderedDict
from collections.abc import Callable

from roomsync.state import PollRecord

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class UnackedPolls:
    """Track sent polls by poll number until their result arrives.

    Records older than ``max_age_ms`` and, beyond that, the oldest records over
    ``max_pending`` are evicted on every insert.
    """

    def __init__(
        self,
        *,
        max_pending: int,
        max_age_ms: float,
        now_fn: TimeFn | None = None,
    ) -> None:
        self.max_pending = max(1, int(max_pending))
        self.max_age_ms = max(0.0, float(max_age_ms))
        self._now = now_fn or monotonic_ms
        self._records: OrderedDict[int, PollRecord] = OrderedDict()
        self.evicted = 0

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, poll_number: object) -> bool:
        return poll_number in self._records

    def poll_numbers(self) -> list[int]:
        return list(self._records)

    def add(self, poll_number: int) -> PollRecord:
        if poll_number in self._records:
            raise ValueError(f"poll number {poll_number} is already pending")
        now = self._now()
        record = PollRecord(poll_number=poll_number, time_sent_ms=now)
        self._records[poll_number] = record
        self._evict(now)
        return record

    def ack(self, poll_number: int) -> float | None:
        """Remove the record and return the elapsed milliseconds, or None if unknown."""
        record = self._records.pop(poll_number, None)
        if record is None:
            return None
        return max(0.0, self._now() - record.time_sent_ms)

    def discard(self, poll_number: int) -> None:
        self._records.pop(poll_number, None)

    def clear(self) -> None:
        self._records.clear()

    def _evict(self, now: float) -> None:
        records = self._records
        dropped = 0
        if self.max_age_ms > 0:
            cutoff = now - self.max_age_ms
            while records:
                oldest = next(iter(records.values()))
                if oldest.time_sent_ms >= cutoff:
                    break
                records.popitem(last=False)
                dropped += 1
        while len(records) > self.max_pending:
            records.popitem(last=False)
            dropped += 1
        if dropped:
            self.evicted += dropped
            logger.debug("evicted %s unacked polls (pending=%s)", dropped, len(records))


__all__ = ["UnackedPolls", "monotonic_ms"]
