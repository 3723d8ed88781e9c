"""Client poller: periodic state snapshots and RTT estimation."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

from roomsync.config.relay import EVENT_POLL
from roomsync.collaborators import PlayerClient
from roomsync.config.polling import FIRST_POLL_NUMBER
from roomsync.state import PollSettings, SessionState
from roomsync.relay.events import snapshot_payload, parse_player_snapshot

from .srtt import SrttEstimator
from .status import derive_status
from .periodic import PeriodicTask
from .unacked import TimeFn, UnackedPolls, monotonic_ms

logger = logging.getLogger(__name__)

EmitFn = Callable[..., Awaitable[bool]]


class PollEngine:
    """Owns the poll number, the unacked window and the SRTT of one session."""

    def __init__(
        self,
        *,
        state: SessionState,
        player: PlayerClient,
        settings: PollSettings,
        interval_ms_fn: Callable[[], float] | None = None,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._state = state
        self._player = player
        self._settings = settings
        self._interval_ms_fn = interval_ms_fn or (lambda: settings.interval_ms)
        self._now = now_fn or monotonic_ms
        self.unacked = UnackedPolls(
            max_pending=settings.unacked_max_pending,
            max_age_ms=settings.unacked_max_age_ms,
            now_fn=self._now,
        )
        self.srtt = SrttEstimator(alpha=settings.srtt_alpha)
        self.poll_number = FIRST_POLL_NUMBER
        self._emit: EmitFn | None = None
        self._task: PeriodicTask | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and self._task.running

    def start(self, emit: EmitFn) -> None:
        self.stop()
        self._emit = emit
        self._task = PeriodicTask(
            self.poll,
            self._interval_ms_fn,
            name="client poller",
            fallback_interval_ms=self._settings.interval_ms,
        )
        self._task.start()

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self._emit = None

    def reset(self) -> None:
        """Drop every pending poll; late results for them are then ignored."""
        self.unacked.clear()

    async def poll(self) -> None:
        snapshot = parse_player_snapshot(await self._player.poll())
        status = derive_status(
            snapshot.time,
            self._state.host_state,
            now_ms=self._now(),
            one_way_ms=self.srtt.one_way_ms,
            good_ms=self._settings.status_good_ms,
            ok_ms=self._settings.status_ok_ms,
        )
        payload = snapshot_payload(snapshot)
        payload["status"] = status
        payload["uuid"] = self._state.uuid
        await self.emit_poll(payload)

    async def emit_poll(self, data: dict[str, Any]) -> int | None:
        emit = self._emit
        if emit is None:
            return None

        poll_number = self.poll_number
        self.poll_number += 1
        # Half the RTT: the receiver adds its own half when computing delays.
        latency = self.srtt.one_way_ms
        # Recorded before the send so a fast result always finds its record.
        self.unacked.add(poll_number)
        sent = await emit(EVENT_POLL, {**data, "commandId": poll_number, "latency": latency})
        if not sent:
            self.unacked.discard(poll_number)
            return None
        return poll_number

    def handle_result(self, command_id: int | None) -> float | None:
        """Match a poll result to its record and fold the RTT sample into SRTT."""
        if command_id is None:
            return None
        sample_ms = self.unacked.ack(command_id)
        if sample_ms is None:
            logger.debug("ignoring poll result for unknown commandId=%s", command_id)
            return None
        return self.srtt.update(sample_ms)


__all__ = ["PollEngine"]
