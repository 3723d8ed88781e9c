"""Coarse sync status derived from a sampled playback time."""

from __future__ import annotations

from roomsync.state import HostState
from roomsync.config.polling import (
    STATUS_OK,
    STATUS_GOOD,
    STATUS_NOT_OK,
    STATUS_UNKNOWN,
    PLAYER_STATE_PLAYING,
)


def expected_host_time_ms(host_state: HostState, *, now_ms: float, one_way_ms: float = 0.0) -> float | None:
    """Estimate where the host's playhead is now from its last published state."""
    if host_state.time is None:
        return None
    if host_state.state != PLAYER_STATE_PLAYING:
        return host_state.time
    rate = host_state.playback_rate if host_state.playback_rate else 1.0
    elapsed = max(0.0, now_ms - host_state.received_at_ms) + max(0.0, one_way_ms)
    return host_state.time + elapsed * rate


def derive_status(
    time_ms: float | None,
    host_state: HostState | None,
    *,
    now_ms: float,
    one_way_ms: float,
    good_ms: float,
    ok_ms: float,
) -> str:
    if time_ms is None or host_state is None:
        return STATUS_UNKNOWN
    expected = expected_host_time_ms(host_state, now_ms=now_ms, one_way_ms=one_way_ms)
    if expected is None:
        return STATUS_UNKNOWN
    diff = abs(time_ms - expected)
    if diff <= good_ms:
        return STATUS_GOOD
    if diff <= ok_ms:
        return STATUS_OK
    return STATUS_NOT_OK


__all__ = ["derive_status", "expected_host_time_ms"]
