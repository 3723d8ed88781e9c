from __future__ import annotations

import pytest

from roomsync.state import HostState
from roomsync.polling import derive_status, expected_host_time_ms


def _status(time_ms: float | None, host: HostState | None, *, now_ms: float = 0.0, one_way_ms: float = 0.0) -> str:
    return derive_status(time_ms, host, now_ms=now_ms, one_way_ms=one_way_ms, good_ms=1000.0, ok_ms=3000.0)


@pytest.mark.parametrize(
    ("time_ms", "expected"),
    [
        (10_000.0, "good"),
        (10_900.0, "good"),
        (12_500.0, "ok"),
        (6_000.0, "notok"),
    ],
)
def test_paused_host_status(time_ms: float, expected: str) -> None:
    host = HostState(time=10_000.0, state="paused")
    assert _status(time_ms, host) == expected


def test_playing_host_time_advances_with_latency() -> None:
    host = HostState(time=10_000.0, state="playing", received_at_ms=1000.0)
    assert expected_host_time_ms(host, now_ms=3000.0, one_way_ms=250.0) == 12_250.0
    assert _status(12_250.0, host, now_ms=3000.0, one_way_ms=250.0) == "good"


def test_playback_rate_scales_elapsed_time() -> None:
    host = HostState(time=0.0, state="playing", playback_rate=2.0, received_at_ms=0.0)
    assert expected_host_time_ms(host, now_ms=1000.0) == 2000.0


def test_unknown_without_host_or_time() -> None:
    assert _status(None, HostState(time=1.0, state="paused")) == "unknown"
    assert _status(1.0, None) == "unknown"
    assert _status(1.0, HostState(time=None, state="paused")) == "unknown"
