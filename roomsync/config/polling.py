"""Client poller and latency estimation configuration."""

from __future__ import annotations

ENV_POLL_INTERVAL_MS = "POLL_INTERVAL_MS"
ENV_POLL_UNACKED_MAX_PENDING = "POLL_UNACKED_MAX_PENDING"
ENV_POLL_UNACKED_MAX_AGE_MS = "POLL_UNACKED_MAX_AGE_MS"
ENV_POLL_SRTT_ALPHA = "POLL_SRTT_ALPHA"
ENV_POLL_STATUS_GOOD_MS = "POLL_STATUS_GOOD_MS"
ENV_POLL_STATUS_OK_MS = "POLL_STATUS_OK_MS"

DEFAULT_POLL_INTERVAL_MS = 1000.0
# A degraded connection stops acking; keep the pending window bounded.
DEFAULT_POLL_UNACKED_MAX_PENDING = 32
DEFAULT_POLL_UNACKED_MAX_AGE_MS = 30_000.0
# Classic TCP estimator weight.
DEFAULT_POLL_SRTT_ALPHA = 0.125
DEFAULT_POLL_STATUS_GOOD_MS = 1000.0
DEFAULT_POLL_STATUS_OK_MS = 3000.0

FIRST_POLL_NUMBER = 1

STATUS_GOOD = "good"
STATUS_OK = "ok"
STATUS_NOT_OK = "notok"
STATUS_UNKNOWN = "unknown"

PLAYER_STATE_PLAYING = "playing"

__all__ = [
    "ENV_POLL_INTERVAL_MS",
    "ENV_POLL_UNACKED_MAX_PENDING",
    "ENV_POLL_UNACKED_MAX_AGE_MS",
    "ENV_POLL_SRTT_ALPHA",
    "ENV_POLL_STATUS_GOOD_MS",
    "ENV_POLL_STATUS_OK_MS",
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_POLL_UNACKED_MAX_PENDING",
    "DEFAULT_POLL_UNACKED_MAX_AGE_MS",
    "DEFAULT_POLL_SRTT_ALPHA",
    "DEFAULT_POLL_STATUS_GOOD_MS",
    "DEFAULT_POLL_STATUS_OK_MS",
    "FIRST_POLL_NUMBER",
    "STATUS_GOOD",
    "STATUS_OK",
    "STATUS_NOT_OK",
    "STATUS_UNKNOWN",
    "PLAYER_STATE_PLAYING",
]
