"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RelaySettings:
    connect_timeout_s: float
    join_timeout_s: float
    ack_timeout_s: float
    disconnect_timeout_s: float
    ping_interval_s: float
    ping_timeout_s: float
    max_message_bytes: int
    reconnect: bool
    reconnect_attempts: int
    reconnect_delay_s: float
    reconnect_delay_max_s: float


@dataclass(frozen=True, slots=True)
class PollSettings:
    interval_ms: float
    unacked_max_pending: int
    unacked_max_age_ms: float
    srtt_alpha: float
    status_good_ms: float
    status_ok_ms: float


@dataclass(frozen=True, slots=True)
class HealthSettings:
    probe_timeout_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    relay: RelaySettings
    poll: PollSettings
    health: HealthSettings


__all__ = [
    "AppSettings",
    "HealthSettings",
    "PollSettings",
    "RelaySettings",
]
