"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from roomsync.state.settings import AppSettings, PollSettings, HealthSettings, RelaySettings
from roomsync.config.health import ENV_HEALTH_PROBE_TIMEOUT_S, DEFAULT_HEALTH_PROBE_TIMEOUT_S
from roomsync.config.polling import (
    ENV_POLL_SRTT_ALPHA,
    ENV_POLL_INTERVAL_MS,
    ENV_POLL_STATUS_OK_MS,
    ENV_POLL_STATUS_GOOD_MS,
    DEFAULT_POLL_SRTT_ALPHA,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_POLL_STATUS_OK_MS,
    ENV_POLL_UNACKED_MAX_AGE_MS,
    DEFAULT_POLL_STATUS_GOOD_MS,
    ENV_POLL_UNACKED_MAX_PENDING,
    DEFAULT_POLL_UNACKED_MAX_AGE_MS,
    DEFAULT_POLL_UNACKED_MAX_PENDING,
)
from roomsync.config.relay import (
    ENV_RELAY_RECONNECT,
    DEFAULT_RELAY_RECONNECT,
    ENV_RELAY_ACK_TIMEOUT_S,
    ENV_RELAY_JOIN_TIMEOUT_S,
    ENV_RELAY_PING_TIMEOUT_S,
    DEFAULT_RELAY_ACK_TIMEOUT_S,
    ENV_RELAY_PING_INTERVAL_S,
    ENV_RELAY_CONNECT_TIMEOUT_S,
    ENV_RELAY_MAX_MESSAGE_BYTES,
    ENV_RELAY_RECONNECT_DELAY_S,
    DEFAULT_RELAY_JOIN_TIMEOUT_S,
    DEFAULT_RELAY_PING_TIMEOUT_S,
    ENV_RELAY_RECONNECT_ATTEMPTS,
    DEFAULT_RELAY_PING_INTERVAL_S,
    ENV_RELAY_DISCONNECT_TIMEOUT_S,
    DEFAULT_RELAY_CONNECT_TIMEOUT_S,
    DEFAULT_RELAY_MAX_MESSAGE_BYTES,
    DEFAULT_RELAY_RECONNECT_DELAY_S,
    ENV_RELAY_RECONNECT_DELAY_MAX_S,
    DEFAULT_RELAY_RECONNECT_ATTEMPTS,
    DEFAULT_RELAY_DISCONNECT_TIMEOUT_S,
    DEFAULT_RELAY_RECONNECT_DELAY_MAX_S,
)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _positive(value: float, default: float) -> float:
    return value if value > 0 else default


def _load_relay_settings() -> RelaySettings:
    delay = _positive(_float_env(ENV_RELAY_RECONNECT_DELAY_S, DEFAULT_RELAY_RECONNECT_DELAY_S), 0.1)
    delay_max = max(delay, _float_env(ENV_RELAY_RECONNECT_DELAY_MAX_S, DEFAULT_RELAY_RECONNECT_DELAY_MAX_S))

    return RelaySettings(
        connect_timeout_s=_positive(
            _float_env(ENV_RELAY_CONNECT_TIMEOUT_S, DEFAULT_RELAY_CONNECT_TIMEOUT_S),
            DEFAULT_RELAY_CONNECT_TIMEOUT_S,
        ),
        join_timeout_s=_positive(
            _float_env(ENV_RELAY_JOIN_TIMEOUT_S, DEFAULT_RELAY_JOIN_TIMEOUT_S),
            DEFAULT_RELAY_JOIN_TIMEOUT_S,
        ),
        ack_timeout_s=_positive(
            _float_env(ENV_RELAY_ACK_TIMEOUT_S, DEFAULT_RELAY_ACK_TIMEOUT_S),
            DEFAULT_RELAY_ACK_TIMEOUT_S,
        ),
        disconnect_timeout_s=_positive(
            _float_env(ENV_RELAY_DISCONNECT_TIMEOUT_S, DEFAULT_RELAY_DISCONNECT_TIMEOUT_S),
            DEFAULT_RELAY_DISCONNECT_TIMEOUT_S,
        ),
        ping_interval_s=_float_env(ENV_RELAY_PING_INTERVAL_S, DEFAULT_RELAY_PING_INTERVAL_S),
        ping_timeout_s=_float_env(ENV_RELAY_PING_TIMEOUT_S, DEFAULT_RELAY_PING_TIMEOUT_S),
        max_message_bytes=max(1, _int_env(ENV_RELAY_MAX_MESSAGE_BYTES, DEFAULT_RELAY_MAX_MESSAGE_BYTES)),
        reconnect=_bool_env(ENV_RELAY_RECONNECT, DEFAULT_RELAY_RECONNECT),
        reconnect_attempts=max(0, _int_env(ENV_RELAY_RECONNECT_ATTEMPTS, DEFAULT_RELAY_RECONNECT_ATTEMPTS)),
        reconnect_delay_s=delay,
        reconnect_delay_max_s=delay_max,
    )


def _load_poll_settings() -> PollSettings:
    alpha = _float_env(ENV_POLL_SRTT_ALPHA, DEFAULT_POLL_SRTT_ALPHA)
    if alpha <= 0 or alpha > 1:
        alpha = DEFAULT_POLL_SRTT_ALPHA

    good_ms = _positive(_float_env(ENV_POLL_STATUS_GOOD_MS, DEFAULT_POLL_STATUS_GOOD_MS), DEFAULT_POLL_STATUS_GOOD_MS)
    ok_ms = max(good_ms, _float_env(ENV_POLL_STATUS_OK_MS, DEFAULT_POLL_STATUS_OK_MS))

    return PollSettings(
        interval_ms=_positive(_float_env(ENV_POLL_INTERVAL_MS, DEFAULT_POLL_INTERVAL_MS), DEFAULT_POLL_INTERVAL_MS),
        unacked_max_pending=max(1, _int_env(ENV_POLL_UNACKED_MAX_PENDING, DEFAULT_POLL_UNACKED_MAX_PENDING)),
        unacked_max_age_ms=_positive(
            _float_env(ENV_POLL_UNACKED_MAX_AGE_MS, DEFAULT_POLL_UNACKED_MAX_AGE_MS),
            DEFAULT_POLL_UNACKED_MAX_AGE_MS,
        ),
        srtt_alpha=alpha,
        status_good_ms=good_ms,
        status_ok_ms=ok_ms,
    )


def _load_health_settings() -> HealthSettings:
    return HealthSettings(
        probe_timeout_s=_positive(
            _float_env(ENV_HEALTH_PROBE_TIMEOUT_S, DEFAULT_HEALTH_PROBE_TIMEOUT_S),
            DEFAULT_HEALTH_PROBE_TIMEOUT_S,
        ),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        relay=_load_relay_settings(),
        poll=_load_poll_settings(),
        health=_load_health_settings(),
    )


__all__ = ["load_settings"]
