from __future__ import annotations

from dataclasses import replace

from roomsync.state import AppSettings, PollSettings, HealthSettings, RelaySettings


def make_settings(**relay_overrides: object) -> AppSettings:
    relay = RelaySettings(
        connect_timeout_s=1.0,
        join_timeout_s=0.5,
        ack_timeout_s=0.5,
        disconnect_timeout_s=0.5,
        ping_interval_s=0.0,
        ping_timeout_s=0.0,
        max_message_bytes=1 << 20,
        reconnect=True,
        reconnect_attempts=0,
        reconnect_delay_s=0.001,
        reconnect_delay_max_s=0.005,
    )
    poll = PollSettings(
        interval_ms=10.0,
        unacked_max_pending=32,
        unacked_max_age_ms=30_000.0,
        srtt_alpha=0.125,
        status_good_ms=1000.0,
        status_ok_ms=3000.0,
    )
    return AppSettings(
        relay=replace(relay, **relay_overrides),
        poll=poll,
        health=HealthSettings(probe_timeout_s=0.2),
    )


__all__ = ["make_settings"]
