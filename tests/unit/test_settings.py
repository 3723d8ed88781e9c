from __future__ import annotations

import logging

import pytest

from roomsync.runtime import load_settings, configure_logging


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("RELAY_JOIN_TIMEOUT_S", "POLL_INTERVAL_MS", "POLL_SRTT_ALPHA", "RELAY_RECONNECT"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.relay.join_timeout_s == 10.0
    assert settings.relay.reconnect is True
    assert settings.poll.interval_ms == 1000.0
    assert settings.poll.srtt_alpha == 0.125
    assert settings.poll.unacked_max_pending == 32
    assert settings.health.probe_timeout_s == 2.0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELAY_JOIN_TIMEOUT_S", "3.5")
    monkeypatch.setenv("RELAY_RECONNECT", "off")
    monkeypatch.setenv("POLL_INTERVAL_MS", "250")
    monkeypatch.setenv("POLL_UNACKED_MAX_PENDING", "8")

    settings = load_settings()

    assert settings.relay.join_timeout_s == 3.5
    assert settings.relay.reconnect is False
    assert settings.poll.interval_ms == 250.0
    assert settings.poll.unacked_max_pending == 8


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("POLL_SRTT_ALPHA", "0"),
        ("POLL_SRTT_ALPHA", "1.5"),
        ("POLL_INTERVAL_MS", "-5"),
        ("POLL_INTERVAL_MS", "fast"),
    ],
)
def test_invalid_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    settings = load_settings()
    assert settings.poll.srtt_alpha == 0.125
    assert settings.poll.interval_ms == 1000.0


def test_status_ok_never_below_good(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLL_STATUS_GOOD_MS", "2000")
    monkeypatch.setenv("POLL_STATUS_OK_MS", "500")
    settings = load_settings()
    assert settings.poll.status_ok_ms == 2000.0


def test_configure_logging_tames_websockets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SHOW_WEBSOCKETS_LOGS", raising=False)
    configure_logging()
    assert logging.getLogger("websockets").level == logging.WARNING
