"""Configuration module exports (env names, defaults and protocol constants only)."""

from .polling import (
    FIRST_POLL_NUMBER,
    DEFAULT_POLL_INTERVAL_MS,
)
from .relay import (
    RELAY_ENDPOINT_PATH,
    DISCONNECT_REASON_CLIENT,
    DISCONNECT_REASON_TRANSPORT,
)

__all__ = [
    "DEFAULT_POLL_INTERVAL_MS",
    "DISCONNECT_REASON_CLIENT",
    "DISCONNECT_REASON_TRANSPORT",
    "FIRST_POLL_NUMBER",
    "RELAY_ENDPOINT_PATH",
]
