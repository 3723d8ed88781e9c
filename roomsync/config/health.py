"""Relay server health probing configuration."""

from __future__ import annotations

ENV_HEALTH_PROBE_TIMEOUT_S = "HEALTH_PROBE_TIMEOUT_S"

DEFAULT_HEALTH_PROBE_TIMEOUT_S = 2.0

# Placeholder entry in server lists for a user-entered URL; never probed.
CUSTOM_SERVER_URL = "custom"

__all__ = [
    "ENV_HEALTH_PROBE_TIMEOUT_S",
    "DEFAULT_HEALTH_PROBE_TIMEOUT_S",
    "CUSTOM_SERVER_URL",
]
