"""Relay URL and websocket connection option helpers."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlparse, urlunparse

from roomsync.state import RelaySettings
from roomsync.config.relay import RELAY_ENDPOINT_PATH


def _with_endpoint(path: str) -> str:
    base_path = (path or "").rstrip("/")
    if base_path.endswith(RELAY_ENDPOINT_PATH):
        return base_path
    return f"{base_path}{RELAY_ENDPOINT_PATH}"


def build_relay_url(server: str) -> str:
    """Turn a relay server address into the websocket URL of its event endpoint.

    Accepts ws(s)://, http(s):// or bare host[:port] addresses. Bare hosts
    default to a secure scheme.
    """
    server = (server or "").strip()
    if not server:
        raise ValueError("relay server address is empty")

    if server.startswith(("ws://", "wss://", "http://", "https://")):
        parsed = urlparse(server)
        if not parsed.netloc:
            raise ValueError(f"relay server address has no host: {server!r}")
        scheme = {"http": "ws", "https": "wss"}.get(parsed.scheme, parsed.scheme)
        return urlunparse((scheme, parsed.netloc, _with_endpoint(parsed.path), "", parsed.query, ""))

    host = server.rstrip("/")
    return f"wss://{host}{RELAY_ENDPOINT_PATH}"


def get_ws_options(settings: RelaySettings) -> dict[str, Any]:
    return {
        "ping_interval": settings.ping_interval_s if settings.ping_interval_s > 0 else None,
        "ping_timeout": settings.ping_timeout_s if settings.ping_timeout_s > 0 else None,
        "max_size": settings.max_message_bytes,
    }


__all__ = ["build_relay_url", "get_ws_options"]
