"""Shared error types for the room sync client."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RelayConnectionError(ConnectionError):
    """Raised when the relay connection cannot be established or drops under a pending request."""

    url: str
    reason: str


@dataclass(frozen=True, slots=True)
class JoinRejectedError(Exception):
    """Raised when the relay answers a join with a falsy result."""

    room: str
    details: Any = None


@dataclass(frozen=True, slots=True)
class JoinTimeoutError(TimeoutError):
    room: str
    timeout_s: float


@dataclass(frozen=True, slots=True)
class AckTimeoutError(TimeoutError):
    event: str
    timeout_s: float


@dataclass(frozen=True, slots=True)
class DisconnectTimeoutError(TimeoutError):
    """Raised when the relay never confirms a requested disconnect."""

    url: str
    timeout_s: float


__all__ = [
    "AckTimeoutError",
    "DisconnectTimeoutError",
    "JoinRejectedError",
    "JoinTimeoutError",
    "RelayConnectionError",
]
