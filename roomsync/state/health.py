"""Relay server health records (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(frozen=True, slots=True)
class ServerHealth:
    url: str
    latency_ms: float
    extra: dict[str, Any] = field(default_factory=dict)


__all__ = ["ServerHealth"]
