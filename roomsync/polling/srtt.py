"""Smoothed round-trip-time estimate."""

from __future__ import annotations


class SrttEstimator:
    """Exponential moving average of RTT samples in milliseconds.

    The first sample seeds the estimate; later samples move it by ``alpha``.
    """

    def __init__(self, *, alpha: float) -> None:
        if alpha <= 0 or alpha > 1:
            raise ValueError("alpha must be in (0, 1]")
        self.alpha = float(alpha)
        self.value_ms: float = 0.0
        self.samples = 0

    def update(self, sample_ms: float) -> float:
        sample = max(0.0, float(sample_ms))
        if self.samples == 0:
            self.value_ms = sample
        else:
            self.value_ms += self.alpha * (sample - self.value_ms)
        self.samples += 1
        return self.value_ms

    @property
    def one_way_ms(self) -> float:
        return self.value_ms / 2


__all__ = ["SrttEstimator"]
