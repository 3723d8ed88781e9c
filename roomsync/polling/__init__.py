from .engine import PollEngine
from .srtt import SrttEstimator
from .periodic import PeriodicTask
from .unacked import UnackedPolls, monotonic_ms
from .status import derive_status, expected_host_time_ms

__all__ = [
    "PeriodicTask",
    "PollEngine",
    "SrttEstimator",
    "UnackedPolls",
    "derive_status",
    "expected_host_time_ms",
    "monotonic_ms",
]
