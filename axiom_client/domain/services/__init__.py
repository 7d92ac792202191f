from .aggregator import (
    interval_to_hours,
    interval_to_seconds,
    run_time_above_threshold,
    totalize,
)

__all__ = [
    "interval_to_hours",
    "interval_to_seconds",
    "run_time_above_threshold",
    "totalize",
]
