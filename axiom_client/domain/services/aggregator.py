"""Domain service reducing a tag's samples to derived scalar metrics."""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, List

import numpy as np

from axiom_client.domain.entities.errors import (
    InvalidIntervalError,
    ServiceResponseError,
)
from axiom_client.domain.entities.tag_data import Sample, TagDataset

SECONDS_PER_HOUR = 3600
SECONDS_PER_UNIT = {
    "second": 1,
    "minute": 60,
    "hour": SECONDS_PER_HOUR,
    "day": 24 * SECONDS_PER_HOUR,
    "week": 7 * 24 * SECONDS_PER_HOUR,
}

_INTERVAL_PATTERN = re.compile(r"^(\d+)\s+([A-Za-z]+)$")
_TWO_PLACES = Decimal("0.01")


def interval_to_seconds(interval: Any) -> int:
    """Convert ``"<integer> <unit>"`` (e.g. ``"30 minutes"``) to seconds.

    Units are second, minute, hour, day and week, singular or plural, in any case.

    Raises:
        InvalidIntervalError: If the string is malformed or the unit is unknown.
    """

    if not isinstance(interval, str):
        raise InvalidIntervalError(interval, "expected a string such as '1 hour'")

    match = _INTERVAL_PATTERN.match(interval.strip())
    if not match:
        raise InvalidIntervalError(
            interval, "use the format '<integer> <unit>', e.g. '10 seconds'"
        )

    amount, unit = match.groups()
    unit = unit.lower()
    if unit.endswith("s"):
        unit = unit[:-1]
    if unit not in SECONDS_PER_UNIT:
        raise InvalidIntervalError(
            interval,
            "unit must be second(s), minute(s), hour(s), day(s) or week(s)",
        )
    return int(amount) * SECONDS_PER_UNIT[unit]


def interval_to_hours(interval: Any) -> float:
    """Fractional hours of an interval string, see ``interval_to_seconds``."""
    return interval_to_seconds(interval) / SECONDS_PER_HOUR


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_array(tag: str, samples: List[Sample]) -> np.ndarray:
    # Missing samples count as zero in every derived metric.
    values = [0.0 if sample.is_missing else sample.value for sample in samples]
    if not all(_is_number(value) for value in values):
        raise ServiceResponseError(
            f"Tag {tag!r} holds non-numeric values", {"tag": tag}
        )
    try:
        array = np.asarray(values, dtype=float)
    except OverflowError as exc:
        raise ServiceResponseError(
            f"Tag {tag!r} holds values out of range", {"tag": tag}
        ) from exc
    if not np.isfinite(array).all():
        raise ServiceResponseError(
            f"Tag {tag!r} holds non-finite values", {"tag": tag}
        )
    return array


def totalize(dataset: TagDataset, tag: str, sample_interval: str) -> int:
    """Sum of the tag's values times the interval in hours, floored to an integer.

    Raises:
        InvalidIntervalError: If ``sample_interval`` cannot be parsed.
        UnknownTagError: If ``tag`` is absent from ``dataset``.
        ServiceResponseError: If a value is not a finite number.
    """

    seconds = interval_to_seconds(sample_interval)
    values = _to_array(tag, dataset.samples(tag))
    with np.errstate(over="ignore"):
        total = float(values.sum()) * seconds / SECONDS_PER_HOUR
    if not math.isfinite(total):
        raise ServiceResponseError(
            f"Total of tag {tag!r} is out of range", {"tag": tag}
        )
    return math.floor(total)


def run_time_above_threshold(
    dataset: TagDataset, tag: str, sample_interval: str, threshold: float
) -> Decimal:
    """Hours during which the tag's value strictly exceeded ``threshold``.

    Each sample above the threshold contributes one sampling interval. The
    result is rounded half-up to two decimal places.

    Raises:
        InvalidIntervalError: If ``sample_interval`` cannot be parsed.
        UnknownTagError: If ``tag`` is absent from ``dataset``.
        ServiceResponseError: If a value is not a finite number.
    """

    seconds = interval_to_seconds(sample_interval)
    values = _to_array(tag, dataset.samples(tag))
    count = int(np.count_nonzero(values > threshold))
    hours = Decimal(count * seconds) / Decimal(SECONDS_PER_HOUR)
    return hours.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
