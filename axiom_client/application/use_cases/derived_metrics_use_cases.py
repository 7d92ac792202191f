"""
Derived Metrics Use Cases - Application Layer

Convenience operations that fetch data for a single tag and reduce it with
the domain aggregator, using the fetch's aggregate interval as the sampling
interval of the reduction.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from axiom_client.application.use_cases.tag_data_use_cases import (
    GetCurrentValuesUseCase,
    GetProcessedDataUseCase,
)
from axiom_client.domain.services.aggregator import (
    interval_to_hours,
    run_time_above_threshold,
    totalize,
)
from axiom_client.shared import get_logger
from axiom_client.shared.consts import (
    DEFAULT_AGGREGATE_INTERVAL,
    DEFAULT_AGGREGATE_NAME,
    DEFAULT_END_TIME,
    DEFAULT_START_TIME,
)

logger = get_logger(__name__)


class DerivedMetricsUseCase:
    """Totalizer, run-hours and latest-value helpers."""

    def __init__(
        self,
        current_values: GetCurrentValuesUseCase,
        processed_data: GetProcessedDataUseCase,
    ):
        self._current_values = current_values
        self._processed_data = processed_data

    async def soft_totalizer(
        self,
        tag: str,
        *,
        start_time: str = DEFAULT_START_TIME,
        end_time: str = DEFAULT_END_TIME,
        aggregate_name: str = DEFAULT_AGGREGATE_NAME,
        aggregate_interval: str = DEFAULT_AGGREGATE_INTERVAL,
    ) -> int:
        """Totalize ``tag`` over the window from processed data."""
        # Fail on a bad interval before spending requests on it.
        interval_to_hours(aggregate_interval)
        dataset = await self._processed_data.execute(
            [tag],
            start_time=start_time,
            end_time=end_time,
            aggregate_name=aggregate_name,
            aggregate_interval=aggregate_interval,
        )
        total = totalize(dataset, tag, aggregate_interval)
        logger.info("metrics.totalizer.computed", tag=tag, interval=aggregate_interval)
        return total

    async def soft_run_hours(
        self,
        tag: str,
        threshold: float,
        *,
        start_time: str = DEFAULT_START_TIME,
        end_time: str = DEFAULT_END_TIME,
        aggregate_name: str = DEFAULT_AGGREGATE_NAME,
        aggregate_interval: str = DEFAULT_AGGREGATE_INTERVAL,
    ) -> Decimal:
        """Hours ``tag`` spent above ``threshold`` over the window."""
        interval_to_hours(aggregate_interval)
        dataset = await self._processed_data.execute(
            [tag],
            start_time=start_time,
            end_time=end_time,
            aggregate_name=aggregate_name,
            aggregate_interval=aggregate_interval,
        )
        hours = run_time_above_threshold(dataset, tag, aggregate_interval, threshold)
        logger.info(
            "metrics.run_hours.computed",
            tag=tag,
            threshold=threshold,
            interval=aggregate_interval,
        )
        return hours

    async def store_latest_values(
        self, tags: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        """Map each tag to the value of its first current sample."""
        dataset = await self._current_values.execute(tags)
        return {
            tag: samples[0].value
            for tag, samples in dataset.series.items()
            if samples
        }
