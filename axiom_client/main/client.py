"""
Axiom Client - Main Layer

Public surface of the library. Every operation returns a value or raises an
``AxiomError`` subclass. Selection-based calls given an empty tag
selection return an empty result without contacting the service.

Usage::

    async with AxiomClient.from_settings() as client:
        await client.browse_tags(path="Plant/Line1")
        data = await client.get_processed_data(aggregate_interval="15 minutes")
        total = client.totalize(data, "Line1.Flow", "15 minutes")
"""

import asyncio
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Tuple

from axiom_client.application.use_cases.derived_metrics_use_cases import (
    DerivedMetricsUseCase,
)
from axiom_client.application.use_cases.live_feed_use_cases import LiveFeedManager
from axiom_client.application.use_cases.session_manager import SessionManager
from axiom_client.application.use_cases.tag_catalog_use_cases import (
    TagCatalogUseCase,
)
from axiom_client.application.use_cases.tag_data_use_cases import (
    GetCurrentValuesUseCase,
    GetProcessedDataUseCase,
    GetRawDataUseCase,
)
from axiom_client.domain.entities.catalog import TagNode
from axiom_client.domain.entities.live import LiveDataPage
from axiom_client.domain.entities.session import Credentials, SessionOptions
from axiom_client.domain.entities.tag_data import TagDataset
from axiom_client.domain.services import aggregator
from axiom_client.shared import get_logger
from axiom_client.shared.consts import (
    DEFAULT_AGGREGATE_INTERVAL,
    DEFAULT_AGGREGATE_NAME,
    DEFAULT_END_TIME,
    DEFAULT_LIVE_MODE,
    DEFAULT_START_TIME,
)

if TYPE_CHECKING:
    from axiom_client.main.config import AppSettings

logger = get_logger(__name__)


class AxiomClient:
    """Async client for one Axiom web API session."""

    def __init__(
        self,
        session_manager: SessionManager,
        live_feed_manager: LiveFeedManager,
        tag_catalog: TagCatalogUseCase,
        current_values: GetCurrentValuesUseCase,
        raw_data: GetRawDataUseCase,
        processed_data: GetProcessedDataUseCase,
        derived_metrics: DerivedMetricsUseCase,
        credentials: Optional[Credentials] = None,
        session_options: Optional[SessionOptions] = None,
    ):
        self._session = session_manager
        self._live_feed = live_feed_manager
        self._catalog = tag_catalog
        self._current_values = current_values
        self._raw_data = raw_data
        self._processed_data = processed_data
        self._metrics = derived_metrics
        self._credentials = credentials
        self._session_options = session_options

    @classmethod
    def from_settings(cls, settings: Optional["AppSettings"] = None) -> "AxiomClient":
        """Build a client with its own container; settings are loaded when omitted."""
        # Import here to avoid circular imports
        from axiom_client.main.container import build_container

        return build_container(settings).client()

    async def __aenter__(self) -> "AxiomClient":
        if self._session.current_token() is None:
            await self.acquire_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.revoke_session()

    # Session

    async def acquire_session(
        self,
        credentials: Optional[Credentials] = None,
        options: Optional[SessionOptions] = None,
    ) -> str:
        """Authenticate and return the session token.

        Falls back to the credentials and options the client was built with.
        An already active token is replaced.
        """
        credentials = credentials or self._credentials
        if credentials is None:
            raise ValueError("No credentials supplied or configured")
        return await self._session.acquire(
            credentials, options or self._session_options
        )

    async def revoke_session(self) -> None:
        """Revoke the live feed, if any, then the session token.

        Both are cleared locally even if the service fails to confirm.
        """
        try:
            if self._live_feed.current_token() is not None:
                await self._live_feed.revoke()
        finally:
            await self._session.revoke()

    def current_token(self) -> Optional[str]:
        return self._session.current_token()

    def set_default_tags(self, tags: Iterable[str]) -> None:
        self._session.set_default_tags(tags)

    def default_tags(self) -> Tuple[str, ...]:
        return self._session.default_tags()

    # Catalog

    async def browse_tags(self, path: str = "", deep: bool = True) -> List[str]:
        return await self._catalog.browse_tags(path=path, deep=deep)

    async def browse_nodes(self, path: str = "") -> List[TagNode]:
        return await self._catalog.browse_nodes(path=path)

    async def get_tag_properties(self, tags: Optional[Iterable[str]] = None) -> Any:
        return await self._catalog.get_tag_properties(tags)

    async def get_aggregates(self) -> Any:
        return await self._catalog.get_aggregates()

    async def get_qualities(self, qualities: Optional[Iterable[Any]] = None) -> Any:
        return await self._catalog.get_qualities(qualities)

    async def get_time_zones(self, credentials: Optional[Credentials] = None) -> Any:
        return await self._catalog.get_time_zones(credentials or self._credentials)

    # Data

    async def get_current_values(
        self,
        tags: Optional[Iterable[str]] = None,
        *,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> TagDataset:
        return await self._current_values.execute(
            tags, cancel_event=cancel_event, timeout=timeout
        )

    async def get_raw_data(
        self,
        tags: Optional[Iterable[str]] = None,
        *,
        start_time: str = DEFAULT_START_TIME,
        end_time: str = DEFAULT_END_TIME,
        max_size: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> TagDataset:
        return await self._raw_data.execute(
            tags,
            start_time=start_time,
            end_time=end_time,
            max_size=max_size,
            cancel_event=cancel_event,
            timeout=timeout,
        )

    async def get_processed_data(
        self,
        tags: Optional[Iterable[str]] = None,
        *,
        start_time: str = DEFAULT_START_TIME,
        end_time: str = DEFAULT_END_TIME,
        aggregate_name: str = DEFAULT_AGGREGATE_NAME,
        aggregate_interval: str = DEFAULT_AGGREGATE_INTERVAL,
        max_size: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> TagDataset:
        return await self._processed_data.execute(
            tags,
            start_time=start_time,
            end_time=end_time,
            aggregate_name=aggregate_name,
            aggregate_interval=aggregate_interval,
            max_size=max_size,
            cancel_event=cancel_event,
            timeout=timeout,
        )

    # Derived metrics

    @staticmethod
    def totalize(dataset: TagDataset, tag: str, sample_interval: str) -> int:
        return aggregator.totalize(dataset, tag, sample_interval)

    @staticmethod
    def run_time_above_threshold(
        dataset: TagDataset, tag: str, sample_interval: str, threshold: float
    ) -> Decimal:
        return aggregator.run_time_above_threshold(
            dataset, tag, sample_interval, threshold
        )

    async def soft_totalizer(self, tag: str, **query: str) -> int:
        """Fetch processed data for ``tag`` and totalize it.

        ``query`` accepts ``start_time``, ``end_time``, ``aggregate_name`` and
        ``aggregate_interval``.
        """
        return await self._metrics.soft_totalizer(tag, **query)

    async def soft_run_hours(self, tag: str, threshold: float, **query: str) -> Decimal:
        return await self._metrics.soft_run_hours(tag, threshold, **query)

    async def store_latest_values(
        self, tags: Optional[Iterable[str]] = None
    ) -> Dict[str, Any]:
        return await self._metrics.store_latest_values(tags)

    # Live feed

    async def acquire_live_feed(
        self, tags: Optional[Iterable[str]] = None, mode: str = DEFAULT_LIVE_MODE
    ) -> Optional[str]:
        return await self._live_feed.acquire(tags, mode=mode)

    async def poll_live_feed(self, continuation: Optional[str] = None) -> LiveDataPage:
        return await self._live_feed.poll(continuation)

    async def revoke_live_feed(self) -> None:
        await self._live_feed.revoke()
