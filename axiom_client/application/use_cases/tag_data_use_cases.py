"""
Tag Data Use Cases - Application Layer

``PaginationEngine`` turns one logical ``getTagData2`` query into the
sequence of continuation requests needed to drain it, and the use cases
below build the query templates for current, raw and processed data.

A fetch returns the fully merged dataset or raises; fragments gathered
before a failure, a cancellation or the page guard are discarded.
"""

import asyncio
from typing import Iterable, List, Optional

from axiom_client.application.dtos.base import (
    RequestDTO,
    build_request,
    parse_payload,
)
from axiom_client.application.dtos.tag_data_dto import (
    CurrentValuesQueryDTO,
    ProcessedDataQueryDTO,
    RawDataQueryDTO,
    TagDataPageDTO,
)
from axiom_client.application.use_cases.session_manager import SessionManager
from axiom_client.domain.entities.errors import (
    AuthenticationError,
    CancellationError,
    PaginationExhaustedError,
)
from axiom_client.domain.entities.tag_data import TagDataset
from axiom_client.shared import AxiomEndpoint, get_logger
from axiom_client.shared.consts import (
    DEFAULT_AGGREGATE_INTERVAL,
    DEFAULT_AGGREGATE_NAME,
    DEFAULT_END_TIME,
    DEFAULT_MAX_PAGES,
    DEFAULT_MAX_SIZE,
    DEFAULT_START_TIME,
)

logger = get_logger(__name__)

TAG_DATA_ENDPOINT = AxiomEndpoint.GET_TAG_DATA.value


class PaginationEngine:
    """Continuation-driven fetch loop over an authenticated session."""

    def __init__(
        self, session_manager: SessionManager, max_pages: int = DEFAULT_MAX_PAGES
    ):
        """
        Initialize the engine.

        Args:
            session_manager: Source of the token used for every page
            max_pages: Pages allowed before a query is abandoned
        """
        if max_pages <= 0:
            raise ValueError("max_pages must be positive")
        self._session = session_manager
        self.max_pages = max_pages

    async def fetch_all(
        self,
        query: RequestDTO,
        *,
        endpoint: str = TAG_DATA_ENDPOINT,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> TagDataset:
        """
        Request every page of ``query`` and merge them into one dataset.

        Args:
            query: Immutable part of the request body
            endpoint: Endpoint answering with ``{data, continuation}`` pages
            cancel_event: When set, no further page is requested
            timeout: Seconds allowed for the whole fetch

        Raises:
            AuthenticationError: No active token, or the token was rejected
            TransportError: A page request failed
            ServiceResponseError: A page had an unexpected shape
            PaginationExhaustedError: ``max_pages`` pages without completion
            CancellationError: ``cancel_event`` was set or ``timeout`` expired
        """
        if timeout is None:
            return await self._drain(query, endpoint, cancel_event)

        try:
            return await asyncio.wait_for(
                self._drain(query, endpoint, cancel_event), timeout
            )
        except asyncio.TimeoutError as exc:
            logger.warning("pagination.timed_out", endpoint=endpoint, timeout=timeout)
            raise CancellationError(
                f"Fetch did not complete within {timeout} seconds",
                {"endpoint": endpoint, "timeout": timeout},
            ) from exc

    async def _drain(
        self,
        query: RequestDTO,
        endpoint: str,
        cancel_event: Optional[asyncio.Event],
    ) -> TagDataset:
        template = query.to_body()
        dataset = TagDataset()
        continuation = None
        pages = 0
        # Continuation tokens are only valid under the session that issued them.
        session_token = self._session.require_token()

        while True:
            self._raise_if_cancelled(cancel_event, endpoint, pages)
            self._raise_if_session_changed(session_token, endpoint, pages)

            payload = await self._session.post_authenticated(
                endpoint, {**template, "continuation": continuation}
            )
            pages += 1
            self._raise_if_cancelled(cancel_event, endpoint, pages)

            page = parse_payload(TagDataPageDTO, payload, endpoint)
            dataset.merge(page.fragment())
            logger.debug(
                "pagination.page.received",
                endpoint=endpoint,
                page=pages,
                tags=len(page.data),
                last=page.is_last,
            )

            if page.is_last:
                break
            if pages >= self.max_pages:
                logger.error(
                    "pagination.exhausted", endpoint=endpoint, max_pages=self.max_pages
                )
                raise PaginationExhaustedError(self.max_pages, {"endpoint": endpoint})
            continuation = page.continuation

        logger.info(
            "pagination.completed",
            endpoint=endpoint,
            pages=pages,
            tags=len(dataset),
        )
        return dataset

    def _raise_if_session_changed(
        self, session_token: str, endpoint: str, pages: int
    ) -> None:
        if self._session.current_token() != session_token:
            logger.warning("pagination.session_changed", endpoint=endpoint, pages=pages)
            raise AuthenticationError(
                "Session changed while the fetch was in progress",
                {"endpoint": endpoint, "pages": pages},
            )

    @staticmethod
    def _raise_if_cancelled(
        cancel_event: Optional[asyncio.Event], endpoint: str, pages: int
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            logger.info("pagination.cancelled", endpoint=endpoint, pages=pages)
            raise CancellationError(
                "Fetch was cancelled", {"endpoint": endpoint, "pages": pages}
            )


class _TagDataUseCase:
    def __init__(self, session_manager: SessionManager, engine: PaginationEngine):
        self._session = session_manager
        self._engine = engine

    def _resolve(self, tags: Optional[Iterable[str]], operation: str) -> List[str]:
        # Token first: a missing session is an error even for an empty selection.
        self._session.require_token()
        resolved = self._session.resolve_tags(tags)
        if not resolved:
            logger.info("tag_data.skipped_empty_selection", operation=operation)
        return resolved


class GetCurrentValuesUseCase(_TagDataUseCase):
    """Latest value of each tag."""

    async def execute(
        self,
        tags: Optional[Iterable[str]] = None,
        *,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> TagDataset:
        """Empty dataset, and no request, when no tag is selected."""
        resolved = self._resolve(tags, "current_values")
        if not resolved:
            return TagDataset()
        return await self._engine.fetch_all(
            build_request(CurrentValuesQueryDTO, TAG_DATA_ENDPOINT, tags=resolved),
            cancel_event=cancel_event,
            timeout=timeout,
        )


class GetRawDataUseCase(_TagDataUseCase):
    """Every stored sample of each tag within a time window."""

    def __init__(
        self,
        session_manager: SessionManager,
        engine: PaginationEngine,
        max_size: int = DEFAULT_MAX_SIZE,
    ):
        super().__init__(session_manager, engine)
        self._max_size = max_size

    async def execute(
        self,
        tags: Optional[Iterable[str]] = None,
        *,
        start_time: str = DEFAULT_START_TIME,
        end_time: str = DEFAULT_END_TIME,
        max_size: Optional[int] = None,
        cancel_event: Optional[asyncio.Event] = None,
        timeout: Optional[float] = None,
    ) -> TagDataset:
        resolved = self._resolve(tags, "raw_data")
        if not resolved:
            return TagDataset()
        query = build_request(
            RawDataQueryDTO,
            TAG_DATA_ENDPOINT,
            tags=resolved,
            start_time=start_time,
            end_time=end_time,
            max_size=self._max_size if max_size is None else max_size,
        )
        return await self._engine.fetch_all(
            query, cancel_event=cancel_event, timeout=timeout
        )


class GetProcessedDataUseCase(GetRawDataUseCase):
    """Samples aggregated by the service over fixed intervals.

    Missing values are kept as ``None``; use ``TagDataset.fill_missing`` or
    the aggregator to normalise them.
    """

    async def execute(
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
        resolved = self._resolve(tags, "processed_data")
        if not resolved:
            return TagDataset()
        query = build_request(
            ProcessedDataQueryDTO,
            TAG_DATA_ENDPOINT,
            tags=resolved,
            start_time=start_time,
            end_time=end_time,
            aggregate_name=aggregate_name,
            aggregate_interval=aggregate_interval,
            max_size=self._max_size if max_size is None else max_size,
        )
        return await self._engine.fetch_all(
            query, cancel_event=cancel_event, timeout=timeout
        )
