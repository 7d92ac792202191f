"""
Live Feed Use Cases - Application Layer

The live feed is a push-style subscription layered on the session: a live
data token is acquired for a set of tags and then polled. Its token follows
the same ownership rules as the session token and is bound to the session
token it was acquired under.
"""

import asyncio
from typing import Iterable, Optional

from axiom_client.application.dtos.base import build_request, parse_payload
from axiom_client.application.dtos.session_dto import (
    LiveDataPollRequestDTO,
    LiveDataTokenRequestDTO,
    LiveDataTokenResponseDTO,
)
from axiom_client.application.dtos.tag_data_dto import TagDataPageDTO
from axiom_client.application.use_cases.session_manager import SessionManager
from axiom_client.domain.entities.errors import (
    AuthenticationError,
    AxiomError,
    LiveFeedNotActiveError,
)
from axiom_client.domain.entities.live import LiveDataPage
from axiom_client.domain.entities.session import TokenState
from axiom_client.domain.entities.tag_data import TagDataset
from axiom_client.shared import AxiomEndpoint, get_logger
from axiom_client.shared.consts import DEFAULT_LIVE_MODE

logger = get_logger(__name__)


class LiveFeedManager:
    """State machine {absent, active, revoked} for the live data token."""

    def __init__(self, session_manager: SessionManager):
        self._session = session_manager
        self._lock = asyncio.Lock()
        self._token: Optional[str] = None
        self._session_token: Optional[str] = None
        self._state = TokenState.ABSENT

    @property
    def state(self) -> TokenState:
        return self._state

    def current_token(self) -> Optional[str]:
        return self._token

    async def acquire(
        self, tags: Optional[Iterable[str]] = None, mode: str = DEFAULT_LIVE_MODE
    ) -> Optional[str]:
        """
        Subscribe to ``tags`` (default selection when omitted).

        A feed that is already active is revoked first.

        Returns:
            The live data token, or None without contacting the service when
            no tag is selected.

        Raises:
            AuthenticationError: Without an active session token.
        """
        self._session.require_token()
        resolved = self._session.resolve_tags(tags)
        if not resolved:
            logger.info("live_feed.acquire.skipped_empty_selection")
            return None

        endpoint = AxiomEndpoint.GET_LIVE_DATA_TOKEN.value
        body = build_request(
            LiveDataTokenRequestDTO, endpoint, tags=resolved, mode=mode
        ).to_body()
        async with self._lock:
            if self._token is not None:
                logger.info("live_feed.acquire.replacing_previous")
                await self._release()
            session_token = self._session.require_token()
            payload = await self._session.post_authenticated(endpoint, body)
            token = parse_payload(LiveDataTokenResponseDTO, payload, endpoint)
            self._token = token.live_data_token
            self._session_token = session_token
            self._state = TokenState.ACTIVE

        logger.info("live_feed.acquire.succeeded", tags=len(resolved), mode=mode)
        return self._token

    async def poll(self, continuation: Optional[str] = None) -> LiveDataPage:
        """
        Fetch values pushed since the previous poll.

        Pass the ``continuation`` of the previous page to resume from it.

        Raises:
            LiveFeedNotActiveError: No live data token is active.
            AuthenticationError: The session token changed since ``acquire``.
        """
        token = self._token
        if token is None:
            raise LiveFeedNotActiveError()
        if self._session.current_token() != self._session_token:
            self._clear()
            raise AuthenticationError(
                "Live data token belongs to a session that is no longer active"
            )

        endpoint = AxiomEndpoint.GET_LIVE_DATA.value
        body = build_request(
            LiveDataPollRequestDTO,
            endpoint,
            live_data_token=token,
            continuation=continuation,
        ).to_body()
        payload = await self._session.post_authenticated(endpoint, body)
        page = parse_payload(TagDataPageDTO, payload, endpoint)

        dataset = TagDataset()
        dataset.merge(page.fragment())
        logger.debug("live_feed.poll.received", tags=len(dataset))
        return LiveDataPage(dataset=dataset, continuation=page.continuation)

    async def revoke(self) -> None:
        """Release the live data token; local state is always cleared."""
        async with self._lock:
            if self._token is None:
                logger.debug("live_feed.revoke.skipped", state=self._state.value)
                return
            await self._release()

        logger.info("live_feed.revoke.succeeded")

    async def _release(self) -> None:
        # Caller holds the lock and an active token.
        if self._session.current_token() != self._session_token:
            logger.info("live_feed.revoke.session_gone")
            self._clear()
            return
        try:
            await self._session.post_authenticated(
                AxiomEndpoint.REVOKE_LIVE_DATA_TOKEN.value,
                {"liveDataToken": self._token},
            )
        except AxiomError as exc:
            logger.warning("live_feed.revoke.remote_failed", error=exc.message)
            raise
        finally:
            self._clear()

    def _clear(self) -> None:
        self._token = None
        self._session_token = None
        self._state = TokenState.REVOKED
