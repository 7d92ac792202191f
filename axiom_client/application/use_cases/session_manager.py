"""
Session Manager - Application Layer

Owns the user token and the default tag selection of one client session.

The token is shared-read, exclusively-written state: ``acquire`` and
``revoke`` hold a lock, readers never do. Callers must not keep the token
value across an ``await``; ``post_authenticated`` reads it immediately
before each request, so a revoke completed while a fetch is in flight makes
that fetch's next request fail with ``AuthenticationError``.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional, Tuple

from axiom_client.application.dtos.base import build_request, parse_payload
from axiom_client.application.dtos.session_dto import (
    UserTokenRequestDTO,
    UserTokenResponseDTO,
)
from axiom_client.domain.entities.errors import (
    AuthenticationError,
    AxiomError,
    ServiceResponseError,
    TransportError,
)
from axiom_client.domain.entities.session import (
    Credentials,
    SessionOptions,
    TokenState,
)
from axiom_client.domain.gateways.transport import ITransport
from axiom_client.shared import AxiomEndpoint, get_logger

logger = get_logger(__name__)

UNAUTHORIZED_STATUS_CODES = frozenset({401, 403})


class SessionManager:
    """Lifecycle of the session token plus the default tag selection."""

    def __init__(self, transport: ITransport):
        self._transport = transport
        self._lock = asyncio.Lock()
        self._token: Optional[str] = None
        self._state = TokenState.ABSENT
        self._credentials: Optional[Credentials] = None
        self._default_tags: Tuple[str, ...] = ()

    @property
    def state(self) -> TokenState:
        return self._state

    @property
    def credentials(self) -> Optional[Credentials]:
        return self._credentials

    async def acquire(
        self, credentials: Credentials, options: Optional[SessionOptions] = None
    ) -> str:
        """
        Authenticate and make the issued token the only active one.

        A token that was already active is replaced atomically. On failure
        the previous state is left untouched.

        Raises:
            AuthenticationError: If the service rejects the credentials, is
                unreachable, or answers without a token.
        """
        options = options or SessionOptions()
        endpoint = AxiomEndpoint.GET_USER_TOKEN.value
        body = build_request(
            UserTokenRequestDTO,
            endpoint,
            application=options.application,
            time_zone=options.time_zone,
            username=credentials.username,
            password=credentials.password,
        ).to_body()

        async with self._lock:
            logger.info(
                "session.acquire.started",
                base_url=credentials.base_url,
                username=credentials.username,
                application=options.application,
            )
            try:
                payload = await self._transport.post(
                    credentials.url_for(endpoint), body
                )
                response = parse_payload(UserTokenResponseDTO, payload, endpoint)
            except TransportError as exc:
                logger.error(
                    "session.acquire.failed",
                    base_url=credentials.base_url,
                    status_code=exc.status_code,
                    error=exc.message,
                )
                raise AuthenticationError(
                    "Authentication request failed",
                    {"status_code": exc.status_code},
                ) from exc
            except ServiceResponseError as exc:
                logger.error(
                    "session.acquire.no_token",
                    base_url=credentials.base_url,
                    error=exc.message,
                )
                raise AuthenticationError("Service did not issue a user token") from exc

            token = response.user_token
            replaced = self._token is not None
            self._token = token
            self._credentials = credentials
            self._state = TokenState.ACTIVE

        logger.info("session.acquire.succeeded", replaced_previous=replaced)
        return token

    async def revoke(self) -> None:
        """
        Invalidate the active token; a no-op when there is none.

        Local state is cleared even when the remote call fails, and the
        remote failure is then re-raised.
        """
        async with self._lock:
            token = self._token
            if token is None:
                logger.debug("session.revoke.skipped", state=self._state.value)
                return

            endpoint = AxiomEndpoint.REVOKE_USER_TOKEN.value
            url = self._credentials.url_for(endpoint)
            try:
                await self._transport.post(url, {"userToken": token})
            except AxiomError as exc:
                logger.warning("session.revoke.remote_failed", error=exc.message)
                raise
            finally:
                self._token = None
                self._state = TokenState.REVOKED

        logger.info("session.revoke.succeeded")

    def current_token(self) -> Optional[str]:
        return self._token

    def require_token(self) -> str:
        """Return the active token or fail with ``AuthenticationError``."""
        token = self._token
        if token is None:
            raise AuthenticationError(
                "No active session token", {"state": self._state.value}
            )
        return token

    def url_for(self, endpoint: str) -> str:
        if self._credentials is None:
            raise AuthenticationError("Session has never been acquired")
        return self._credentials.url_for(endpoint)

    async def post_authenticated(
        self, endpoint: str, body: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        POST ``body`` with the current token as ``userToken``.

        Raises:
            AuthenticationError: Without an active token, or when the
                service answers 401/403.
            TransportError: For any other transport failure.
        """
        token = self.require_token()
        url = self.url_for(endpoint)
        try:
            return await self._transport.post(url, {"userToken": token, **(body or {})})
        except TransportError as exc:
            if exc.status_code in UNAUTHORIZED_STATUS_CODES:
                raise AuthenticationError(
                    "Session token was rejected by the service",
                    {"endpoint": endpoint, "status_code": exc.status_code},
                ) from exc
            raise

    def set_default_tags(self, tags: Iterable[str]) -> None:
        """Replace the default tag selection (duplicates dropped, order kept)."""
        self._default_tags = tuple(dict.fromkeys(tags))
        logger.debug("session.default_tags.updated", count=len(self._default_tags))

    def default_tags(self) -> Tuple[str, ...]:
        return self._default_tags

    def resolve_tags(self, tags: Optional[Iterable[str]] = None) -> List[str]:
        """Explicit tags when given, otherwise the default selection."""
        if tags is None:
            return list(self._default_tags)
        if isinstance(tags, str):
            tags = [tags]
        return list(dict.fromkeys(tags))
