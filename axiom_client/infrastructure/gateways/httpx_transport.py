"""
Infrastructure Gateway - HTTP Transport

This module implements the transport collaborator used by every Axiom call:
a JSON POST through ``httpx`` whose failures surface as ``TransportError``.
Retries are left to the caller.
"""

from typing import Any, Dict, Optional

import httpx

from axiom_client.domain.entities.errors import ServiceResponseError, TransportError
from axiom_client.domain.gateways.transport import ITransport
from axiom_client.shared import get_logger

logger = get_logger(__name__)


class HttpxTransport(ITransport):
    """JSON-over-HTTP transport backed by ``httpx.AsyncClient``."""

    def __init__(self, timeout: float = 30.0, verify: bool = True):
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            verify: Verify TLS certificates
        """
        self.timeout = timeout
        self.verify = verify

    async def post(self, url: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """POST ``body`` as JSON to ``url`` and return the decoded response."""

        headers = {"Content-Type": "application/json"}
        logger.debug("transport.post.request", url=url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, verify=self.verify
            ) as client:
                response = await client.post(url, json=body, headers=headers)
                response.raise_for_status()

                logger.debug(
                    "transport.post.response",
                    url=url,
                    status_code=response.status_code,
                )
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "transport.post.http_error",
                url=url,
                status_code=e.response.status_code,
                response_text=e.response.text,
            )
            raise TransportError(
                f"HTTP error {e.response.status_code} from {url}",
                status_code=e.response.status_code,
            ) from e

        except httpx.RequestError as e:
            logger.error("transport.post.request_error", url=url, error=str(e))
            raise TransportError(f"Request to {url} failed: {e}") from e

        except ValueError as e:
            logger.error("transport.post.invalid_json", url=url, error=str(e))
            raise ServiceResponseError(f"Invalid JSON received from {url}: {e}") from e
