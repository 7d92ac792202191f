"""
Transport Gateway Interface - Domain Layer

This module defines the interface for exchanging JSON with the Axiom web API.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ITransport(ABC):
    """Interface for the HTTP transport collaborator."""

    @abstractmethod
    async def post(self, url: str, body: Optional[Dict[str, Any]] = None) -> Any:
        """
        POST a JSON body and return the parsed JSON response.

        Args:
            url: Absolute endpoint URL
            body: JSON-serialisable request body, or None for an empty body

        Returns:
            The decoded JSON payload

        Raises:
            TransportError: On a non-2xx status or a network failure
        """
        pass
