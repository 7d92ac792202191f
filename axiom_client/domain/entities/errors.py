"""
Domain Errors

Typed failures surfaced by every public operation of the client. Nothing in
the client reports failure through a ``None`` or ``NaN`` return value.
"""

from typing import Any, Dict, Optional


class AxiomError(Exception):
    """Base class for client errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(AxiomError):
    """Raised for bad credentials or an absent, revoked or expired session token."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class TransportError(AxiomError):
    """Raised when the HTTP exchange fails; no ``status_code`` on network errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, {"status_code": status_code, **(details or {})})


class ServiceResponseError(AxiomError):
    """Raised when a successful response does not carry the expected payload."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class PaginationExhaustedError(AxiomError):
    """Raised when a paginated query does not complete within the page limit."""

    def __init__(self, max_pages: int, details: Optional[Dict[str, Any]] = None):
        self.max_pages = max_pages
        message = f"Service did not complete the query within {max_pages} pages"
        super().__init__(message, details)


class UnknownTagError(AxiomError):
    """Raised when a tag is not present in a dataset."""

    def __init__(self, tag: str, details: Optional[Dict[str, Any]] = None):
        self.tag = tag
        super().__init__(f"Tag {tag!r} is not present in the dataset", details)


class InvalidIntervalError(AxiomError):
    """Raised when a sampling interval string cannot be converted to hours."""

    def __init__(self, interval: Any, reason: str):
        self.interval = interval
        super().__init__(
            f"Invalid interval {interval!r}: {reason}", {"interval": interval}
        )


class CancellationError(AxiomError):
    """Raised when a fetch is stopped by a cancel signal or timeout."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class LiveFeedNotActiveError(AxiomError):
    """Raised when polling without an active live data token."""

    def __init__(self, message: str = "No active live data token"):
        super().__init__(message)


class InvalidRequestError(AxiomError):
    """Raised when caller arguments cannot form a valid request body."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
