"""
Async client for the Axiom industrial time-series web API.

Sessions, continuation-paginated tag data retrieval, live feeds and
derived metrics (totalizer, run-hours) over the retrieved series.
"""

from axiom_client.domain.entities import (
    AuthenticationError,
    AxiomError,
    CancellationError,
    Credentials,
    InvalidIntervalError,
    InvalidRequestError,
    LiveDataPage,
    LiveFeedNotActiveError,
    PaginationExhaustedError,
    Sample,
    ServiceResponseError,
    SessionOptions,
    TagDataset,
    TagNode,
    TokenState,
    TransportError,
    UnknownTagError,
    extract_values,
)
from axiom_client.domain.services import (
    interval_to_hours,
    run_time_above_threshold,
    totalize,
)
from axiom_client.main.client import AxiomClient

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "AxiomClient",
    "AxiomError",
    "CancellationError",
    "Credentials",
    "InvalidIntervalError",
    "InvalidRequestError",
    "LiveDataPage",
    "LiveFeedNotActiveError",
    "PaginationExhaustedError",
    "Sample",
    "ServiceResponseError",
    "SessionOptions",
    "TagDataset",
    "TagNode",
    "TokenState",
    "TransportError",
    "UnknownTagError",
    "extract_values",
    "interval_to_hours",
    "run_time_above_threshold",
    "totalize",
]
