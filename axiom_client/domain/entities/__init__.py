from .catalog import TagNode
from .errors import (
    AuthenticationError,
    AxiomError,
    CancellationError,
    InvalidIntervalError,
    InvalidRequestError,
    LiveFeedNotActiveError,
    PaginationExhaustedError,
    ServiceResponseError,
    TransportError,
    UnknownTagError,
)
from .live import LiveDataPage
from .session import Credentials, SessionOptions, TokenState
from .tag_data import Sample, TagDataset, extract_values

__all__ = [
    "AuthenticationError",
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
]
