from .derived_metrics_use_cases import DerivedMetricsUseCase
from .live_feed_use_cases import LiveFeedManager
from .session_manager import SessionManager
from .tag_catalog_use_cases import TagCatalogUseCase
from .tag_data_use_cases import (
    GetCurrentValuesUseCase,
    GetProcessedDataUseCase,
    GetRawDataUseCase,
    PaginationEngine,
)

__all__ = [
    "DerivedMetricsUseCase",
    "GetCurrentValuesUseCase",
    "GetProcessedDataUseCase",
    "GetRawDataUseCase",
    "LiveFeedManager",
    "PaginationEngine",
    "SessionManager",
    "TagCatalogUseCase",
]
