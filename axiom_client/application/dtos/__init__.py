from .base import RequestDTO, ResponseDTO, build_request, parse_payload
from .catalog_dto import (
    BrowseNodesRequestDTO,
    BrowseNodesResponseDTO,
    BrowseTagsRequestDTO,
    BrowseTagsResponseDTO,
    QualitiesRequestDTO,
    TagPropertiesRequestDTO,
)
from .session_dto import (
    LiveDataPollRequestDTO,
    LiveDataTokenRequestDTO,
    LiveDataTokenResponseDTO,
    UserTokenRequestDTO,
    UserTokenResponseDTO,
)
from .tag_data_dto import (
    CurrentValuesQueryDTO,
    ProcessedDataQueryDTO,
    RawDataQueryDTO,
    SampleDTO,
    TagDataPageDTO,
)

__all__ = [
    "BrowseNodesRequestDTO",
    "BrowseNodesResponseDTO",
    "BrowseTagsRequestDTO",
    "BrowseTagsResponseDTO",
    "CurrentValuesQueryDTO",
    "LiveDataPollRequestDTO",
    "LiveDataTokenRequestDTO",
    "LiveDataTokenResponseDTO",
    "ProcessedDataQueryDTO",
    "QualitiesRequestDTO",
    "RawDataQueryDTO",
    "RequestDTO",
    "ResponseDTO",
    "SampleDTO",
    "TagDataPageDTO",
    "TagPropertiesRequestDTO",
    "UserTokenRequestDTO",
    "UserTokenResponseDTO",
    "build_request",
    "parse_payload",
]
