"""Catalog DTOs - bodies and responses of the browsing endpoints."""

from typing import Any, Dict, List

from pydantic import Field

from axiom_client.application.dtos.base import RequestDTO, ResponseDTO
from axiom_client.domain.entities.catalog import TagNode


class BrowseTagsRequestDTO(RequestDTO):
    deep: bool = True
    path: str = ""


class BrowseTagsResponseDTO(ResponseDTO):
    tags: List[str] = Field(default_factory=list)


class BrowseNodesRequestDTO(RequestDTO):
    path: str = ""


class BrowseNodesResponseDTO(ResponseDTO):
    nodes: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def to_domain(self) -> List[TagNode]:
        return [
            TagNode(
                key=key,
                full_path=str(node.get("fullPath", key)),
                has_nodes=bool(node.get("hasNodes", False)),
                attributes=dict(node),
            )
            for key, node in self.nodes.items()
        ]


class TagPropertiesRequestDTO(RequestDTO):
    tags: List[str]


class QualitiesRequestDTO(RequestDTO):
    qualities: List[Any]
