"""
Tag Catalog Use Cases - Application Layer

Discovery calls: browsing tags and nodes and reading tag, aggregate,
quality and time zone metadata. ``browse_tags`` also replaces the session's
default tag selection.
"""

from typing import Any, Iterable, List, Optional

from axiom_client.application.dtos.base import build_request, parse_payload
from axiom_client.application.dtos.catalog_dto import (
    BrowseNodesRequestDTO,
    BrowseNodesResponseDTO,
    BrowseTagsRequestDTO,
    BrowseTagsResponseDTO,
    QualitiesRequestDTO,
    TagPropertiesRequestDTO,
)
from axiom_client.application.use_cases.session_manager import SessionManager
from axiom_client.domain.entities.catalog import TagNode
from axiom_client.domain.entities.session import Credentials
from axiom_client.domain.gateways.transport import ITransport
from axiom_client.shared import AxiomEndpoint, get_logger
from axiom_client.shared.consts import DEFAULT_QUALITIES

logger = get_logger(__name__)


class TagCatalogUseCase:
    """Use case for discovering tags and reading their metadata."""

    def __init__(self, session_manager: SessionManager, transport: ITransport):
        self._session = session_manager
        self._transport = transport

    async def browse_tags(self, path: str = "", deep: bool = True) -> List[str]:
        """
        List the tags under ``path`` and make them the default selection.

        Args:
            path: Hierarchy path to browse, "" for the root
            deep: Include tags of every descendant node

        Returns:
            The tags reported by the service, in service order
        """
        endpoint = AxiomEndpoint.BROWSE_TAGS.value
        body = build_request(BrowseTagsRequestDTO, endpoint, deep=deep, path=path)
        payload = await self._session.post_authenticated(endpoint, body.to_body())
        tags = parse_payload(BrowseTagsResponseDTO, payload, endpoint).tags
        self._session.set_default_tags(tags)
        logger.info("catalog.tags.browsed", path=path, deep=deep, count=len(tags))
        return tags

    async def browse_nodes(self, path: str = "") -> List[TagNode]:
        """Return the direct child nodes of ``path``."""
        endpoint = AxiomEndpoint.BROWSE_NODES.value
        body = build_request(BrowseNodesRequestDTO, endpoint, path=path)
        payload = await self._session.post_authenticated(endpoint, body.to_body())
        nodes = parse_payload(BrowseNodesResponseDTO, payload, endpoint).to_domain()
        logger.info("catalog.nodes.browsed", path=path, count=len(nodes))
        return nodes

    async def get_tag_properties(self, tags: Optional[Iterable[str]] = None) -> Any:
        """Properties of ``tags`` (default selection when omitted)."""
        endpoint = AxiomEndpoint.GET_TAG_PROPERTIES.value
        resolved = self._session.resolve_tags(tags)
        body = build_request(TagPropertiesRequestDTO, endpoint, tags=resolved)
        return await self._session.post_authenticated(endpoint, body.to_body())

    async def get_aggregates(self) -> Any:
        """Aggregate functions usable as ``aggregate_name``."""
        return await self._session.post_authenticated(
            AxiomEndpoint.GET_AGGREGATES.value
        )

    async def get_qualities(self, qualities: Optional[Iterable[Any]] = None) -> Any:
        """Describe quality codes."""
        endpoint = AxiomEndpoint.GET_QUALITIES.value
        codes = list(DEFAULT_QUALITIES if qualities is None else qualities)
        body = build_request(QualitiesRequestDTO, endpoint, qualities=codes)
        return await self._session.post_authenticated(endpoint, body.to_body())

    async def get_time_zones(self, credentials: Optional[Credentials] = None) -> Any:
        """Time zones accepted by ``getUserToken``; no session is needed."""
        credentials = credentials or self._session.credentials
        if credentials is None:
            raise ValueError("Credentials are required to locate the service")
        return await self._transport.post(
            credentials.url_for(AxiomEndpoint.GET_TIME_ZONES.value)
        )
