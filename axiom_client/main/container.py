"""
Dependency container injection module - Main Layer

This module implements the dependency injection container wiring the
transport, session, pagination and use cases behind ``AxiomClient``.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from dependency_injector import containers, providers

from axiom_client.application.use_cases.derived_metrics_use_cases import (
    DerivedMetricsUseCase,
)
from axiom_client.application.use_cases.live_feed_use_cases import LiveFeedManager
from axiom_client.application.use_cases.session_manager import SessionManager
from axiom_client.application.use_cases.tag_catalog_use_cases import (
    TagCatalogUseCase,
)
from axiom_client.application.use_cases.tag_data_use_cases import (
    GetCurrentValuesUseCase,
    GetProcessedDataUseCase,
    GetRawDataUseCase,
    PaginationEngine,
)
from axiom_client.domain.entities.session import Credentials, SessionOptions
from axiom_client.infrastructure.gateways.httpx_transport import HttpxTransport
from axiom_client.main.client import AxiomClient
from axiom_client.shared import get_logger

from .config import AppSettings, get_settings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    config = providers.Configuration()

    # Infrastructure
    transport = providers.Singleton(
        HttpxTransport,
        timeout=config.axiom.timeout,
        verify=config.axiom.verify_tls,
    )

    # Session state, one per container
    session_manager = providers.Singleton(SessionManager, transport=transport)

    live_feed_manager = providers.Singleton(
        LiveFeedManager, session_manager=session_manager
    )

    pagination_engine = providers.Singleton(
        PaginationEngine,
        session_manager=session_manager,
        max_pages=config.axiom.max_pages,
    )

    # Application (use cases)
    get_current_values_use_case = providers.Factory(
        GetCurrentValuesUseCase,
        session_manager=session_manager,
        engine=pagination_engine,
    )

    get_raw_data_use_case = providers.Factory(
        GetRawDataUseCase,
        session_manager=session_manager,
        engine=pagination_engine,
        max_size=config.axiom.max_size,
    )

    get_processed_data_use_case = providers.Factory(
        GetProcessedDataUseCase,
        session_manager=session_manager,
        engine=pagination_engine,
        max_size=config.axiom.max_size,
    )

    tag_catalog_use_case = providers.Factory(
        TagCatalogUseCase,
        session_manager=session_manager,
        transport=transport,
    )

    derived_metrics_use_case = providers.Factory(
        DerivedMetricsUseCase,
        current_values=get_current_values_use_case,
        processed_data=get_processed_data_use_case,
    )

    # Public surface
    credentials = providers.Factory(
        Credentials,
        base_url=config.axiom.base_url,
        username=config.axiom.username,
        password=config.axiom.password,
    )

    session_options = providers.Factory(
        SessionOptions,
        application=config.axiom.application,
        time_zone=config.axiom.time_zone,
    )

    client = providers.Singleton(
        AxiomClient,
        session_manager=session_manager,
        live_feed_manager=live_feed_manager,
        tag_catalog=tag_catalog_use_case,
        current_values=get_current_values_use_case,
        raw_data=get_raw_data_use_case,
        processed_data=get_processed_data_use_case,
        derived_metrics=derived_metrics_use_case,
        credentials=credentials,
        session_options=session_options,
    )


def build_container(settings: Optional[AppSettings] = None) -> AppContainer:
    """Create a container configured from ``settings`` (loaded when omitted)."""

    container = AppContainer()
    container.config.from_pydantic(settings or get_settings())
    return container


# -------------------------
# Global Container Instance
# -------------------------
_app_container: Optional[AppContainer] = None


def init_container(settings: Optional[AppSettings] = None) -> AppContainer:
    """Initialize the global container with application settings."""

    global _app_container

    _app_container = build_container(settings)
    return _app_container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def session_lifespan() -> AsyncIterator[AxiomClient]:
    """
    Session context for the global container.

    Acquires a session with the configured credentials and revokes it, along
    with any live feed, when the block exits.
    """
    client = get_container().client()

    await client.acquire_session()
    logger.info("container.session.opened")
    try:
        yield client
    finally:
        await client.revoke_session()
        logger.info("container.session.closed")
