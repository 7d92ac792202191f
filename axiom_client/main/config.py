"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
Settings come from environment variables, a ``.env`` file and defaults;
``AXIOM_*_FILE`` secrets are resolved before the first load.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from axiom_client.shared import EnumEnvironment, EnumLogLevel
from axiom_client.shared.consts import (
    DEFAULT_APPLICATION,
    DEFAULT_MAX_PAGES,
    DEFAULT_MAX_SIZE,
    DEFAULT_TIME_ZONE,
)
from axiom_client.shared.env import load_secret_file_variables


class AxiomSettings(BaseSettings):
    """Axiom web API connection settings."""

    base_url: str = Field(
        default="http://localhost/AxiomWebAPI", description="Web API base URL"
    )
    username: str = Field(default="", description="Account user name")
    password: str = Field(default="", description="Account password", repr=False)
    application: str = Field(
        default=DEFAULT_APPLICATION, description="Application name sent at login"
    )
    time_zone: str = Field(
        default=DEFAULT_TIME_ZONE, description="Time zone for relative times"
    )
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    verify_tls: bool = Field(default=True, description="Verify TLS certificates")
    max_pages: int = Field(
        default=DEFAULT_MAX_PAGES,
        gt=0,
        description="Pages allowed before a paginated query is abandoned",
    )
    max_size: int = Field(
        default=DEFAULT_MAX_SIZE, gt=0, description="Page size hint (maxSize)"
    )

    model_config = SettingsConfigDict(
        env_prefix="AXIOM_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    axiom: AxiomSettings = Field(default_factory=AxiomSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Settings factory.

    Mocked in tests to provide settings for a given environment.
    """
    load_secret_file_variables()
    return AppSettings()
