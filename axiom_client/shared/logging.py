"""
Logging Configuration - Shared Layer

The client only emits structlog events; it never configures logging on
import. Applications embedding the client call ``configure_logging`` (or
``update_logging_from_settings``) once at startup.
"""

import logging
import os
import sys
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from axiom_client.shared.consts import EnumEnvironment

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """Read bootstrap logging options from ``LOG_*`` environment variables."""
    return {
        "level": os.environ.get("LOG_LEVEL", "INFO"),
        "file_path": os.environ.get("LOG_FILE_PATH"),
    }


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Route structlog events through the standard ``logging`` module.

    Args:
        level: Log level name, falls back to ``LOG_LEVEL`` then ``INFO``.
        format_string: Accepted for settings compatibility; rendering is
            delegated to structlog's ``ProcessorFormatter``.
        file_path: Optional log file, in addition to stdout.
        environment: JSON rendering is used in production, console otherwise.
    """
    env_config = _get_log_config_from_env()
    log_level = level or env_config["level"] or "INFO"
    log_file = file_path or env_config["file_path"]
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )
    for handler in handlers:
        handler.setFormatter(formatter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)
    logging.getLogger("axiom_client").debug("Logging configured at %s", log_level)


def update_logging_from_settings(settings: Any) -> None:
    """Re-apply logging configuration from an ``AppSettings`` instance."""
    log_level = settings.logging.level
    environment = settings.environment
    configure_logging(
        level=getattr(log_level, "value", log_level),
        format_string=settings.logging.format,
        file_path=settings.logging.file_path,
        environment=getattr(environment, "value", environment),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
