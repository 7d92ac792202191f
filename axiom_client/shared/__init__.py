"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides utilities, constants and enums used across
the domain, application and infrastructure layers of the client.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, endpoints)
- Centralizing logging configuration
- Resolving secret files before settings are loaded

It must not depend on Infrastructure or on the composition root.
"""

from .consts import AxiomEndpoint, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "AxiomEndpoint",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
