"""
Configuration Module

Provides centralized configuration management for the application.
"""

from .settings import (
    ConfigurationError,
    load_yaml_config,
    DatabaseConfig,
    AIConfig,
    ServerConfig,
    LogConfig,
    get_settings,
    Settings,
)

from .logging_config import (
    LoggingConfig,
    log_print,
)

__all__ = [
    "ConfigurationError",
    "load_yaml_config",
    "DatabaseConfig",
    "AIConfig",
    "ServerConfig",
    "LogConfig",
    "get_settings",
    "Settings",
    "LoggingConfig",
    "log_print",
]
