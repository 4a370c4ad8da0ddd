"""
Configuration Module

Provides centralized configuration management for the application.
Supports YAML config files with environment variable overrides.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class ConfigurationError(RuntimeError):
    """Raised when a required configuration value is missing or invalid."""


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries. Override values take precedence.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML configuration {path.name}: {e}") from e


def load_yaml_config(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML files with local override support.

    Loading order:
    1. config.yaml (or config.example.yaml as fallback) as base configuration
    2. config.local.yaml, if present, merged over the base

    Returns:
        Dictionary containing all configuration values
    """
    config_dir = config_dir or Path(__file__).parent
    config_path = config_dir / "config.yaml"

    if not config_path.exists():
        config_path = config_dir / "config.example.yaml"
        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found. Please create {config_dir / 'config.yaml'} "
                f"based on {config_dir / 'config.example.yaml'}"
            )

    base_config = _read_yaml(config_path)

    local_config_path = config_dir / "config.local.yaml"
    if local_config_path.exists():
        return deep_merge(base_config, _read_yaml(local_config_path))

    return base_config


# Load configuration
_config = load_yaml_config()


# ============================================================================
# Database Configuration
# ============================================================================

class DatabaseConfig:
    """Database configuration management"""

    _db_config = _config.get("database", {})

    URL = _db_config.get("url") or None
    HOST = _db_config.get("host") or None
    PORT = _db_config.get("port", 5432)
    USER = _db_config.get("user", "postgres")
    PASSWORD = _db_config.get("password") or None
    NAME = _db_config.get("name", "aidevplatform")

    POOL_SIZE = _db_config.get("pool_size", 10)
    MAX_OVERFLOW = _db_config.get("max_overflow", 10)
    POOL_TIMEOUT = _db_config.get("pool_timeout", 2)
    POOL_RECYCLE = _db_config.get("pool_recycle", 1800)
    CREATE_TABLES = _db_config.get("create_tables", True)
    ECHO = _db_config.get("echo", False)


# ============================================================================
# AI Provider Configuration
# ============================================================================

class AIConfig:
    """Claude API configuration"""

    _ai_config = _config.get("ai", {})

    API_KEY = _ai_config.get("api_key") or None
    MODEL = _ai_config.get("model", "claude-3-5-sonnet-20241022")
    TIMEOUT = _ai_config.get("timeout", 60)


# ============================================================================
# Server Configuration
# ============================================================================

class ServerConfig:
    """Server configuration management"""

    _server_config = _config.get("server", {})

    HOST = _server_config.get("host", "0.0.0.0")
    PORT = _server_config.get("port", 8000)
    RELOAD = _server_config.get("reload", False)
    ENVIRONMENT = _server_config.get("environment", "development")
    CORS_ORIGINS = _server_config.get("cors_origins", ["http://localhost:3000", "http://localhost:5173"])
    DEFAULT_USER_ID = _server_config.get("default_user_id", "demo-user")


# ============================================================================
# Logging Configuration
# ============================================================================

class LogConfig:
    """Log file configuration"""

    _log_config = _config.get("logging", {})

    LEVEL = _log_config.get("level", "INFO")
    DIR = _log_config.get("dir") or None
    FILE_NAME = _log_config.get("file_name", "app")
    BACKUP_COUNT = _log_config.get("backup_count", 30)
    TO_FILE = _log_config.get("to_file", True)


# ============================================================================
# Pydantic Settings
# ============================================================================

class Settings(BaseSettings):
    """
    Application settings.

    Defaults come from the YAML configuration; environment variables
    (DB_HOST, DB_PASSWORD, CLAUDE_API_KEY, ...) take precedence.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "AI Dev Platform"
    version: str = "1.0.0"
    environment: str = ServerConfig.ENVIRONMENT

    # Server
    host: str = ServerConfig.HOST
    port: int = ServerConfig.PORT
    reload: bool = ServerConfig.RELOAD
    cors_origins: List[str] = ServerConfig.CORS_ORIGINS
    default_user_id: str = ServerConfig.DEFAULT_USER_ID

    # Database
    database_url: Optional[str] = DatabaseConfig.URL
    db_host: Optional[str] = DatabaseConfig.HOST
    db_port: int = DatabaseConfig.PORT
    db_name: str = DatabaseConfig.NAME
    db_user: str = DatabaseConfig.USER
    db_password: Optional[str] = DatabaseConfig.PASSWORD
    db_pool_size: int = DatabaseConfig.POOL_SIZE
    db_max_overflow: int = DatabaseConfig.MAX_OVERFLOW
    db_pool_timeout: float = DatabaseConfig.POOL_TIMEOUT
    db_pool_recycle: int = DatabaseConfig.POOL_RECYCLE
    db_create_tables: bool = DatabaseConfig.CREATE_TABLES
    db_echo: bool = DatabaseConfig.ECHO

    # Claude
    claude_api_key: Optional[str] = AIConfig.API_KEY
    claude_model: str = AIConfig.MODEL
    ai_timeout_seconds: float = AIConfig.TIMEOUT

    # Logging
    log_level: str = LogConfig.LEVEL

    def get_async_database_url(self) -> Union[str, URL]:
        """
        Build the async database URL.

        An explicit DATABASE_URL wins; otherwise DB_HOST and DB_PASSWORD
        are required.

        Raises:
            ConfigurationError: If required connection settings are missing
        """
        if self.database_url:
            return self.database_url

        missing = [
            name for name, value in (("DB_HOST", self.db_host), ("DB_PASSWORD", self.db_password))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


__all__ = [
    "ConfigurationError",
    "deep_merge",
    "load_yaml_config",
    "DatabaseConfig",
    "AIConfig",
    "ServerConfig",
    "LogConfig",
    "Settings",
    "get_settings",
]
