"""
Application configuration and environment variables.

This module unifies configuration using pydantic-settings.
Variables can come from:
1. .env file
2. System environment variables (have priority)
3. Default values

Naming convention:
- In Python code: snake_case (mongodb_uri)
- In .env or ENV vars: UPPER_CASE (MONGODB_URI)
- Pydantic automatically converts between both
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application configuration.

    All variables can be defined in:
    - .env file: VARIABLE_NAME=value
    - Environment variables: export VARIABLE_NAME=value

    Example:
        # In .env or as environment variable:
        INFRASTRUCTURE_PROVIDER=mongo
        MONGODB_URI=mongodb://localhost:27017/?replicaSet=rs
        TRANSACTIONS_ENABLED=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allows using uppercase or lowercase
        extra="ignore",  # Ignores extra variables in .env
    )

    # ============================================================================
    # PROJECT SETTINGS
    # ============================================================================
    project_name: str = Field(default="txgroups", description="Project name")
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")
    enable_docs: bool = Field(
        default=False, description="Enable API documentation (Swagger/ReDoc)"
    )

    # ============================================================================
    # LOGGING SETTINGS
    # ============================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | trace_id={extra[trace_id]} | {name}:{function}:{line} - {message}",  # noqa: E501
        description="Log format",
    )
    logger_enqueue: bool = Field(
        default=False, description="Enqueue logs using multiprocessing"
    )

    # ============================================================================
    # INFRASTRUCTURE SETTINGS
    # ============================================================================
    infrastructure_provider: str = Field(
        default="local",
        description="Group store provider (local, mongo)",
    )
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/?replicaSet=rs",
        description="MongoDB connection string (transactions need a replica set)",
    )
    mongodb_database: str = Field(default="txgroups", description="Database name")
    mongodb_collection: str = Field(
        default="group", description="Collection holding group documents"
    )
    mongodb_timeout_ms: int = Field(
        default=5000, description="Server selection timeout in milliseconds"
    )

    # ============================================================================
    # GROUP SETTINGS
    # ============================================================================
    max_members: int = Field(
        default=5, ge=1, description="Maximum number of members in a group"
    )
    transactions_enabled: bool = Field(
        default=True,
        description="Run add-member updates inside retried transactions",
    )
    transaction_max_retries: int = Field(
        default=10,
        ge=0,
        description="Retries after the first attempt for transient failures",
    )
    pre_write_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Artificial delay before writing (testing only)",
    )


# ============================================================================
# SINGLETON PATTERN - Global settings instance
# ============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings (LRU cached).

    This function is cached, so the .env file is only read once.
    To refresh the configuration, clear the cache:
        get_settings.cache_clear()

    Returns:
        Settings: Application configuration instance.
    """
    return Settings()


settings = get_settings()
