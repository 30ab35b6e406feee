"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from
environment variables prefixed with PAYRIX_ (and an optional .env file).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Upstream facts live in payrix.core.constants, not here

Usage:
    from payrix.core.config import get_settings

    settings = get_settings()
    settings.base_url_resolved    # https://test-api.payrix.com/
    settings.max_retries          # 3
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from payrix.core.constants import (
    MAX_PAGES_DEFAULT,
    MAX_RETRIES_DEFAULT,
    PAGE_LIMIT_MAX,
    RATE_LIMIT_REQUESTS_DEFAULT,
    RATE_LIMIT_WINDOW_SECONDS_DEFAULT,
    REQUEST_TIMEOUT_DEFAULT,
    RETRY_BACKOFF_MULTIPLIER_DEFAULT,
    RETRY_BASE_DELAY_SECONDS_DEFAULT,
    RETRY_MAX_DELAY_SECONDS_DEFAULT,
)
from payrix.core.enums import Environment


class Settings(BaseSettings):
    """
    Payrix client settings (flat structure).

    Configuration precedence:
        1. Environment variables (PAYRIX_API_KEY, PAYRIX_ENVIRONMENT, ...)
        2. .env file in the working directory
        3. Default values (only for non-sensitive config)
    """

    # Credentials and endpoint
    api_key: str = Field(
        ...,
        description="Private API key sent in the APIKEY header",
        repr=False,
    )
    environment: Environment = Field(
        default=Environment.TEST,
        description="Upstream deployment (test, production)",
    )
    base_url: str | None = Field(
        default=None,
        description="Explicit base URL override (mock servers, proxies)",
    )
    timeout_seconds: float = Field(
        default=REQUEST_TIMEOUT_DEFAULT,
        description="Timeout for a single HTTP attempt",
    )

    # Retries
    max_retries: int = Field(
        default=MAX_RETRIES_DEFAULT,
        description="Retries after the first attempt for transient failures",
    )
    retry_base_delay_seconds: float = Field(
        default=RETRY_BASE_DELAY_SECONDS_DEFAULT,
        description="First backoff delay",
    )
    retry_backoff_multiplier: float = Field(
        default=RETRY_BACKOFF_MULTIPLIER_DEFAULT,
        description="Backoff growth factor",
    )
    retry_max_delay_seconds: float = Field(
        default=RETRY_MAX_DELAY_SECONDS_DEFAULT,
        description="Ceiling for a single computed backoff",
    )
    default_retry_after_seconds: float = Field(
        default=RETRY_BASE_DELAY_SECONDS_DEFAULT,
        description="Wait hint used when throttling carries no Retry-After",
    )

    # Rate limiting
    rate_limit_requests: int = Field(
        default=RATE_LIMIT_REQUESTS_DEFAULT,
        description="Requests admitted per window",
    )
    rate_limit_window_seconds: float = Field(
        default=RATE_LIMIT_WINDOW_SECONDS_DEFAULT,
        description="Rate limit window length",
    )

    # Pagination
    page_limit: int = Field(
        default=PAGE_LIMIT_MAX,
        description="Page size for listings (1-100)",
    )
    max_pages: int = Field(
        default=MAX_PAGES_DEFAULT,
        description="Upper bound on pages fetched by one listing",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON instead of the console format",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAYRIX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """
        Reject empty API keys.

        Raises:
            ValueError: If the key is empty or whitespace.
        """
        if not v.strip():
            raise ValueError("api_key cannot be empty")
        return v.strip()

    @field_validator("page_limit")
    @classmethod
    def validate_page_limit(cls, v: int) -> int:
        """
        Validate page size against the upstream maximum.

        Raises:
            ValueError: If page_limit is not between 1 and 100.
        """
        if not 1 <= v <= PAGE_LIMIT_MAX:
            raise ValueError(f"page_limit must be between 1 and {PAGE_LIMIT_MAX}")
        return v

    @field_validator(
        "rate_limit_requests",
        "rate_limit_window_seconds",
        "timeout_seconds",
        "max_pages",
        "retry_backoff_multiplier",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """
        Validate values that must be strictly positive.

        Raises:
            ValueError: If the value is zero or negative.
        """
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator(
        "max_retries",
        "retry_base_delay_seconds",
        "retry_max_delay_seconds",
        "default_retry_after_seconds",
    )
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        """
        Validate values that may be zero but not negative.

        Raises:
            ValueError: If the value is negative.
        """
        if v < 0:
            raise ValueError("value cannot be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize and validate the log level name.

        Raises:
            ValueError: If the level is unknown.
        """
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def base_url_resolved(self) -> str:
        """Return the override URL if set, else the environment's URL."""
        return self.base_url or self.environment.base_url

    @property
    def is_production(self) -> bool:
        """Check if the client targets the production deployment."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()  # type: ignore[call-arg]  # Pydantic Settings loads from env
