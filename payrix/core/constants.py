"""Centralized constants for internal implementation details.

This module contains constants that are upstream facts or internal limits,
NOT deployment-specific configuration. For tunable settings use
`payrix.core.config` instead.

Categories:
- Endpoints: Base URLs of the two upstream deployments
- Headers: Credential and search header names
- Pagination: Upstream page size limits and traversal safeguards
- Throttling: Documented rate budget and retry defaults
- Limits: Truncation and validation limits

Example:
    >>> from payrix.core.constants import API_KEY_HEADER
    >>> headers = {API_KEY_HEADER: api_key}
"""

# =============================================================================
# Endpoints
# =============================================================================

TEST_BASE_URL: str = "https://test-api.payrix.com/"
"""Sandbox deployment base URL."""

PRODUCTION_BASE_URL: str = "https://api.payrix.com/"
"""Production deployment base URL."""


# =============================================================================
# Headers
# =============================================================================

API_KEY_HEADER: str = "APIKEY"
"""Header carrying the private API key on every request."""

SEARCH_HEADER: str = "search"
"""Header carrying search expressions (field[operator]=value&...)."""


# =============================================================================
# Pagination
# =============================================================================

PAGE_LIMIT_MAX: int = 100
"""Largest page size the upstream accepts."""

MAX_PAGES_DEFAULT: int = 1000
"""Upper bound on pages fetched by one get_all traversal."""


# =============================================================================
# Throttling and Retries
# =============================================================================

RATE_LIMIT_REQUESTS_DEFAULT: int = 100
"""Documented request budget per window."""

RATE_LIMIT_WINDOW_SECONDS_DEFAULT: float = 60.0
"""Documented rate limit window length in seconds."""

MAX_RETRIES_DEFAULT: int = 3
"""Retries allowed after the first attempt of a logical call."""

RETRY_BASE_DELAY_SECONDS_DEFAULT: float = 10.0
"""First backoff delay (the upstream asks clients to wait 10 seconds)."""

RETRY_BACKOFF_MULTIPLIER_DEFAULT: float = 2.0
"""Growth factor applied to the backoff delay after each retry."""

RETRY_MAX_DELAY_SECONDS_DEFAULT: float = 300.0
"""Ceiling for a single computed backoff delay."""

RATE_LIMIT_BODY_ERROR_CODE: str = "C_RATE_LIMIT_EXCEEDED_TEMP_BLOCK"
"""Error code the upstream embeds in 200 responses when throttling."""

RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({500, 502, 503, 504})
"""Server error statuses treated as transient."""


# =============================================================================
# Timeouts
# =============================================================================

REQUEST_TIMEOUT_DEFAULT: float = 30.0
"""Default timeout for a single HTTP attempt in seconds."""


# =============================================================================
# Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length for response body excerpts in errors and logs."""

RAW_VALUE_MAX_LENGTH: int = 200
"""Maximum length of a raw value repr carried by decode diagnostics."""

IDENTIFIER_MAX_LENGTH: int = 50
"""Longest identifier accepted; upstream id length varies by endpoint."""
