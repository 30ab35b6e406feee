"""LoggerProtocol definition for structured logging.

This protocol standardizes structured logging across the client while
remaining backend-agnostic. Implementations MUST keep logs structured
(event name + key-value context) and safe (no secrets).

Log Levels:
    - DEBUG: Per-attempt request diagnostics
    - INFO: Normal operational events (listing finished, dispute action sent)
    - WARNING: Throttling, retries, decode anomalies
    - ERROR: Logical operation failed permanently
    - CRITICAL: Unused by the client; available to embedding applications

Security:
    - NEVER log the API key or evidence document contents
    - Truncate response bodies before logging

Usage:
    from payrix.core.container import get_logger
    from payrix.domain.protocols import LoggerProtocol

    logger: LoggerProtocol = get_logger()
    logger.info("payrix_listing_completed", entity="customers", records=42)

    call_logger = logger.bind(operation="get_all", entity="txns")
    call_logger.warning("payrix_retry_scheduled", attempt=2, wait_seconds=20.0)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    All logging calls are structured: event name + key-value context.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level event."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level event."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level event."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level event with optional exception details.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception instance; implementations add
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level event with optional exception details."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        The original logger is unchanged.

        Example:
            call_logger = logger.bind(operation="create", entity="customers")
            call_logger.info("payrix_request_dispatched")
        """
        ...
