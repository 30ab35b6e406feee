"""Retry policy value object.

Exponential backoff parameters for transient failures (rate limiting,
transport errors, retryable 5xx statuses).

Backoff:
    delay(n) = min(base_delay * multiplier ** (n - 1), max_delay)

    The actual wait is raised to the server's Retry-After hint when that is
    larger, and never drops below the previous wait of the same logical call.
"""

from dataclasses import dataclass, field

from payrix.core.constants import (
    MAX_RETRIES_DEFAULT,
    RETRY_BACKOFF_MULTIPLIER_DEFAULT,
    RETRY_BASE_DELAY_SECONDS_DEFAULT,
    RETRY_MAX_DELAY_SECONDS_DEFAULT,
    RETRYABLE_STATUS_CODES,
)
from payrix.core.errors import ConfigurationError


@dataclass(frozen=True, slots=True, kw_only=True)
class RetryPolicy:
    """Backoff policy for one logical call (value object).

    Attributes:
        max_retries: Retries allowed after the first attempt (0 disables).
        base_delay: First backoff delay in seconds.
        multiplier: Growth factor per retry (>= 1).
        max_delay: Ceiling for the computed backoff in seconds.
        retryable_statuses: HTTP statuses treated as transient.

    Raises:
        ConfigurationError: If any parameter is out of range.
    """

    max_retries: int = MAX_RETRIES_DEFAULT
    base_delay: float = RETRY_BASE_DELAY_SECONDS_DEFAULT
    multiplier: float = RETRY_BACKOFF_MULTIPLIER_DEFAULT
    max_delay: float = RETRY_MAX_DELAY_SECONDS_DEFAULT
    retryable_statuses: frozenset[int] = field(
        default_factory=lambda: RETRYABLE_STATUS_CODES
    )

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ConfigurationError(
                f"max_retries cannot be negative, got {self.max_retries}",
                setting="max_retries",
            )
        if self.base_delay < 0:
            raise ConfigurationError(
                f"base_delay cannot be negative, got {self.base_delay}",
                setting="retry_base_delay_seconds",
            )
        if self.multiplier < 1:
            raise ConfigurationError(
                f"multiplier must be at least 1, got {self.multiplier}",
                setting="retry_backoff_multiplier",
            )
        if self.max_delay < self.base_delay:
            raise ConfigurationError(
                "max_delay cannot be smaller than base_delay",
                setting="retry_max_delay_seconds",
            )

    def backoff(self, retry_number: int) -> float:
        """Return the raw backoff for the n-th retry (1-based)."""
        exponent = max(retry_number - 1, 0)
        return min(self.base_delay * self.multiplier**exponent, self.max_delay)

    def delay_for(
        self,
        retry_number: int,
        *,
        hint: float | None = None,
        previous: float = 0.0,
    ) -> float:
        """Compute the wait before the n-th retry.

        Args:
            retry_number: 1 for the first retry, 2 for the second, ...
            hint: Server-provided Retry-After seconds, if any.
            previous: Wait applied before the previous retry.

        Returns:
            Seconds to wait, never below `hint` or `previous`.
        """
        delay = self.backoff(retry_number)
        if hint is not None and hint > delay:
            delay = hint
        return max(delay, previous)

    def is_retryable_status(self, status_code: int) -> bool:
        return status_code in self.retryable_statuses
