"""Rate window value object.

Immutable budget for the sliding-window rate gate: at most `limit` requests
in any trailing interval of `window_seconds`.

Usage:
    from payrix.domain.value_objects import RateWindow

    window = RateWindow(limit=100, window_seconds=60.0)
"""

from dataclasses import dataclass

from payrix.core.constants import (
    RATE_LIMIT_REQUESTS_DEFAULT,
    RATE_LIMIT_WINDOW_SECONDS_DEFAULT,
)
from payrix.core.errors import ConfigurationError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateWindow:
    """Sliding rate window (value object).

    Attributes:
        limit: Maximum admitted requests per window. Must be positive.
        window_seconds: Window length in seconds. Must be positive.

    Raises:
        ConfigurationError: If limit or window_seconds is not positive.
    """

    limit: int = RATE_LIMIT_REQUESTS_DEFAULT
    window_seconds: float = RATE_LIMIT_WINDOW_SECONDS_DEFAULT

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or self.limit <= 0:
            raise ConfigurationError(
                f"Rate limit must be positive, got {self.limit}",
                setting="rate_limit_requests",
            )
        if self.window_seconds <= 0:
            raise ConfigurationError(
                f"Rate window must be positive, got {self.window_seconds}",
                setting="rate_limit_window_seconds",
            )
