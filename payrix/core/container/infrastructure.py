"""Infrastructure dependency factories.

Application-scoped singletons:
- Logging (console, human-readable or JSON)
- Rate gate (one sliding window per budget, shared by every transport)

`get_logger()` and `get_rate_gate()` read settings from the environment.
`logger_for(settings)` and `rate_gate_for(settings)` use the given settings
instead; both return the same instance for the same configuration.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from payrix.core.config import Settings, get_settings

if TYPE_CHECKING:
    from payrix.domain.protocols.logger_protocol import LoggerProtocol
    from payrix.domain.protocols.rate_gate_protocol import RateGateProtocol


@lru_cache()
def _console_logger(use_json: bool, level: str) -> "LoggerProtocol":
    from payrix.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(use_json=use_json, level=level)


@lru_cache()
def _sliding_window_gate(limit: int, window_seconds: float) -> "RateGateProtocol":
    from payrix.domain.value_objects import RateWindow
    from payrix.infrastructure.rate_limit import SlidingWindowRateGate

    return SlidingWindowRateGate(
        window=RateWindow(limit=limit, window_seconds=window_seconds)
    )


def logger_for(settings: Settings) -> "LoggerProtocol":
    """Return the logger configured by explicit settings."""
    return _console_logger(settings.log_json, settings.log_level)


def rate_gate_for(settings: Settings) -> "RateGateProtocol":
    """Return the gate for the settings' rate budget.

    Transports built with the same budget share one gate.
    """
    return _sliding_window_gate(
        settings.rate_limit_requests, settings.rate_limit_window_seconds
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Configures structlog on first use; JSON output when PAYRIX_LOG_JSON is
    set, human-readable console output otherwise.

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    return logger_for(get_settings())


@lru_cache()
def get_rate_gate() -> "RateGateProtocol":
    """Get rate gate singleton (app-scoped).

    The upstream budget applies per API key, so every transport created by
    this process shares one gate.

    Returns:
        Rate gate implementing RateGateProtocol.
    """
    return rate_gate_for(get_settings())


def clear_caches() -> None:
    """Drop every cached logger and gate (tests, settings reload)."""
    get_logger.cache_clear()
    get_rate_gate.cache_clear()
    _console_logger.cache_clear()
    _sliding_window_gate.cache_clear()
