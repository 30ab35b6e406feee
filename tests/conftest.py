"""Pytest configuration for the Payrix client tests.

This configuration provides:
1. Markers for unit and integration tests
2. Automatic asyncio marking of async tests
3. A fake clock and sleep recorder so rate gate and backoff tests run
   instantly
4. Settings, executor and transport fixtures pointed at a mock base URL
   (HTTP is mocked with pytest-httpx)
"""

import inspect
from typing import Any

import pytest

from payrix.core.config import Settings, get_settings
from payrix.core.container import create_transport
from payrix.core.container.infrastructure import clear_caches
from payrix.domain.value_objects import RateWindow
from payrix.infrastructure.rate_limit import SlidingWindowRateGate

BASE_URL = "https://api.payrix.test"
API_KEY = "test_private_api_key"


# Test helpers


class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    """Async sleep replacement that records waits instead of sleeping.

    When given a FakeClock, each sleep advances it, so code waiting on the
    clock makes progress.
    """

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.calls: list[float] = []
        self._clock = clock

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self._clock is not None:
            self._clock.advance(seconds)


def envelope(
    data: Any = None,
    *,
    has_more: bool | None = None,
    current: int | None = None,
    limit: int | None = None,
    errors: list[dict[str, Any]] | None = None,
    total: int | None = None,
) -> dict[str, Any]:
    """Build a Payrix response document.

    Usage:
        httpx_mock.add_response(json=envelope([{"id": "t1_cus_1"}], has_more=False))
    """
    response: dict[str, Any] = {
        "data": [] if data is None else data,
        "errors": errors or [],
    }
    page: dict[str, Any] = {}
    if current is not None:
        page["current"] = current
    if limit is not None:
        page["limit"] = limit
    if has_more is not None:
        page["hasMore"] = has_more
    details: dict[str, Any] = {}
    if page:
        details["page"] = page
    if total is not None:
        details["totals"] = {"count": total}
    if details:
        response["details"] = details
    return {"response": response}


def make_settings(**overrides: Any) -> Settings:
    """Build Settings without reading the environment's PAYRIX_API_KEY."""
    values: dict[str, Any] = {
        "api_key": API_KEY,
        "base_url": BASE_URL,
        "max_retries": 3,
        "retry_base_delay_seconds": 1.0,
        "retry_max_delay_seconds": 30.0,
        "default_retry_after_seconds": 1.0,
        "rate_limit_requests": 1000,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with no network access")
    config.addinivalue_line(
        "markers", "integration: HTTP-level tests against a mocked Payrix API"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# Fixtures


@pytest.fixture(autouse=True)
def clear_container_caches(monkeypatch):
    """Reset lru_cache singletons so settings changes take effect per test.

    PAYRIX_API_KEY is set so container getters that read settings from the
    environment (get_logger, get_rate_gate) work in every test.
    """
    monkeypatch.setenv("PAYRIX_API_KEY", API_KEY)
    monkeypatch.setenv("PAYRIX_BASE_URL", BASE_URL)
    get_settings.cache_clear()
    clear_caches()
    yield
    get_settings.cache_clear()
    clear_caches()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep_recorder(fake_clock: FakeClock) -> SleepRecorder:
    return SleepRecorder(fake_clock)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def open_gate() -> SlidingWindowRateGate:
    """Rate gate that never blocks in practice."""
    return SlidingWindowRateGate(window=RateWindow(limit=10_000, window_seconds=60))


@pytest.fixture
def transport(settings, open_gate, sleep_recorder):
    """PayrixTransport with instant backoff (per-attempt httpx clients)."""
    return create_transport(settings, rate_gate=open_gate, sleep=sleep_recorder)
