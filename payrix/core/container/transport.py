"""Transport factories.

Assemble a PayrixTransport (and the dispute workflow on top of it) from
settings. Callers may pass explicit settings and an httpx client; tests
also inject the sleep function to make backoff instant.

Usage:
    from payrix.core.container import create_transport

    async with create_transport() as transport:
        result = await transport.get_all(Customer)
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import httpx

from payrix.core.config import Settings, get_settings
from payrix.core.container.infrastructure import (
    get_logger,
    logger_for,
    rate_gate_for,
)

if TYPE_CHECKING:
    from payrix.application.workflows.dispute_workflow import DisputeWorkflow
    from payrix.domain.protocols.rate_gate_protocol import RateGateProtocol
    from payrix.infrastructure.http.retry_executor import RetryExecutor
    from payrix.infrastructure.http.transport import PayrixTransport


def create_executor(
    settings: Settings | None = None,
    *,
    rate_gate: "RateGateProtocol | None" = None,
    http_client: httpx.AsyncClient | None = None,
    sleep: Callable[[float], Awaitable[None]] | None = None,
) -> "RetryExecutor":
    """Build a RetryExecutor from settings.

    Args:
        settings: Explicit settings; defaults to get_settings().
        rate_gate: Gate to use; defaults to the shared gate for the
            settings' rate budget.
        http_client: Externally managed httpx client.
        sleep: Backoff sleep function; defaults to asyncio.sleep.
    """
    from payrix.domain.value_objects import RetryPolicy
    from payrix.infrastructure.http import ResponseClassifier, RetryExecutor

    settings = settings or get_settings()
    policy = RetryPolicy(
        max_retries=settings.max_retries,
        base_delay=settings.retry_base_delay_seconds,
        multiplier=settings.retry_backoff_multiplier,
        max_delay=settings.retry_max_delay_seconds,
    )
    classifier = ResponseClassifier(
        default_retry_after=settings.default_retry_after_seconds
    )
    optional = {"sleep": sleep} if sleep is not None else {}
    return RetryExecutor(
        api_key=settings.api_key,
        base_url=settings.base_url_resolved,
        rate_gate=rate_gate or rate_gate_for(settings),
        classifier=classifier,
        policy=policy,
        timeout=settings.timeout_seconds,
        http_client=http_client,
        **optional,
    )


def create_transport(
    settings: Settings | None = None,
    *,
    rate_gate: "RateGateProtocol | None" = None,
    http_client: httpx.AsyncClient | None = None,
    sleep: Callable[[float], Awaitable[None]] | None = None,
) -> "PayrixTransport":
    """Build a PayrixTransport from settings.

    Returns:
        PayrixTransport: Use as an async context manager to share one
        connection pool across calls.
    """
    from payrix.infrastructure.http import PayrixTransport

    settings = settings or get_settings()
    executor = create_executor(
        settings, rate_gate=rate_gate, http_client=http_client, sleep=sleep
    )
    logger_for(settings).debug(
        "payrix_transport_created",
        environment=settings.environment.value,
        base_url=settings.base_url_resolved,
    )
    return PayrixTransport(
        executor=executor,
        page_limit=settings.page_limit,
        max_pages=settings.max_pages,
    )


def create_dispute_workflow(
    transport: "PayrixTransport | None" = None,
    settings: Settings | None = None,
) -> "DisputeWorkflow":
    """Build the chargeback dispute workflow over a transport.

    With explicit settings the logger (and a missing transport) come from
    them; otherwise from the environment.
    """
    from payrix.application.workflows.dispute_workflow import DisputeWorkflow

    logger = logger_for(settings) if settings is not None else get_logger()
    return DisputeWorkflow(
        transport=transport or create_transport(settings), logger=logger
    )
