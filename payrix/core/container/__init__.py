"""Container module - Centralized composition root.

Factories that assemble the client from settings:

    from payrix.core.container import create_transport, get_logger

The container is organized into modules:
- infrastructure: Process-wide services (logger, rate gate)
- transport: Transport and dispute workflow factories
"""

from payrix.core.container.infrastructure import (
    get_logger,
    get_rate_gate,
    logger_for,
    rate_gate_for,
)
from payrix.core.container.transport import (
    create_dispute_workflow,
    create_executor,
    create_transport,
)

__all__ = [
    "create_dispute_workflow",
    "create_executor",
    "create_transport",
    "get_logger",
    "get_rate_gate",
    "logger_for",
    "rate_gate_for",
]
