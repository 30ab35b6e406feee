"""Payrix transport core.

Typed, rate-limited, retrying access layer for the Payrix REST API.

Usage:
    from payrix import create_transport
    from payrix.domain.entities import Customer

    async with create_transport() as transport:
        result = await transport.get_one(Customer, "t1_cus_...")
"""

from payrix.core.container import create_transport

__all__ = ["create_transport"]
