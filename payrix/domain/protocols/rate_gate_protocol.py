"""Rate gate protocol (port) for proactive request throttling.

Infrastructure adapters implement this protocol; the retry executor calls
`acquire()` before every physical attempt.

Usage:
    from payrix.domain.protocols import RateGateProtocol

    gate: RateGateProtocol = get_rate_gate()
    await gate.acquire()   # suspends while the window is saturated
    response = await client.send(request)
"""

from typing import Protocol


class RateGateProtocol(Protocol):
    """Protocol for admission control ahead of each HTTP attempt.

    Implementations never fail: saturation only delays the caller. They are
    safe for concurrent callers within one event loop.
    """

    async def acquire(self) -> None:
        """Wait until one more request may be dispatched, then record it."""
        ...

    def current_count(self) -> int:
        """Return the number of admissions inside the trailing window."""
        ...
