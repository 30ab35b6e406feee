"""Sliding-window rate gate implementing RateGateProtocol.

Keeps the dispatch timestamps of the trailing window in a deque. Before every
physical attempt the caller awaits `acquire()`, which evicts expired
timestamps, admits the request if the window has room and otherwise sleeps
until the oldest timestamp leaves the window.

Concurrency:
    One asyncio.Lock guards the check-and-record step. It is released before
    sleeping, so waiting callers never hold it and the network call never
    runs under it. A caller cancelled while waiting has recorded nothing.
    The lock is created per event loop, so the process-wide gate can serve
    successive `asyncio.run` calls; its timestamps carry over between them.

Usage:
    from payrix.infrastructure.rate_limit import SlidingWindowRateGate

    gate = SlidingWindowRateGate(window=RateWindow(limit=100, window_seconds=60))
    await gate.acquire()
"""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable

import structlog

from payrix.domain.value_objects import RateWindow


class SlidingWindowRateGate:
    """Proactive admission control for outgoing requests.

    Attributes:
        limit: Maximum admissions per window.
        window_seconds: Window length in seconds.

    Args:
        window: Rate budget. Defaults to the upstream's documented 100/60s.
        clock: Monotonic clock returning seconds.
        sleep: Coroutine function used to wait.
    """

    def __init__(
        self,
        *,
        window: RateWindow | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._window = window or RateWindow()
        self._clock = clock
        self._sleep = sleep
        self._timestamps: deque[float] = deque()
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None
        self._logger = structlog.get_logger("payrix_rate_gate")

    @property
    def limit(self) -> int:
        return self._window.limit

    @property
    def window_seconds(self) -> float:
        return self._window.window_seconds

    def _loop_lock(self) -> asyncio.Lock:
        # asyncio.Lock binds to one loop; a shared gate may outlive it.
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def _evict(self, now: float) -> None:
        horizon = now - self._window.window_seconds
        while self._timestamps and self._timestamps[0] <= horizon:
            self._timestamps.popleft()

    async def acquire(self) -> None:
        """Suspend until one more dispatch fits the window, then record it."""
        while True:
            async with self._loop_lock():
                now = self._clock()
                self._evict(now)
                if len(self._timestamps) < self._window.limit:
                    self._timestamps.append(now)
                    return
                wait = self._timestamps[0] + self._window.window_seconds - now

            self._logger.debug(
                "payrix_rate_gate_waiting",
                wait_seconds=round(wait, 3),
                limit=self._window.limit,
                window_seconds=self._window.window_seconds,
            )
            await self._sleep(max(wait, 0.0))

    def current_count(self) -> int:
        """Return admissions inside the trailing window as of now."""
        self._evict(self._clock())
        return len(self._timestamps)
